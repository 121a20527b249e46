"""
naceform — NACE taxonomy to conditional questionnaire compiler

Turns the 4-level NACE classification (section, division, class,
activity) into a flat list of survey questions whose visibility rules
(visibleIf) reproduce the tree.

ARCHITECTURAL GUARANTEE:
------------------------
The compiler (taxonomy, policy, compiler modules) contains ZERO
knowledge of:
    - File formats or output destinations
    - Survey rendering
    - Answer validation or storage

It maps an immutable taxonomy snapshot and a Policy value to an ordered
question sequence. Loading, serialization and diagrams live in
separate layers.
"""

__version__ = "0.1.0"
