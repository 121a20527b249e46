"""
Example taxonomy for demos and tests.

A small excerpt shaped like the NACE export: two sections, a handful of
divisions, classes and activities. Division "06" has no classes, so its
compiled question carries an empty choice list.
"""
from typing import List

from naceform.model import TaxonomyNode


_EXAMPLE_RECORDS = [
    # (code, section, name, level)
    ("A", "A", "Agriculture, forestry and fishing", 1),
    ("B", "B", "Mining and quarrying", 1),
    ("01", "A", "Crop and animal production", 2),
    ("02", "A", "Forestry and logging", 2),
    ("05", "B", "Mining of coal and lignite", 2),
    ("06", "B", "Extraction of crude petroleum and natural gas", 2),
    ("0111", "A", "Growing of cereals", 3),
    ("0113", "A", "Growing of vegetables and melons", 3),
    ("0210", "A", "Silviculture and other forestry activities", 3),
    ("0510", "B", "Mining of hard coal", 3),
    ("01110", "A", "Growing of wheat", 4),
    ("01111", "A", "Growing of rice", 4),
    ("01130", "A", "Growing of vegetables", 4),
    ("02100", "A", "Silviculture", 4),
    ("05100", "B", "Mining of hard coal", 4),
]


def build_example_taxonomy() -> List[TaxonomyNode]:
    return [
        TaxonomyNode(code=code, section=section, name=name, level=level)
        for code, section, name, level in _EXAMPLE_RECORDS
    ]
