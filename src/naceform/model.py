"""
Core naceform Model Objects

Defines the data structures that flow through the compiler:
    - TaxonomyNode (one entry of the NACE classification, read-only input)
    - QuestionType (the survey renderer's question kinds)
    - CompiledQuestion (one output question)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about JSON/YAML layout
        - Hold gating logic as Expression trees, not strings
        - Represent structure, not behavior
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from naceform.expressions import Expression


class QuestionType(Enum):
    """
    Question kinds emitted by the compiler.

    RADIOGROUP and DROPDOWN hold exactly one value (exclusive choice).
    CHECKBOX and TAGBOX hold a set of values.
    BOOLEAN is only used for applicability gates.
    """

    RADIOGROUP = "radiogroup"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"
    TAGBOX = "tagbox"
    BOOLEAN = "boolean"

    @property
    def holds_many(self) -> bool:
        """True when an answer is a set of choices rather than one choice."""
        return self in (QuestionType.CHECKBOX, QuestionType.TAGBOX)


@dataclass(frozen=True)
class TaxonomyNode:
    """
    One entry of the classification hierarchy.

    Properties:
        code:
            Level 1 (section): the section letter, e.g. "A"
            Level 2 (division): 2 characters, e.g. "01"
            Level 3 (class): 4 characters, e.g. "0111"
            Level 4 (activity): 5 characters, e.g. "01110"

        section:
            Section letter shared by the node and all its descendants

        name:
            Human-readable label, e.g. "Crop production"

        level:
            Depth tier, 1 (section) through 4 (activity)

    Nodes are immutable; the taxonomy is loaded once as a snapshot.
    """

    code: str
    section: str
    name: str
    level: int

    @property
    def display_code(self) -> str:
        """Code shown to respondents; sections are shown by their letter."""
        return self.section if self.level == 1 else self.code

    @property
    def display(self) -> str:
        """Choice display string, e.g. "01 - Crop production"."""
        return f"{self.display_code} - {self.name}"


@dataclass
class CompiledQuestion:
    """
    A single question of the generated questionnaire.

    Properties:
        type:
            QuestionType of the question

        name:
            Globally unique identifier, e.g. "A_AGRICULTURE"

        title / description:
            Display text (description optional)

        is_required:
            Always True for generated questions

        choices:
            Choice display strings ("<code> - <name>"), one per child node.
            None for boolean questions, possibly empty for leaf branches.

        visible_if:
            Gating Expression referencing one earlier question.
            None for questions that are always shown.

        track / depth / source_code:
            Provenance metadata (which track, which compiled depth, which
            taxonomy node). Not part of the rendered output.
    """

    type: QuestionType
    name: str
    title: str
    is_required: bool = True
    description: Optional[str] = None
    choices: Optional[List[str]] = None
    visible_if: Optional[Expression] = None
    track: Optional[str] = None
    depth: Optional[int] = None
    source_code: Optional[str] = None
