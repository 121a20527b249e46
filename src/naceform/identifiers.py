"""
Identifier derivation for compiled questions.

    derive_name("01", "Crop production")  ->  "01_CROP_PRODUCTION"

Only spaces are replaced; punctuation, accents and other whitespace
are kept as-is. Uniqueness is not checked here: the assembler keeps
names unique by giving every track its own suffix.
"""

from naceform.model import TaxonomyNode


def upper_snake_case(label: str) -> str:
    return label.upper().replace(" ", "_")


def derive_name(code: str, name: str) -> str:
    return f"{code}_{upper_snake_case(name)}"


def node_identifier(node: TaxonomyNode, suffix: str = "") -> str:
    """Identifier of the question compiled for `node`, with an optional track suffix."""
    return derive_name(node.display_code, node.name) + suffix
