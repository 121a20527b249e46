"""Shared fixtures for naceform tests."""

import pytest

from naceform.examples import build_example_taxonomy
from naceform.model import TaxonomyNode
from naceform.taxonomy import TaxonomyIndex


@pytest.fixture
def agriculture_nodes():
    """One branch: A → 01 → 0100 → 01001."""
    return [
        TaxonomyNode(code="A", section="A", name="Agriculture", level=1),
        TaxonomyNode(code="01", section="A", name="Crop production", level=2),
        TaxonomyNode(code="0100", section="A", name="Growing", level=3),
        TaxonomyNode(code="01001", section="A", name="Wheat growing", level=4),
    ]


@pytest.fixture
def agriculture_index(agriculture_nodes):
    return TaxonomyIndex(agriculture_nodes)


@pytest.fixture
def example_index():
    return TaxonomyIndex(build_example_taxonomy())
