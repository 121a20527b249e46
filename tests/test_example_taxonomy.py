"""
Test the bundled example taxonomy.

The demo and several tests rely on its shape: two sections, four
divisions (one without classes), four classes, five activities.
"""

from naceform.examples import build_example_taxonomy
from naceform.taxonomy import TaxonomyIndex


def test_example_taxonomy_structure():
    index = TaxonomyIndex(build_example_taxonomy())

    assert [len(index.nodes_at_level(level)) for level in range(1, 5)] == [2, 4, 4, 5]

    # Every non-section node has a structural parent
    for level in range(2, 5):
        for node in index.nodes_at_level(level):
            assert index.parent_of(node).level == level - 1

    childless = [n.code for n in index.nodes_at_level(2) if not index.children_of(n)]
    assert childless == ["06"]
