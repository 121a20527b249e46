"""
Taxonomy Index — read-only lookups over a flat list of TaxonomyNodes.

Structural rules (the taxonomy's own encoding, preserved exactly):

    level 1 (section)   children: same section, len(code) == 2
    level 2 (division)  children: same section, len(code) == 4, code[:2] == parent.code
    level 3 (class)     children: same section, len(code) == 5, code[:4] == parent.code
    level 4 (activity)  no children

Parents are resolved the other way round: a division's parent is the
section with the same letter, a class's parent is the division named by
its first 2 characters, an activity's parent the class named by its
first 4 characters, always within the same section.

All maps are built once at construction so lookups do not rescan the
node list.
"""

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Tuple

from naceform.errors import MalformedTaxonomyError
from naceform.model import TaxonomyNode


# Code length of the children of a node at a given level
CHILD_CODE_LENGTH: Dict[int, int] = {1: 2, 2: 4, 3: 5}

# Code length -> length of the parent's code used as prefix (0 = section only)
PARENT_PREFIX_LENGTH: Dict[int, int] = {2: 0, 4: 2, 5: 4}

DEPTH = 4


class TaxonomyIndex:
    """
    Immutable index over a taxonomy snapshot.

    Source order is preserved by every lookup.
    """

    def __init__(self, nodes: Iterable[TaxonomyNode]) -> None:
        self._nodes: Tuple[TaxonomyNode, ...] = tuple(nodes)

        by_level: Dict[int, List[TaxonomyNode]] = defaultdict(list)
        sections: Dict[str, TaxonomyNode] = {}
        by_code: Dict[Tuple[int, str, str], TaxonomyNode] = {}
        children: Dict[Tuple[str, str, int], List[TaxonomyNode]] = defaultdict(list)

        for node in self._nodes:
            by_level[node.level].append(node)

            if node.level == 1:
                sections.setdefault(node.section, node)
            else:
                by_code.setdefault((node.level, node.section, node.code), node)

            prefix_length = PARENT_PREFIX_LENGTH.get(len(node.code))
            if prefix_length is not None:
                key = (node.section, node.code[:prefix_length], len(node.code))
                children[key].append(node)

        self._by_level = {level: tuple(nodes) for level, nodes in by_level.items()}
        self._sections = sections
        self._by_code = by_code
        self._children = {key: tuple(nodes) for key, nodes in children.items()}

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TaxonomyNode]:
        return iter(self._nodes)

    def nodes_at_level(self, level: int) -> List[TaxonomyNode]:
        """Nodes whose `level` equals `level`, in source order."""
        return list(self._by_level.get(level, ()))

    def parent_of(self, node: TaxonomyNode) -> TaxonomyNode:
        """
        Resolve the structural parent of `node`.

        For a level-1 node the lookup resolves the section to itself.

        Raises:
            MalformedTaxonomyError: If no parent matches (also a LookupError)
        """
        if node.level in (1, 2):
            parent = self._sections.get(node.section)
        elif node.level == 3:
            parent = self._by_code.get((2, node.section, node.code[:2]))
        elif node.level == 4:
            parent = self._by_code.get((3, node.section, node.code[:4]))
        else:
            parent = None

        if parent is None:
            raise MalformedTaxonomyError(node.code, node.section, node.level)
        return parent

    def children_of(self, node: TaxonomyNode) -> List[TaxonomyNode]:
        """Nodes one tier below `node`, in source order."""
        child_length = CHILD_CODE_LENGTH.get(node.level)
        if child_length is None:
            return []
        prefix = "" if node.level == 1 else node.code
        return list(self._children.get((node.section, prefix, child_length), ()))

    def validate(self) -> None:
        """
        Check that every node below the sections has a structural parent.

        Activities are never compiled into questions of their own, so
        this is the only place an orphan activity is detected.

        Raises:
            MalformedTaxonomyError: For the first node without a parent
        """
        for node in self._nodes:
            if node.level != 1:
                self.parent_of(node)
