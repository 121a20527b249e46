"""
Compilation policy configuration.

A Policy is a plain configuration value: the compiler has one engine,
and every output variant (single selection, singular/plural, gated
applicability) is a different Policy passed to it.

    Policy
      └── TrackConfig (one per parallel track, compiled in order)
            ├── GateConfig (optional boolean applicability question)
            └── LevelConfig x 4 (one per compiled depth)

Depth 1 is the aggregate question listing every section. Depth d >= 2
holds one question per level-(d-1) node, listing that node's children.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from naceform.errors import PolicyConfigurationError
from naceform.expressions import BinaryOperator
from naceform.identifiers import node_identifier
from naceform.model import QuestionType, TaxonomyNode
from naceform.taxonomy import DEPTH


def operator_for(parent_type: QuestionType) -> BinaryOperator:
    """Gate operator for a question whose parent has type `parent_type`."""
    if parent_type.holds_many:
        return BinaryOperator.CONTAINS
    return BinaryOperator.EQUALS


@dataclass(frozen=True)
class LevelConfig:
    """
    How the questions of one compiled depth look.

    Properties:
        depth:
            1..4

        question_type:
            QuestionType of every question at this depth

        title / description:
            Static display text. With `title_per_node` the title is a
            format string receiving the source node's `code` and `name`.

        operator:
            Operator used in the visibleIf of questions at this depth.
            None for an ungated depth-1 question.
    """

    depth: int
    question_type: QuestionType
    title: str
    description: Optional[str] = None
    operator: Optional[BinaryOperator] = None
    title_per_node: bool = False
    is_required: bool = True

    def title_for(self, node: Optional[TaxonomyNode] = None) -> str:
        if self.title_per_node and node is not None:
            return self.title.format(code=node.display_code, name=node.name)
        return self.title


@dataclass(frozen=True)
class GateConfig:
    """Boolean question placed before a track; the track's root is shown when it is true."""

    name: str
    title: str
    description: Optional[str] = None
    is_required: bool = True


@dataclass(frozen=True)
class TrackConfig:
    """
    One independently compiled pass over the taxonomy.

    Properties:
        key: Short track label, e.g. "SINGULAR"
        root_name: Name of the depth-1 aggregate question
        levels: LevelConfig for depths 1..4, in order
        suffix: Appended to every derived question name of this track
        gate: Optional applicability question placed before the root
    """

    key: str
    root_name: str
    levels: Tuple[LevelConfig, ...]
    suffix: str = ""
    gate: Optional[GateConfig] = None

    def level(self, depth: int) -> LevelConfig:
        return self.levels[depth - 1]

    def question_name(self, node: TaxonomyNode) -> str:
        return node_identifier(node, self.suffix)


@dataclass(frozen=True)
class Policy:
    """
    A complete compilation policy.

    INVARIANTS (checked by validate):
        - At least one track
        - Every track has exactly one LevelConfig per depth, in order
        - Operators agree with the parent question's type
        - Track suffixes, root names and gate names are unique
    """

    name: str
    tracks: Tuple[TrackConfig, ...]
    description: Optional[str] = None

    def get_track(self, key: str) -> Optional[TrackConfig]:
        for track in self.tracks:
            if track.key == key:
                return track
        return None

    def validate(self) -> None:
        """
        Raises:
            PolicyConfigurationError: On the first inconsistency found
        """
        if not self.tracks:
            raise PolicyConfigurationError(f"Policy '{self.name}' defines no tracks")

        for track in self.tracks:
            _validate_track(self.name, track)

        _require_unique(self.name, "track suffix", [t.suffix for t in self.tracks])
        _require_unique(self.name, "track key", [t.key for t in self.tracks])
        names = [t.root_name for t in self.tracks] + [t.gate.name for t in self.tracks if t.gate]
        _require_unique(self.name, "root/gate name", names)


def _require_unique(policy_name: str, what: str, values) -> None:
    seen = set()
    for value in values:
        if value in seen:
            raise PolicyConfigurationError(
                f"Policy '{policy_name}' repeats {what} '{value}'"
            )
        seen.add(value)


def _validate_track(policy_name: str, track: TrackConfig) -> None:
    where = f"Policy '{policy_name}', track '{track.key}'"

    depths = tuple(level.depth for level in track.levels)
    if depths != tuple(range(1, DEPTH + 1)):
        raise PolicyConfigurationError(
            f"{where}: expected levels for depths 1..{DEPTH}, got {depths}"
        )

    for level in track.levels:
        if level.question_type is QuestionType.BOOLEAN:
            raise PolicyConfigurationError(
                f"{where}: depth {level.depth} cannot be a boolean question"
            )

    root = track.level(1)
    if track.gate is None and root.operator is not None:
        raise PolicyConfigurationError(f"{where}: ungated root must not have an operator")
    if track.gate is not None and root.operator is not BinaryOperator.EQUALS:
        raise PolicyConfigurationError(f"{where}: gated root must use '=' against the gate")

    for depth in range(2, DEPTH + 1):
        parent = track.level(depth - 1)
        level = track.level(depth)
        expected = operator_for(parent.question_type)
        if level.operator is not expected:
            raise PolicyConfigurationError(
                f"{where}: depth {depth} is gated on a {parent.question_type.value} "
                f"question and must use '{expected.value}'"
            )
