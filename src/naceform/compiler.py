"""
Questionnaire compiler — taxonomy + Policy → ordered CompiledQuestions.

For every track of the policy, in order:

    [gate]      boolean applicability question (optional)
    depth 1     one question listing every section
    depth 2     one question per section, listing its divisions
    depth 3     one question per division, listing its classes
    depth 4     one question per class, listing its activities

A question at depth d >= 2 is gated on the question compiled for its
node's structural parent (or on the root for sections), comparing it
with the node's own display string:

    {A_AGRICULTURE} = '01 - Crop production'

Tracks are emitted one after another, never interleaved, so every
visibleIf points at a question defined earlier in the sequence.

The compiler is pure and deterministic: the same taxonomy and policy
always produce the same sequence.
"""

import logging
from typing import List

from naceform.analyzer import check_questionnaire
from naceform.errors import PolicyConfigurationError
from naceform.expressions import gate
from naceform.model import CompiledQuestion, QuestionType, TaxonomyNode
from naceform.policy import LevelConfig, Policy, TrackConfig
from naceform.taxonomy import DEPTH, TaxonomyIndex

logger = logging.getLogger(__name__)


def compile_gate(track: TrackConfig) -> CompiledQuestion:
    """Boolean applicability question placed before a track."""
    return CompiledQuestion(
        type=QuestionType.BOOLEAN,
        name=track.gate.name,
        title=track.gate.title,
        description=track.gate.description,
        is_required=track.gate.is_required,
        track=track.key,
        depth=0,
    )


def _compile_root(index: TaxonomyIndex, track: TrackConfig, config: LevelConfig) -> CompiledQuestion:
    visible_if = None
    if track.gate is not None:
        visible_if = gate(track.gate.name, config.operator, True)

    return CompiledQuestion(
        type=config.question_type,
        name=track.root_name,
        title=config.title_for(),
        description=config.description,
        is_required=config.is_required,
        choices=[node.display for node in index.nodes_at_level(1)],
        visible_if=visible_if,
        track=track.key,
        depth=1,
    )


def _parent_question_name(index: TaxonomyIndex, node: TaxonomyNode, track: TrackConfig) -> str:
    # Sections hang off the aggregate root question
    if node.level == 1:
        return track.root_name
    return track.question_name(index.parent_of(node))


def _compile_node(
    index: TaxonomyIndex,
    node: TaxonomyNode,
    track: TrackConfig,
    config: LevelConfig,
) -> CompiledQuestion:
    choices = [child.display for child in index.children_of(node)]
    parent_name = _parent_question_name(index, node, track)

    return CompiledQuestion(
        type=config.question_type,
        name=track.question_name(node),
        title=config.title_for(node),
        description=config.description,
        is_required=config.is_required,
        choices=choices,
        visible_if=gate(parent_name, config.operator, node.display),
        track=track.key,
        depth=config.depth,
        source_code=node.display_code,
    )


def compile_level(index: TaxonomyIndex, depth: int, track: TrackConfig) -> List[CompiledQuestion]:
    """
    Compile one depth of one track.

    Depth 1 yields a single aggregate question; depth d >= 2 yields one
    question per level-(d-1) node, including nodes without children
    (their question has an empty choice list).

    Raises:
        MalformedTaxonomyError: If a node's parent cannot be resolved
        PolicyConfigurationError: If `depth` is outside 1..DEPTH
    """
    if not 1 <= depth <= DEPTH:
        raise PolicyConfigurationError(
            f"Track '{track.key}': depth {depth} is outside 1..{DEPTH}"
        )
    config = track.level(depth)
    if depth == 1:
        return [_compile_root(index, track, config)]

    questions = [
        _compile_node(index, node, track, config)
        for node in index.nodes_at_level(depth - 1)
    ]
    empty = sum(1 for question in questions if not question.choices)
    logger.debug(
        "Track %s depth %d: %d questions (%d without choices)",
        track.key, depth, len(questions), empty,
    )
    return questions


def compile_track(index: TaxonomyIndex, track: TrackConfig) -> List[CompiledQuestion]:
    questions: List[CompiledQuestion] = []
    if track.gate is not None:
        questions.append(compile_gate(track))
    for depth in range(1, DEPTH + 1):
        questions.extend(compile_level(index, depth, track))
    return questions


def assemble(index: TaxonomyIndex, policy: Policy) -> List[CompiledQuestion]:
    """
    Compile every track of `policy` and concatenate them.

    Raises:
        PolicyConfigurationError: If the policy is inconsistent
        MalformedTaxonomyError: If a node's parent cannot be resolved
        DuplicateIdentifierError: If two questions end up with the same name
    """
    policy.validate()
    index.validate()

    questions: List[CompiledQuestion] = []
    for track in policy.tracks:
        track_questions = compile_track(index, track)
        logger.info(
            "Compiled track %s of policy %s: %d questions",
            track.key, policy.name, len(track_questions),
        )
        questions.extend(track_questions)

    check_questionnaire(questions)
    logger.info("Policy %s produced %d questions", policy.name, len(questions))
    return questions
