"""
Questionnaire Analyzer — diagnostics for compiled question sequences.

Provides a read-only report over a list of CompiledQuestions:
    - Question inventory per type and per track
    - Gating structure (ungated roots, chain depth)
    - Reference checks (duplicates, forward and dangling references)
    - Empty-choice questions

`check_questionnaire` turns the two hard invariants (unique names,
references only to earlier questions) into exceptions.

IMPORTANT: This module does NOT modify the questionnaire.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from naceform.errors import DuplicateIdentifierError, ForwardReferenceError
from naceform.expressions import referenced_names
from naceform.model import CompiledQuestion


@dataclass
class QuestionnaireReport:
    """Analysis report for a compiled questionnaire."""

    total_questions: int = 0
    questions_by_type: Dict[str, int] = field(default_factory=dict)
    questions_by_track: Dict[str, int] = field(default_factory=dict)

    # Gating
    ungated_questions: List[str] = field(default_factory=list)
    gated_questions: int = 0
    max_gate_depth: int = 0

    # References
    duplicate_names: Set[str] = field(default_factory=set)
    forward_references: List[Tuple[str, str]] = field(default_factory=list)
    dangling_references: List[Tuple[str, str]] = field(default_factory=list)

    # Choices
    empty_choice_questions: List[str] = field(default_factory=list)
    total_choices: int = 0

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def is_consistent(self) -> bool:
        return not (self.duplicate_names or self.forward_references or self.dangling_references)


def analyze_questionnaire(questions: List[CompiledQuestion]) -> QuestionnaireReport:
    """
    Inventory a question sequence and flag structural problems.

    Returns a QuestionnaireReport; never raises on bad structure.
    """
    report = QuestionnaireReport(total_questions=len(questions))

    by_type: Counter = Counter(q.type.value for q in questions)
    report.questions_by_type = dict(by_type)

    by_track: Dict[str, int] = defaultdict(int)
    for question in questions:
        by_track[question.track or "-"] += 1
    report.questions_by_track = dict(by_track)

    names = Counter(q.name for q in questions)
    report.duplicate_names = {name for name, count in names.items() if count > 1}
    all_names = set(names)

    # Walk in order: a reference is valid only if already seen
    seen: Set[str] = set()
    gate_depth: Dict[str, int] = {}
    for question in questions:
        refs = referenced_names(question.visible_if)
        if not refs:
            report.ungated_questions.append(question.name)
        else:
            report.gated_questions += 1

        depth = 0
        for ref in sorted(refs):
            if ref in seen:
                depth = max(depth, gate_depth.get(ref, 0) + 1)
            elif ref in all_names:
                report.forward_references.append((question.name, ref))
            else:
                report.dangling_references.append((question.name, ref))
        gate_depth[question.name] = depth
        report.max_gate_depth = max(report.max_gate_depth, depth)
        seen.add(question.name)

        if question.choices is not None:
            report.total_choices += len(question.choices)
            if not question.choices:
                report.empty_choice_questions.append(question.name)

    if report.duplicate_names:
        report.add_warning(f"Duplicate question names: {', '.join(sorted(report.duplicate_names))}")
    if report.forward_references:
        report.add_warning(
            "Forward references: "
            + ", ".join(f"{q} -> {ref}" for q, ref in report.forward_references)
        )
    if report.dangling_references:
        report.add_warning(
            "Dangling references: "
            + ", ".join(f"{q} -> {ref}" for q, ref in report.dangling_references)
        )
    if report.empty_choice_questions:
        report.add_warning(f"Questions without choices: {len(report.empty_choice_questions)}")

    return report


def check_questionnaire(questions: List[CompiledQuestion]) -> None:
    """
    Enforce the invariants a renderer relies on.

    Raises:
        DuplicateIdentifierError: If two questions share a name
        ForwardReferenceError: If a visibleIf references a question not defined before it
    """
    names = Counter(q.name for q in questions)
    duplicates = [name for name, count in names.items() if count > 1]
    if duplicates:
        raise DuplicateIdentifierError(duplicates)

    seen: Set[str] = set()
    for question in questions:
        for ref in sorted(referenced_names(question.visible_if)):
            if ref not in seen:
                raise ForwardReferenceError(question.name, ref)
        seen.add(question.name)
