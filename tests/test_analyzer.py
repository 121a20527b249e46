"""
Tests for the Questionnaire Analyzer.

Tests verify that the analyzer correctly:
    - Inventories questions per type and track
    - Detects duplicate, forward and dangling references
    - Measures gating depth
    - Reports empty-choice questions
"""

import pytest
from naceform.analyzer import analyze_questionnaire, check_questionnaire
from naceform.compiler import assemble
from naceform.errors import DuplicateIdentifierError, ForwardReferenceError
from naceform.expressions import BinaryOperator, gate
from naceform.model import CompiledQuestion, QuestionType
from naceform.policies import get_policy


def question(name, ref=None, choices=None, question_type=QuestionType.RADIOGROUP):
    return CompiledQuestion(
        type=question_type,
        name=name,
        title=name,
        choices=choices if choices is not None else ["x - X"],
        visible_if=gate(ref, BinaryOperator.EQUALS, "x - X") if ref else None,
    )


def test_compiled_questionnaire_is_consistent(example_index):
    """A compiled questionnaire has no reference problems."""
    report = analyze_questionnaire(assemble(example_index, get_policy("dual")))

    assert report.total_questions == 22
    assert report.is_consistent
    assert report.ungated_questions == ["PRIMARY_NACE_CODE_SINGULAR", "PRIMARY_NACE_CODE_PLURAL"]
    assert report.gated_questions == 20
    assert report.max_gate_depth == 3
    assert report.questions_by_type == {"radiogroup": 11, "checkbox": 11}
    assert report.questions_by_track == {"SINGULAR": 11, "PLURAL": 11}


def test_gated_policy_depth_counts_gate(example_index):
    report = analyze_questionnaire(assemble(example_index, get_policy("gated-applicability")))
    assert report.max_gate_depth == 4
    assert report.questions_by_type["boolean"] == 2


def test_empty_choice_questions(example_index):
    report = analyze_questionnaire(assemble(example_index, get_policy("exclusive-primary")))
    assert report.empty_choice_questions == ["06_EXTRACTION_OF_CRUDE_PETROLEUM_AND_NATURAL_GAS"]
    assert any("without choices" in w for w in report.warnings)


def test_duplicate_names():
    report = analyze_questionnaire([question("Q1"), question("Q1")])
    assert report.duplicate_names == {"Q1"}
    assert not report.is_consistent


def test_forward_reference():
    report = analyze_questionnaire([question("Q1", ref="Q2"), question("Q2")])
    assert report.forward_references == [("Q1", "Q2")]
    assert report.dangling_references == []


def test_dangling_reference():
    report = analyze_questionnaire([question("Q1", ref="MISSING")])
    assert report.dangling_references == [("Q1", "MISSING")]
    assert any("Dangling" in w for w in report.warnings)


def test_boolean_questions_have_no_choices():
    gate_question = CompiledQuestion(type=QuestionType.BOOLEAN, name="G", title="G?")
    report = analyze_questionnaire([gate_question])
    assert report.empty_choice_questions == []
    assert report.total_choices == 0


def test_empty_questionnaire():
    report = analyze_questionnaire([])
    assert report.total_questions == 0
    assert report.is_consistent
    assert report.warnings == []


class TestCheckQuestionnaire:

    def test_valid_sequence(self):
        check_questionnaire([question("Q1"), question("Q2", ref="Q1")])

    def test_duplicate_raises(self):
        with pytest.raises(DuplicateIdentifierError):
            check_questionnaire([question("Q1"), question("Q1")])

    def test_forward_reference_raises(self):
        with pytest.raises(ForwardReferenceError) as exc:
            check_questionnaire([question("Q1", ref="Q2"), question("Q2")])
        assert exc.value.details == {"question": "Q1", "reference": "Q2"}

    def test_self_reference_raises(self):
        with pytest.raises(ForwardReferenceError):
            check_questionnaire([question("Q1", ref="Q1")])
