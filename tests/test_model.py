"""
Tests for naceform core model objects.
"""

import pytest
from naceform.model import CompiledQuestion, QuestionType, TaxonomyNode


class TestTaxonomyNode:
    """Test TaxonomyNode objects."""

    def test_section_display_uses_letter(self):
        node = TaxonomyNode(code="A", section="A", name="Agriculture", level=1)
        assert node.display == "A - Agriculture"

    def test_division_display_uses_code(self):
        node = TaxonomyNode(code="01", section="A", name="Crop production", level=2)
        assert node.display_code == "01"
        assert node.display == "01 - Crop production"

    def test_node_immutable(self):
        node = TaxonomyNode(code="01", section="A", name="Crop production", level=2)
        with pytest.raises(AttributeError):
            node.name = "Changed"


class TestQuestionType:
    """Test question type classification."""

    @pytest.mark.parametrize("question_type", [QuestionType.CHECKBOX, QuestionType.TAGBOX])
    def test_set_valued_types(self, question_type):
        assert question_type.holds_many

    @pytest.mark.parametrize("question_type", [
        QuestionType.RADIOGROUP, QuestionType.DROPDOWN, QuestionType.BOOLEAN,
    ])
    def test_single_valued_types(self, question_type):
        assert not question_type.holds_many


class TestCompiledQuestion:
    """Test CompiledQuestion defaults."""

    def test_minimal_question(self):
        q = CompiledQuestion(type=QuestionType.BOOLEAN, name="GATE", title="Gate?")
        assert q.is_required
        assert q.choices is None
        assert q.visible_if is None
        assert q.description is None
