"""
Tests for serialization of compiled questions and policies.
"""

import json

import pytest
from naceform.compiler import assemble
from naceform.errors import PolicyConfigurationError
from naceform.policies import POLICIES, get_policy
from naceform.serialization import (
    default_output_path,
    load_policy_file,
    policy_from_yaml,
    policy_to_yaml,
    question_to_dict,
    questions_from_json,
    questions_from_yaml,
    questions_to_json,
    questions_to_yaml,
    save_questionnaire,
)


class TestQuestionLayout:

    def test_root_question_dict(self, agriculture_index):
        root = assemble(agriculture_index, get_policy("exclusive-primary"))[0]
        d = question_to_dict(root)
        assert list(d) == ["type", "name", "title", "description", "isRequired", "choices"]
        assert d["type"] == "checkbox"
        assert d["isRequired"] is True
        assert "visibleIf" not in d

    def test_gate_question_has_no_choices(self, agriculture_index):
        gate = assemble(agriculture_index, get_policy("gated-applicability"))[0]
        d = question_to_dict(gate)
        assert d["type"] == "boolean"
        assert "choices" not in d
        assert "description" not in d

    def test_json_layout(self, agriculture_index):
        questions = assemble(agriculture_index, get_policy("exclusive-primary"))
        data = json.loads(questions_to_json(questions))
        assert data[1]["name"] == "A_AGRICULTURE"
        assert data[1]["visibleIf"] == "{PRIMARY_NACE_CODE} contains 'A - Agriculture'"

    def test_json_keeps_non_ascii(self, agriculture_index):
        text = questions_to_json(assemble(agriculture_index, get_policy("exclusive-primary")))
        assert "organization’s" in text
        assert text.startswith("[\n    {")


class TestReadBack:

    @pytest.mark.parametrize("name", sorted(POLICIES))
    def test_json_read_back(self, example_index, name):
        questions = assemble(example_index, get_policy(name))
        text = questions_to_json(questions)
        assert questions_to_json(questions_from_json(text)) == text

    def test_yaml_read_back(self, example_index):
        questions = assemble(example_index, get_policy("gated-applicability"))
        restored = questions_from_yaml(questions_to_yaml(questions))
        assert [question_to_dict(q) for q in restored] == [question_to_dict(q) for q in questions]


class TestPolicySerialization:

    @pytest.mark.parametrize("name", sorted(POLICIES))
    def test_policy_yaml_read_back(self, name):
        policy = get_policy(name)
        assert policy_from_yaml(policy_to_yaml(policy)) == policy

    def test_load_policy_file(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text(policy_to_yaml(get_policy("dual")), encoding="utf-8")
        assert load_policy_file(path) == get_policy("dual")


class TestOutputFiles:

    def test_default_output_path(self, tmp_path):
        assert default_output_path(tmp_path, 1700000000000) == tmp_path / "result_1700000000000.json"

    def test_save_replaces_stale_file(self, tmp_path, agriculture_index):
        path = tmp_path / "out" / "result.json"
        path.parent.mkdir()
        path.write_text("stale", encoding="utf-8")

        questions = assemble(agriculture_index, get_policy("exclusive-primary"))
        written = save_questionnaire(questions, path)

        assert written == path
        assert len(json.loads(path.read_text(encoding="utf-8"))) == 4

    def test_save_yaml(self, tmp_path, agriculture_index):
        questions = assemble(agriculture_index, get_policy("exclusive-primary"))
        path = save_questionnaire(questions, tmp_path / "result.yaml", fmt="yaml")
        assert len(questions_from_yaml(path.read_text(encoding="utf-8"))) == 4

    def test_save_unknown_format(self, tmp_path):
        with pytest.raises(ValueError):
            save_questionnaire([], tmp_path / "x.xml", fmt="xml")


class TestMalformedPolicies:

    @pytest.mark.parametrize("content", [
        "tracks:\n  - root_name: ROOT\n",
        "tracks:\n  - key: T\n    root_name: ROOT\n    levels:\n"
        "      - {depth: 1, question_type: radiogroup, title: T, operator: equals}\n",
        "tracks:\n  - key: T\n    root_name: ROOT\n    levels:\n"
        "      - {depth: 1, question_type: radio, title: T}\n",
        "just a scalar\n",
        "",
        "tracks: [unclosed\n",
    ])
    def test_malformed_policy_yaml(self, content):
        with pytest.raises(PolicyConfigurationError):
            policy_from_yaml(content)
