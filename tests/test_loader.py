"""
Tests for taxonomy loading.
"""

import json

import pytest
from naceform.errors import TaxonomyLoadError
from naceform.loader import load_taxonomy, node_from_record, taxonomy_from_records
from naceform.model import TaxonomyNode


RECORDS = [
    {"code": "A", "section": "A", "name": "Agriculture", "level": 1, "parentCode": None},
    {"code": "01", "section": "A", "name": "Crop production", "level": 2},
    {"code": "0100", "section": "A", "name": "Growing", "level": "3"},
]


def test_records_become_nodes():
    nodes = taxonomy_from_records(RECORDS)
    assert nodes[0] == TaxonomyNode(code="A", section="A", name="Agriculture", level=1)
    assert nodes[2].level == 3


def test_section_without_code_uses_letter():
    node = node_from_record({"section": "B", "name": "Mining", "level": 1})
    assert node.code == "B"


def test_division_without_code_fails():
    with pytest.raises(TaxonomyLoadError):
        node_from_record({"section": "A", "name": "Crops", "level": 2})


@pytest.mark.parametrize("record", [
    {"code": "01", "name": "Crops", "level": 2},
    {"code": "01", "section": "A", "level": 2},
    {"code": "01", "section": "A", "name": "Crops"},
    {"code": "01", "section": "A", "name": "Crops", "level": "two"},
    ["01", "A"],
])
def test_invalid_records(record):
    with pytest.raises(TaxonomyLoadError):
        node_from_record(record, position=3)


def test_load_json(tmp_path):
    path = tmp_path / "nace.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    assert len(load_taxonomy(path)) == 3


def test_load_yaml(tmp_path):
    path = tmp_path / "nace.yaml"
    path.write_text(
        "- {code: A, section: A, name: Agriculture, level: 1}\n"
        "- {code: '01', section: A, name: Crop production, level: 2}\n",
        encoding="utf-8",
    )
    nodes = load_taxonomy(path)
    assert [n.code for n in nodes] == ["A", "01"]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_taxonomy(tmp_path / "missing.json")


def test_load_not_a_list(tmp_path):
    path = tmp_path / "nace.json"
    path.write_text('{"code": "A"}', encoding="utf-8")
    with pytest.raises(TaxonomyLoadError):
        load_taxonomy(path)


def test_load_invalid_json(tmp_path):
    path = tmp_path / "nace.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(TaxonomyLoadError):
        load_taxonomy(path)
