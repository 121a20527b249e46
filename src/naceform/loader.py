"""
Taxonomy loading (raw records → TaxonomyNodes).

Accepts the NACE export layout: a JSON array (or YAML list) of objects
with at least `code`, `section`, `name` and `level`. Extra keys are
ignored. Sections may omit `code`; their letter is used instead.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from naceform.errors import TaxonomyLoadError
from naceform.model import TaxonomyNode


REQUIRED_KEYS = ("section", "name", "level")


def node_from_record(record: Dict[str, Any], position: int = 0) -> TaxonomyNode:
    if not isinstance(record, dict):
        raise TaxonomyLoadError(f"Record {position} is not an object: {record!r}")

    missing = [key for key in REQUIRED_KEYS if record.get(key) in (None, "")]
    if missing:
        raise TaxonomyLoadError(
            f"Record {position} is missing required keys: {missing}",
            details={"position": position, "missing": missing},
        )

    try:
        level = int(record["level"])
    except (TypeError, ValueError):
        raise TaxonomyLoadError(f"Record {position} has a non-integer level: {record['level']!r}")

    section = str(record["section"])
    code = record.get("code")
    if code in (None, ""):
        if level != 1:
            raise TaxonomyLoadError(f"Record {position} (level {level}) has no code")
        code = section

    return TaxonomyNode(code=str(code), section=section, name=str(record["name"]), level=level)


def taxonomy_from_records(records: Iterable[Dict[str, Any]]) -> List[TaxonomyNode]:
    return [node_from_record(record, position) for position, record in enumerate(records)]


def load_taxonomy(filepath) -> List[TaxonomyNode]:
    """
    Load a taxonomy file (.json, .yaml or .yml).

    Raises:
        FileNotFoundError: If file doesn't exist
        TaxonomyLoadError: If the content is not a list of node records
    """
    path = Path(filepath)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Taxonomy file not found: {filepath}")

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            records = yaml.safe_load(content)
        else:
            records = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TaxonomyLoadError(f"Failed to parse taxonomy file {filepath}: {e}")

    if not isinstance(records, list):
        raise TaxonomyLoadError(f"Taxonomy file {filepath} must contain a list of records")

    return taxonomy_from_records(records)
