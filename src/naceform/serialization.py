"""
Serialization helpers for naceform objects.

Compiled questions are written in the survey renderer's layout:

    {"type", "name", "title", "description"?, "isRequired", "choices"?, "visibleIf"?}

Optional keys are omitted when absent. Policies are serialized to plain
dicts so they can be stored and edited as YAML.
"""
from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from naceform.errors import PolicyConfigurationError
from naceform.expressions import BinaryOperator, parse_predicate, render_expression
from naceform.model import CompiledQuestion, QuestionType
from naceform.policy import GateConfig, LevelConfig, Policy, TrackConfig

logger = logging.getLogger(__name__)

FORMATS = ("json", "yaml")


# =========================================================================
# QUESTIONS
# =========================================================================


def question_to_dict(q: CompiledQuestion) -> Dict[str, Any]:
    d: Dict[str, Any] = {"type": q.type.value, "name": q.name, "title": q.title}
    if q.description is not None:
        d["description"] = q.description
    d["isRequired"] = q.is_required
    if q.choices is not None:
        d["choices"] = list(q.choices)
    if q.visible_if is not None:
        d["visibleIf"] = render_expression(q.visible_if)
    return d


def question_from_dict(d: Dict[str, Any]) -> CompiledQuestion:
    visible_if = d.get("visibleIf")
    choices = d.get("choices")
    return CompiledQuestion(
        type=QuestionType(d["type"]),
        name=d["name"],
        title=d.get("title", ""),
        description=d.get("description"),
        is_required=d.get("isRequired", True),
        choices=list(choices) if choices is not None else None,
        visible_if=parse_predicate(visible_if) if visible_if else None,
    )


def questions_to_json(questions: List[CompiledQuestion]) -> str:
    return json.dumps([question_to_dict(q) for q in questions], indent=4, ensure_ascii=False)


def questions_from_json(s: str) -> List[CompiledQuestion]:
    return [question_from_dict(d) for d in json.loads(s)]


def questions_to_yaml(questions: List[CompiledQuestion]) -> str:
    return yaml.safe_dump(
        [question_to_dict(q) for q in questions],
        sort_keys=False,
        allow_unicode=True,
    )


def questions_from_yaml(s: str) -> List[CompiledQuestion]:
    return [question_from_dict(d) for d in yaml.safe_load(s) or []]


# =========================================================================
# POLICIES
# =========================================================================


def level_to_dict(level: LevelConfig) -> Dict[str, Any]:
    return {
        "depth": level.depth,
        "question_type": level.question_type.value,
        "title": level.title,
        "description": level.description,
        "operator": level.operator.value if level.operator else None,
        "title_per_node": level.title_per_node,
        "is_required": level.is_required,
    }


def level_from_dict(d: Dict[str, Any]) -> LevelConfig:
    operator = d.get("operator")
    return LevelConfig(
        depth=d["depth"],
        question_type=QuestionType(d["question_type"]),
        title=d["title"],
        description=d.get("description"),
        operator=BinaryOperator(operator) if operator else None,
        title_per_node=d.get("title_per_node", False),
        is_required=d.get("is_required", True),
    )


def gate_to_dict(g: Optional[GateConfig]) -> Optional[Dict[str, Any]]:
    if g is None:
        return None
    return {
        "name": g.name,
        "title": g.title,
        "description": g.description,
        "is_required": g.is_required,
    }


def gate_from_dict(d: Optional[Dict[str, Any]]) -> Optional[GateConfig]:
    if d is None:
        return None
    return GateConfig(
        name=d["name"],
        title=d["title"],
        description=d.get("description"),
        is_required=d.get("is_required", True),
    )


def track_to_dict(t: TrackConfig) -> Dict[str, Any]:
    return {
        "key": t.key,
        "root_name": t.root_name,
        "suffix": t.suffix,
        "gate": gate_to_dict(t.gate),
        "levels": [level_to_dict(level) for level in t.levels],
    }


def track_from_dict(d: Dict[str, Any]) -> TrackConfig:
    return TrackConfig(
        key=d["key"],
        root_name=d["root_name"],
        levels=tuple(level_from_dict(level) for level in d.get("levels", [])),
        suffix=d.get("suffix", ""),
        gate=gate_from_dict(d.get("gate")),
    )


def policy_to_dict(p: Policy) -> Dict[str, Any]:
    return {
        "name": p.name,
        "description": p.description,
        "tracks": [track_to_dict(t) for t in p.tracks],
    }


def policy_from_dict(d: Dict[str, Any]) -> Policy:
    """
    Raises:
        PolicyConfigurationError: If `d` is not a well-formed policy mapping
    """
    try:
        return Policy(
            name=d.get("name", ""),
            tracks=tuple(track_from_dict(t) for t in d.get("tracks", [])),
            description=d.get("description"),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise PolicyConfigurationError(f"Malformed policy definition: {e!r}") from e


def policy_to_yaml(p: Policy) -> str:
    return yaml.safe_dump(policy_to_dict(p), sort_keys=False, allow_unicode=True)


def policy_from_yaml(s: str) -> Policy:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise PolicyConfigurationError(f"Failed to parse policy YAML: {e}") from e
    return policy_from_dict(d)


def load_policy_file(path) -> Policy:
    with open(path, "r", encoding="utf-8") as f:
        return policy_from_yaml(f.read())


# =========================================================================
# OUTPUT FILES
# =========================================================================


def default_output_path(directory, timestamp_ms: Optional[int] = None, fmt: str = "json") -> Path:
    """`<directory>/result_<milliseconds>.<fmt>`"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return Path(directory) / f"result_{timestamp_ms}.{fmt}"


def save_questionnaire(questions: List[CompiledQuestion], path, fmt: str = "json") -> Path:
    """
    Write compiled questions to `path`, replacing any previous file there.

    Returns:
        The path written
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format '{fmt}', expected one of {FORMATS}")

    path = Path(path)
    if path.exists():
        logger.info("Removing stale output %s", path)
        path.unlink()
    path.parent.mkdir(parents=True, exist_ok=True)

    content = questions_to_json(questions) if fmt == "json" else questions_to_yaml(questions)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info("Wrote %d questions to %s", len(questions), path)
    return path
