"""
Graphviz DOT diagram generator for compiled questionnaires.

Draws the gating graph: one node per question, one edge from each
question to every question whose visibleIf references it.

Supports multiple modes:
    - SIMPLE: Question names and gating edges
    - DETAILED: Titles, choice counts and predicate labels on edges
    - MANAGEMENT: SIMPLE plus one cluster per track
"""

from enum import Enum
from typing import Dict, List

from naceform.expressions import BinaryExpression, Literal, referenced_names, render_expression
from naceform.model import CompiledQuestion, QuestionType


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    MANAGEMENT = "management"


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _escape_dot_id(identifier: str) -> str:
    """Quote an identifier unless it is a plain DOT ID."""
    if identifier[0].isdigit() or not identifier.replace('_', '').isalnum() or not identifier.isascii():
        return _escape_dot_string(identifier)
    return identifier


def _edge_label(question: CompiledQuestion) -> str:
    expr = question.visible_if
    if isinstance(expr, BinaryExpression) and isinstance(expr.right, Literal):
        value = expr.right.value
        if isinstance(value, bool):
            value = "true" if value else "false"
        label = f"{expr.operator.value} {value}"
    else:
        label = render_expression(expr)
    if len(label) > 40:
        label = label[:37] + "..."
    return label


def generate_dot(questions: List[CompiledQuestion], mode: DotMode = DotMode.SIMPLE) -> str:
    """
    Generate Graphviz DOT for a question sequence.

    Args:
        questions: Compiled questions, in output order
        mode: Visualization mode (SIMPLE, DETAILED, MANAGEMENT)

    Returns:
        String containing DOT graph definition
    """
    lines = []

    lines.append("digraph questionnaire {")
    lines.append("  rankdir=LR;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    # =========================================================================
    # NODES
    # =========================================================================

    for question in questions:
        node_id = _escape_dot_id(question.name)
        label = question.name

        if mode == DotMode.DETAILED:
            info = [question.title]
            if question.choices is not None:
                info.append(f"{question.type.value}, {len(question.choices)} choices")
            label = "\n".join([label] + info)

        attrs = [f"label={_escape_dot_string(label)}"]
        if question.type is QuestionType.BOOLEAN:
            attrs.append("shape=diamond")
            attrs.append("fillcolor=lightgreen")
        elif question.choices == []:
            attrs.append("fillcolor=lightgrey")
        lines.append(f"  {node_id} [{', '.join(attrs)}];")

    # =========================================================================
    # EDGES (GATES)
    # =========================================================================

    for question in questions:
        if question.visible_if is None:
            continue
        to_id = _escape_dot_id(question.name)
        edge_attr = ""
        if mode == DotMode.DETAILED:
            edge_attr = f" [label={_escape_dot_string(_edge_label(question))}]"
        for ref in sorted(referenced_names(question.visible_if)):
            lines.append(f"  {_escape_dot_id(ref)} -> {to_id}{edge_attr};")

    # =========================================================================
    # TRACKS (MANAGEMENT MODE)
    # =========================================================================

    if mode == DotMode.MANAGEMENT:
        names_by_track: Dict[str, List[str]] = {}
        for question in questions:
            if question.track:
                names_by_track.setdefault(question.track, []).append(question.name)

        for track, names in names_by_track.items():
            lines.append(f'  subgraph "cluster_{track}" {{')
            lines.append(f'    label={_escape_dot_string(track)};')
            lines.append('    style=filled;')
            lines.append('    color=lightgrey;')
            for name in names:
                lines.append(f"    {_escape_dot_id(name)};")
            lines.append("  }")

    lines.append("}")

    return "\n".join(lines)


def save_dot_file(questions: List[CompiledQuestion], filename, mode: DotMode = DotMode.SIMPLE) -> None:
    """Generate DOT and save to file."""
    dot = generate_dot(questions, mode=mode)
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(dot)


__all__ = ["DotMode", "generate_dot", "save_dot_file"]
