"""
Expression System for naceform

Gating predicates (visibleIf) are represented as Abstract Syntax Trees,
never as strings, while they live in the compiled model.

Rendering to SurveyJS text and parsing it back are the only places
where predicate strings exist.

Supported shapes:
    {PRIMARY_NACE_CODE} contains 'A - Agriculture'
    {A_AGRICULTURE} = '01 - Crop production'
    {PRIMARY_NACE_CODE_applicability} = true
"""

import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Union

from naceform.errors import ExpressionParseError


class Expression(ABC):
    """
    Base class for all AST expressions.

    Structure only. Rendering lives in `render_expression`.
    """
    pass


class BinaryOperator(Enum):
    """
    Gating operators understood by the survey renderer.

    EQUALS is used when the parent question holds a single value,
    CONTAINS when it holds a set of values (checkbox, tagbox).
    """

    EQUALS = "="
    CONTAINS = "contains"


@dataclass(frozen=True)
class VariableReference(Expression):
    """
    References a question by name.

    Rendered in braces: {A_AGRICULTURE}
    """

    name: str


@dataclass(frozen=True)
class Literal(Expression):
    """
    A constant compared against a question's answer.

    Strings are choice display strings ("01 - Crop production"),
    booleans are used by applicability gates.
    """

    value: Union[str, bool]


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    A single gating comparison.

    Example:
        {A_AGRICULTURE} = '01 - Crop production'

    Becomes:
        BinaryExpression(
            operator=BinaryOperator.EQUALS,
            left=VariableReference("A_AGRICULTURE"),
            right=Literal("01 - Crop production"),
        )
    """

    operator: BinaryOperator
    left: Expression
    right: Expression


def gate(question_name: str, operator: BinaryOperator, value: Union[str, bool]) -> BinaryExpression:
    """Build the predicate `{question_name} <operator> value`."""
    return BinaryExpression(
        operator=operator,
        left=VariableReference(question_name),
        right=Literal(value),
    )


def referenced_names(expr: Expression) -> set:
    """Return every question name an expression refers to."""
    if expr is None:
        return set()
    if isinstance(expr, VariableReference):
        return {expr.name}
    if isinstance(expr, BinaryExpression):
        return referenced_names(expr.left) | referenced_names(expr.right)
    return set()


def render_expression(expr: Expression) -> str:
    """Render an expression in SurveyJS syntax."""
    if isinstance(expr, BinaryExpression):
        left = render_expression(expr.left)
        right = render_expression(expr.right)
        return f"{left} {expr.operator.value} {right}"
    if isinstance(expr, VariableReference):
        return f"{{{expr.name}}}"
    if isinstance(expr, Literal):
        if isinstance(expr.value, bool):
            return "true" if expr.value else "false"
        return f"'{expr.value}'"
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


# Literal values are matched greedily so display strings holding quotes survive.
_PREDICATE_RE = re.compile(
    r"^\{(?P<name>[^{}]+)\}\s+(?P<op>=|contains)\s+(?P<value>'.*'|true|false)$"
)


def parse_predicate(text: str) -> BinaryExpression:
    """
    Parse a rendered visibleIf string back into an expression.

    Raises:
        ExpressionParseError: If the text is not a single gating comparison
    """
    match = _PREDICATE_RE.match(text.strip())
    if match is None:
        raise ExpressionParseError(f"Unsupported visibleIf expression: '{text}'")

    raw_value = match.group("value")
    if raw_value == "true":
        value: Union[str, bool] = True
    elif raw_value == "false":
        value = False
    else:
        value = raw_value[1:-1]

    return gate(match.group("name"), BinaryOperator(match.group("op")), value)
