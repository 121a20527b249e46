"""
Exception hierarchy for naceform.

Every failure raised by the compiler derives from NaceFormError so that
callers (the CLI in particular) can report a failed run in one place.

There is no partial-success mode: a gated question tree with a missing
or colliding reference cannot be rendered safely, so every error below
aborts the whole compilation run.
"""

from typing import Any, Dict, Optional


class NaceFormError(Exception):
    """Base exception for all naceform errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class TaxonomyLoadError(NaceFormError):
    """Raised when taxonomy records cannot be turned into nodes."""
    pass


class MalformedTaxonomyError(NaceFormError, LookupError):
    """
    Raised when a node has no structural parent.

    Example: a class "0150" in section "A" while no division "01"
    exists in section "A".
    """

    def __init__(self, code: str, section: str, level: int) -> None:
        super().__init__(
            message=(
                f"No structural parent for level-{level} node '{code}' "
                f"in section '{section}'"
            ),
            details={"code": code, "section": section, "level": level},
        )


class DuplicateIdentifierError(NaceFormError):
    """Raised when two compiled questions share the same name."""

    def __init__(self, names) -> None:
        names = sorted(set(names))
        super().__init__(
            message=f"Duplicate question names: {', '.join(names)}",
            details={"names": names},
        )


class ForwardReferenceError(NaceFormError):
    """Raised when a visibleIf references a question that is not defined earlier."""

    def __init__(self, question: str, reference: str) -> None:
        super().__init__(
            message=(
                f"Question '{question}' is gated on '{reference}', "
                f"which does not appear before it"
            ),
            details={"question": question, "reference": reference},
        )


class PolicyConfigurationError(NaceFormError):
    """Raised when a compilation policy is inconsistent."""
    pass


class ExpressionParseError(NaceFormError, ValueError):
    """Raised when a visibleIf string cannot be parsed."""
    pass
