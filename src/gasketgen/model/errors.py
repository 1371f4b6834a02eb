"""
Validation Issue Taxonomy
=========================
Every problem found while turning raw inputs into a GeometrySpec is one of
the classes below. They are exceptions so that low-level helpers (the unit
parser, the tangent construction) can raise them, but validation collects
them into a list instead of stopping at the first one.
"""
from __future__ import annotations

from typing import Iterable, Optional


class GasketIssue(ValueError):
    """Base class for a single user-facing validation issue."""

    blocking: bool = True

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self.field!r}, message={self.message!r})"


class ParseError(GasketIssue):
    """Malformed numeric or fraction text."""


class ConstraintError(GasketIssue):
    """A dimensional relationship is violated (short > long, ID >= OD, ...)."""


class ClearanceError(GasketIssue):
    """A gap that must be strictly positive is zero or negative."""


class GeometricPreconditionError(GasketIssue):
    """A geometric construction has no solution for the given inputs."""


class GradedWarning(GasketIssue):
    """Clearance below the soft threshold; export is still permitted."""

    blocking = False


class GeometryValidationError(ValueError):
    """Raised when a caller insists on a spec that failed validation."""

    def __init__(self, issues: Iterable[GasketIssue]) -> None:
        self.issues = list(issues)
        summary = "; ".join(issue.message for issue in self.issues)
        super().__init__(f"{len(self.issues)} validation error(s): {summary}")


class StaleGeometryError(RuntimeError):
    """Export was requested without a spec validated from the current inputs."""
