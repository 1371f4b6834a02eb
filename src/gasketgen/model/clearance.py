"""
Clearance Analyzer
==================
Signed-distance and closed-form gaps between gasket features.

Sign convention for every gap: positive = clear, zero = touching,
negative = overlapping.

Touching is always a hard failure. Only the firetube generator uses the
graded model where small positive gaps are errors or warnings; the
thresholds live in a `ClearancePolicy` so the rule can be applied to other
shapes without touching the math.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import math
from typing import Iterable, Optional

from gasketgen import config
from gasketgen.model.geometry_primitives import Point
from gasketgen.model.shapes import RoundedRectShape, clamp_corner_radius


# ------------------------------------------------------------------------------
# Distance functions
# ------------------------------------------------------------------------------
def sdf_rounded_rect(px: float, py: float, hw: float, hh: float, rr: float) -> float:
    """
    Signed distance from (px, py) to an origin-centered rounded rectangle.

    Args:
        px, py: Query point.
        hw, hh: Half extents.
        rr: Corner radius, already clamped to [0, min(hw, hh)].

    Returns:
        Negative inside, zero on the boundary, positive outside.
    """
    # Reflect into the first quadrant and measure against the inner rectangle
    qx = abs(px) - (hw - rr)
    qy = abs(py) - (hh - rr)

    outside = math.hypot(max(qx, 0.0), max(qy, 0.0))
    inside = min(max(qx, qy), 0.0)
    return outside + inside - rr


def sdf_shape(p: Point, shape: RoundedRectShape) -> float:
    return sdf_rounded_rect(p.x, p.y, shape.half_width, shape.half_height, shape.effective_radius)


def gap_circle_to_rounded_od(x: float, y: float, r: float, width: float, height: float, corner_r: float = 0.0) -> float:
    """Gap from a circle to the OD boundary it must stay inside: (-sdf) - r."""
    rr = clamp_corner_radius(corner_r, width, height)
    return -sdf_rounded_rect(x, y, width / 2, height / 2, rr) - r


def gap_circle_to_rounded_cutout(x: float, y: float, r: float, width: float, height: float, corner_r: float = 0.0) -> float:
    """Gap from a circle to a cutout it must stay outside of: sdf - r."""
    rr = clamp_corner_radius(corner_r, width, height)
    return sdf_rounded_rect(x, y, width / 2, height / 2, rr) - r


def gap_circle_to_circle(c1: Point, r1: float, c2: Point, r2: float) -> float:
    """distance(centers) - (r1 + r2)."""
    return c1.distance_to(c2) - (r1 + r2)


def side_gap(outer_dim: float, inner_dim: float, hole_radius: float) -> float:
    """Edge-of-hole gap measured along a symmetry axis: (outer - inner) / 2 - r."""
    return (outer_dim - inner_dim) / 2 - hole_radius


# ------------------------------------------------------------------------------
# Severity model
# ------------------------------------------------------------------------------
class Severity(StrEnum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ClearancePolicy:
    """
    Classifies a gap.

    A gap <= 0 is always an error. Above that, gaps below `error_below` are
    errors and gaps below `warn_below` are warnings.
    """
    error_below: float = 0.0
    warn_below: float = 0.0

    def classify(self, gap: float) -> Severity:
        if gap <= 0.0 or gap < self.error_below:
            return Severity.ERROR
        if gap < self.warn_below:
            return Severity.WARNING
        return Severity.OK


STRICT_POLICY = ClearancePolicy()
FIRETUBE_POLICY = ClearancePolicy(
    error_below=config.FIRETUBE_ERROR_BELOW,
    warn_below=config.FIRETUBE_WARN_BELOW,
)


@dataclass(frozen=True)
class ClearanceCheck:
    """
    One named gap and its classification.

    `message` replaces the generic report line when the check fails.
    """
    name: str
    gap: float
    severity: Severity
    field: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def evaluate(cls, name: str, gap: float, policy: ClearancePolicy = STRICT_POLICY,
                 field: Optional[str] = None, message: Optional[str] = None) -> ClearanceCheck:
        return cls(name=name, gap=gap, severity=policy.classify(gap), field=field, message=message)

    def describe(self) -> str:
        if self.message and self.severity is Severity.ERROR:
            return self.message
        return f"{self.name}: Current clearance is {self.gap:.3f} inches."


@dataclass
class ClearanceReport:
    """All gaps computed for one spec."""
    checks: list[ClearanceCheck] = field(default_factory=list)

    def add(self, check: ClearanceCheck) -> None:
        self.checks.append(check)

    def extend(self, checks: Iterable[ClearanceCheck]) -> None:
        self.checks.extend(checks)

    @property
    def errors(self) -> list[ClearanceCheck]:
        return [c for c in self.checks if c.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ClearanceCheck]:
        return [c for c in self.checks if c.severity is Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def min_gap(self) -> float:
        return min((c.gap for c in self.checks), default=math.inf)

    def get(self, name: str) -> ClearanceCheck:
        for c in self.checks:
            if c.name == name:
                return c
        raise KeyError(f"No clearance check named '{name}'")
