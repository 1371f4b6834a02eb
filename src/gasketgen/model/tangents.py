"""
Tangent-Arc Outline Builder
===========================
Builds the jumper OD: three circles on the X axis (left bolt outer, center
outer, right bolt outer) wrapped by their external tangent lines, with the
outward-facing arc of each circle between its tangency points.

Loop order (clockwise, starting at the bottom of the left circle):
    left outer arc -> tangent -> center top arc -> tangent ->
    right outer arc -> tangent -> center bottom arc -> tangent (closes)
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, Optional

from gasketgen.model.errors import GeometricPreconditionError
from gasketgen.model.geometry_primitives import (
    Arc, BoundaryLoop, Circle, Line, Point, Vector,
)

logger = logging.getLogger(__name__)

ArcPredicate = Callable[[Point], bool]


@dataclass(frozen=True)
class TangentLine:
    """Tangency point `p1` on the first circle and `p2` on the second."""
    p1: Point
    p2: Point

    def as_line(self) -> Line:
        return Line(self.p1, self.p2)


@dataclass(frozen=True)
class TangentPair:
    top: TangentLine
    bottom: TangentLine


def external_tangents(a: Circle, b: Circle) -> TangentPair:
    """
    Compute both external tangent lines of circles `a` and `b`.

    The tangency points sit at angles base +- phi on both circles, where base
    is the direction from a to b and phi = acos((ra - rb) / d). The line whose
    tangency point on `b` is higher is "top".

    Raises:
        GeometricPreconditionError: If d <= |ra - rb| (one circle contains the
            other, so no straight external tangent exists).
    """
    baseline = b.center - a.center
    d = baseline.magnitude

    if not d > abs(a.radius - b.radius):
        raise GeometricPreconditionError(
            "OD offsets create a contained-circle condition, cannot form straight tangent lines. "
            "Adjust OD offsets or spacing."
        )

    base = baseline.angle
    phi = math.acos((a.radius - b.radius) / d)

    lines = []
    for angle in (base + phi, base - phi):
        direction = Vector.from_angle(angle)
        lines.append(TangentLine(
            p1=a.center + direction * a.radius,
            p2=b.center + direction * b.radius,
        ))

    first, second = lines
    if first.p2.y >= second.p2.y:
        return TangentPair(top=first, bottom=second)
    return TangentPair(top=second, bottom=first)


def choose_outside_arc(circle: Circle, start: Point, end: Point, wants: ArcPredicate) -> Optional[Arc]:
    """
    Pick the arc of `circle` from `start` to `end` whose midpoint satisfies `wants`.

    Two arcs join any two points on a circle. If exactly one candidate's
    midpoint passes, it wins; if both pass, the shorter one is taken.
    If neither passes the shorter one is returned as well.

    Returns None when `start` and `end` coincide: the tangents meet on the
    circle and no arc belongs in the outline.
    """
    if start.is_close(end):
        logger.debug(f"Tangency points coincide on circle r={circle.radius:.4f}; no arc emitted.")
        return None

    ccw = Arc(start=start, center=circle.center, end=end, clockwise=False)
    cw = Arc(start=start, center=circle.center, end=end, clockwise=True)

    ok_ccw = wants(ccw.midpoint)
    ok_cw = wants(cw.midpoint)

    if ok_ccw and not ok_cw:
        return ccw
    if ok_cw and not ok_ccw:
        return cw

    logger.debug(
        f"Ambiguous outside arc on circle r={circle.radius:.4f} at "
        f"({circle.center.x:.4f}, {circle.center.y:.4f}): ccw={ok_ccw}, cw={ok_cw}; taking the shorter arc."
    )
    return ccw if ccw.length <= cw.length else cw


@dataclass(frozen=True)
class JumperCircles:
    left: Circle
    center: Circle
    right: Circle

    @classmethod
    def on_axis(cls, cc: float, bolt_outer_r: float, center_outer_r: float) -> JumperCircles:
        return cls(
            left=Circle(Point(-cc / 2, 0.0), bolt_outer_r),
            center=Circle(Point(0.0, 0.0), center_outer_r),
            right=Circle(Point(cc / 2, 0.0), bolt_outer_r),
        )


def tangent_precondition_holds(cc: float, bolt_outer_r: float, center_outer_r: float) -> bool:
    """External tangents between a bolt circle and the center circle need cc/2 > |Rb - Rc|."""
    return cc / 2 > abs(bolt_outer_r - center_outer_r)


def build_jumper_outline(cc: float, bolt_outer_r: float, center_outer_r: float) -> BoundaryLoop:
    """
    Build the closed compound OD loop of a jumper gasket.

    Args:
        cc: Center-to-center spacing of the two bolt holes.
        bolt_outer_r: Bolt hole radius + bolt edge-to-OD clearance.
        center_outer_r: Center ID radius + ID edge-to-OD clearance.

    Returns:
        A closed BoundaryLoop of 4 tangent lines and 4 arcs taken from the 3 circles
        (2 arcs when the bolt and center outer radii are equal).

    Raises:
        GeometricPreconditionError: If the straight tangents do not exist.
    """
    circles = JumperCircles.on_axis(cc, bolt_outer_r, center_outer_r)
    L, C, R = circles.left, circles.center, circles.right

    t_lc = external_tangents(L, C)
    t_cr = external_tangents(C, R)

    l_top, c_left_top = t_lc.top.p1, t_lc.top.p2
    c_right_top, r_top = t_cr.top.p1, t_cr.top.p2
    c_right_bot, r_bot = t_cr.bottom.p1, t_cr.bottom.p2
    l_bot, c_left_bot = t_lc.bottom.p1, t_lc.bottom.p2

    arc_left = choose_outside_arc(L, l_bot, l_top, lambda p: p.x < L.center.x)
    arc_c_top = choose_outside_arc(C, c_left_top, c_right_top, lambda p: p.y > 0)
    arc_right = choose_outside_arc(R, r_top, r_bot, lambda p: p.x > R.center.x)
    arc_c_bot = choose_outside_arc(C, c_right_bot, c_left_bot, lambda p: p.y < 0)

    entities = [
        arc_left,
        Line(l_top, c_left_top),
        arc_c_top,
        Line(c_right_top, r_top),
        arc_right,
        Line(r_bot, c_right_bot),
        arc_c_bot,
        Line(c_left_bot, l_bot),
    ]

    # equal outer radii collapse the center arcs to a point
    loop = BoundaryLoop()
    loop.add_entities([e for e in entities if e is not None])

    logger.debug(f"Jumper outline built: cc={cc}, Rb={bolt_outer_r}, Rc={center_outer_r}, length={loop.length:.4f}")
    return loop
