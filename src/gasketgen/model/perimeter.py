"""
Arc-length parameterization of an obround (stadium) boundary.

The walk starts at the rightmost point on the long axis and runs
counter-clockwise through five regions:

    1. right cap, upper quarter   (0 deg -> 90 deg)
    2. top straight               (right -> left)
    3. left cap, full half        (90 deg -> 270 deg)
    4. bottom straight            (left -> right)
    5. right cap, lower quarter   (270 deg -> 360 deg)

This is what places firetube bolt holes evenly along a non-circular bolt
"circle".
"""
from __future__ import annotations

from enum import StrEnum
import logging
import math

from gasketgen.model.errors import ClearanceError
from gasketgen.model.geometry_primitives import Point

logger = logging.getLogger(__name__)


class CenterMode(StrEnum):
    """Whether the first hole sits on the long axis or straddles it."""
    ON = "on"
    OFF = "off"


def obround_perimeter(long: float, short: float) -> float:
    """P(L, W) = 2 (L - W) + pi W."""
    return 2 * (long - short) + math.pi * short


def point_at_arc_length(long: float, short: float, s: float) -> Point:
    """
    Map a distance along the obround boundary to a point.

    Args:
        long: Long dimension L (>= short).
        short: Short dimension W (> 0).
        s: Arc length from the start point; any real value, taken modulo the perimeter.

    Returns:
        The boundary point at that distance.
    """
    r = short / 2
    straight = long - short
    cx = straight / 2
    quarter = math.pi * r / 2
    half = math.pi * r
    total = obround_perimeter(long, short)

    d = s % total

    if d <= quarter:
        ang = (d / quarter) * (math.pi / 2)
        return Point(cx + r * math.cos(ang), r * math.sin(ang))
    d -= quarter

    if d <= straight:
        return Point(cx - d, r)
    d -= straight

    if d <= half:
        ang = math.pi / 2 + (d / half) * math.pi
        return Point(-cx + r * math.cos(ang), r * math.sin(ang))
    d -= half

    if d <= straight:
        return Point(-cx + d, -r)
    d -= straight

    ang = 3 * math.pi / 2 + (d / quarter) * (math.pi / 2)
    return Point(cx + r * math.cos(ang), r * math.sin(ang))


def arc_length_at_point(long: float, short: float, p: Point) -> float:
    """
    Inverse of `point_at_arc_length` for a point on the boundary.

    Returns:
        Arc length in [0, P).
    """
    r = short / 2
    straight = long - short
    cx = straight / 2
    quarter = math.pi * r / 2
    half = math.pi * r
    total = obround_perimeter(long, short)

    if p.x >= cx:
        # Right cap: angle measured from +X, wrapped to [0, 2pi)
        ang = math.atan2(p.y, p.x - cx) % (2 * math.pi)
        if ang <= math.pi / 2:
            s = ang * r
        else:
            s = quarter + straight + half + straight + (ang - 3 * math.pi / 2) * r
    elif p.x <= -cx:
        ang = math.atan2(p.y, p.x + cx) % (2 * math.pi)
        s = quarter + straight + (ang - math.pi / 2) * r
    elif p.y > 0:
        s = quarter + (cx - p.x)
    else:
        s = quarter + straight + half + (p.x + cx)

    return s % total


def hole_spacing(long: float, short: float, count: int) -> float:
    """Center-to-center spacing along the boundary for `count` even holes."""
    return obround_perimeter(long, short) / count


def place_holes_on_obround(
    long: float,
    short: float,
    count: int,
    mode: CenterMode = CenterMode.ON,
    hole_dia: float | None = None,
) -> list[Point]:
    """
    Evenly distribute `count` hole centers along the obround by arc length.

    Holes are placed at s_i = i * P / N + shift, where shift is 0 for
    `CenterMode.ON` and half the spacing for `CenterMode.OFF`.

    Raises:
        ClearanceError: If `hole_dia` is given and the spacing does not exceed it.
    """
    if count <= 0:
        raise ValueError(f"Hole count must be positive, got {count}.")

    c2c = hole_spacing(long, short, count)
    if hole_dia is not None and c2c <= hole_dia:
        raise ClearanceError(
            "Bolt holes overlap: Bolt Hole Center To Center is not large enough for the hole diameter.",
            field="hole_count",
        )

    shift = c2c / 2 if CenterMode(mode) is CenterMode.OFF else 0.0
    logger.debug(f"Placing {count} holes on {long} x {short} obround, c2c={c2c:.4f}, shift={shift:.4f}")
    return [point_at_arc_length(long, short, i * c2c + shift) for i in range(count)]
