"""
Shape Primitives
================
Closed boundary descriptors for the gasket generators. Each descriptor keeps
its analytic parameters (used by the clearance math) and knows how to turn
itself into exportable entities (used by the preview and the DXF writer).

Classes:
    EllipseShape: Two diameters, sampled into a polyline.
    RoundedRectShape: Axis-aligned rectangle with optional corner radius.
    ObroundShape: Stadium, exported as LINE/ARC entities.

Functions:
    obround_loop: Shortcut for `ObroundShape(long, short).loop()`.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, TYPE_CHECKING

import numpy as np

from gasketgen import config
from gasketgen.model.geometry_primitives import (
    Arc, BoundaryLoop, Layer, Line, Point, Polyline, ORIGIN,
)
from gasketgen.model.geometry_utils import arc_points, ellipse_to_polyline

if TYPE_CHECKING:
    import numpy.typing as npt


def clamp_corner_radius(r: Optional[float], width: float, height: float) -> float:
    """Clamp a corner radius into [0, min(width, height) / 2]; blank or negative -> 0."""
    if r is None or not math.isfinite(r) or r <= 0:
        return 0.0
    return max(0.0, min(r, min(width / 2, height / 2)))


def ellipse_points(long_dia: float, short_dia: float, segments: int = config.ELLIPSE_SEGMENTS) -> npt.NDArray[np.float64]:
    """Boundary ring of an origin-centered ellipse, long axis along X."""
    return ellipse_to_polyline(ORIGIN, long_dia / 2, short_dia / 2, segments)


def rounded_rect_points(
    width: float,
    height: float,
    corner_radius: Optional[float] = 0.0,
    segments_per_corner: int = config.CORNER_SEGMENTS,
) -> npt.NDArray[np.float64]:
    """
    Boundary ring of an origin-centered rounded rectangle, counter-clockwise.

    With a zero corner radius the ring is exactly the 4 corners. Otherwise
    each corner is a quarter arc of `segments_per_corner` segments, emitted
    bottom-right -> top-right -> top-left -> bottom-left so that consecutive
    points are already in boundary order.
    """
    hw = width / 2
    hh = height / 2
    rr = clamp_corner_radius(corner_radius, width, height)

    if rr == 0:
        return np.array([
            (-hw, -hh),
            (hw, -hh),
            (hw, hh),
            (-hw, hh),
        ], dtype=np.float64)

    n = segments_per_corner + 1
    corners = [
        ((hw - rr, -hh + rr), -math.pi / 2, 0.0),
        ((hw - rr, hh - rr), 0.0, math.pi / 2),
        ((-hw + rr, hh - rr), math.pi / 2, math.pi),
        ((-hw + rr, -hh + rr), math.pi, 3 * math.pi / 2),
    ]
    return np.vstack([arc_points(c, rr, a0, a1, n_points=n) for c, a0, a1 in corners])


@dataclass(frozen=True)
class EllipseShape:
    long: float
    short: float

    def points(self, segments: int = config.ELLIPSE_SEGMENTS) -> npt.NDArray[np.float64]:
        return ellipse_points(self.long, self.short, segments)

    def to_entities(self, layer: Layer, segments: int = config.ELLIPSE_SEGMENTS) -> list[Polyline]:
        return [Polyline(self.points(segments), closed=True, layer=layer)]


@dataclass(frozen=True)
class RoundedRectShape:
    width: float
    height: float
    corner_radius: float = 0.0

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2

    @property
    def effective_radius(self) -> float:
        return clamp_corner_radius(self.corner_radius, self.width, self.height)

    def points(self, segments_per_corner: int = config.CORNER_SEGMENTS) -> npt.NDArray[np.float64]:
        return rounded_rect_points(self.width, self.height, self.corner_radius, segments_per_corner)

    def to_entities(self, layer: Layer, segments_per_corner: int = config.CORNER_SEGMENTS) -> list[Polyline]:
        return [Polyline(self.points(segments_per_corner), closed=True, layer=layer)]


@dataclass(frozen=True)
class ObroundShape:
    """
    Stadium with its long axis along X: two straights of length `long - short`
    joined by semicircular caps of radius `short / 2` centered at
    (+-(long - short) / 2, 0).
    """
    long: float
    short: float

    def __post_init__(self) -> None:
        if self.long < self.short:
            raise ValueError(f"Long ({self.long}) must be >= short ({self.short}).")

    @property
    def radius(self) -> float:
        return self.short / 2

    @property
    def straight(self) -> float:
        return self.long - self.short

    @property
    def perimeter(self) -> float:
        return 2 * self.straight + math.pi * self.short

    def loop(self) -> BoundaryLoop:
        """
        CCW loop starting on the top straight: top line (right -> left),
        left cap, bottom line (left -> right), right cap.
        Zero-length straights (a circle) are omitted.
        """
        r = self.radius
        cx = self.straight / 2
        top_right, top_left = Point(cx, r), Point(-cx, r)
        bottom_left, bottom_right = Point(-cx, -r), Point(cx, -r)

        loop = BoundaryLoop()
        if self.straight > 0:
            loop.add_entities([Line(top_right, top_left)])
        loop.add_entities([Arc(top_left, Point(-cx, 0.0), bottom_left)])
        if self.straight > 0:
            loop.add_entities([Line(bottom_left, bottom_right)])
        loop.add_entities([Arc(bottom_right, Point(cx, 0.0), top_right)])
        return loop

    def to_entities(self, layer: Layer) -> list[Line | Arc]:
        return list(self.loop().set_layer(layer).entities)

    def points(self, max_length: float = config.ARC_MAX_SEGMENT_LENGTH) -> npt.NDArray[np.float64]:
        return self.loop().to_points(max_length=max_length)


def obround_loop(long: float, short: float) -> BoundaryLoop:
    """Closed LINE/ARC loop of an origin-centered obround, see `ObroundShape.loop`."""
    return ObroundShape(long, short).loop()
