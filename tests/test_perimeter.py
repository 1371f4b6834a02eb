"""
Tests for the obround arc-length parameterization and hole placement.

Run with: pytest tests/ -v
"""
import math

import pytest

from gasketgen.model.errors import ClearanceError
from gasketgen.model.geometry_primitives import Point
from gasketgen.model.perimeter import (
    CenterMode, arc_length_at_point, hole_spacing, obround_perimeter, place_holes_on_obround, point_at_arc_length,
)

L, W = 10.0, 4.0
P = 2 * (L - W) + math.pi * W


def on_obround(p: Point, long: float, short: float, tol: float = 1e-9) -> bool:
    r = short / 2
    cx = (long - short) / 2
    if abs(p.x) <= cx:
        return abs(abs(p.y) - r) <= tol
    cap = Point(math.copysign(cx, p.x), 0.0)
    return abs(p.distance_to(cap) - r) <= tol


class TestObroundPerimeter:
    """Test perimeter length."""

    def test_formula(self) -> None:
        assert obround_perimeter(L, W) == pytest.approx(P)

    def test_circle(self) -> None:
        assert obround_perimeter(4.0, 4.0) == pytest.approx(4.0 * math.pi)

    def test_spacing(self) -> None:
        assert hole_spacing(L, W, 8) == pytest.approx(P / 8)


class TestPointAtArcLength:
    """Test the five-region boundary walk."""

    def test_start_is_rightmost(self) -> None:
        p = point_at_arc_length(L, W, 0.0)
        assert (p.x, p.y) == pytest.approx((5.0, 0.0))

    def test_end_of_first_quarter(self) -> None:
        p = point_at_arc_length(L, W, math.pi)
        assert (p.x, p.y) == pytest.approx((3.0, 2.0))

    def test_middle_of_top_straight(self) -> None:
        p = point_at_arc_length(L, W, math.pi + 3.0)
        assert (p.x, p.y) == pytest.approx((0.0, 2.0))

    def test_leftmost(self) -> None:
        p = point_at_arc_length(L, W, math.pi + 6.0 + math.pi)
        assert (p.x, p.y) == pytest.approx((-5.0, 0.0))

    def test_middle_of_bottom_straight(self) -> None:
        p = point_at_arc_length(L, W, math.pi + 6.0 + 2 * math.pi + 3.0)
        assert (p.x, p.y) == pytest.approx((0.0, -2.0), abs=1e-12)

    def test_wraps_modulo_perimeter(self) -> None:
        a = point_at_arc_length(L, W, 1.0)
        b = point_at_arc_length(L, W, 1.0 + P)
        c = point_at_arc_length(L, W, 1.0 - P)
        assert a.is_close(b, 1e-9)
        assert a.is_close(c, 1e-9)

    def test_closure(self) -> None:
        assert point_at_arc_length(L, W, P).is_close(point_at_arc_length(L, W, 0.0), 1e-9)

    @pytest.mark.parametrize("s", [0.0, 0.7, 3.5, 6.0, 9.9, 14.2, 19.0, 24.0])
    def test_points_lie_on_boundary(self, s: float) -> None:
        assert on_obround(point_at_arc_length(L, W, s), L, W)

    def test_circle_case(self) -> None:
        p = point_at_arc_length(4.0, 4.0, math.pi)
        assert (p.x, p.y) == pytest.approx((0.0, 2.0), abs=1e-12)


class TestArcLengthAtPoint:
    """Test the inverse map."""

    @pytest.mark.parametrize("s", [0.0, 1.0, 3.5, 6.0, 9.9, 14.2, 19.0, 24.0])
    def test_inverse(self, s: float) -> None:
        p = point_at_arc_length(L, W, s)
        assert arc_length_at_point(L, W, p) == pytest.approx(s, abs=1e-9)


class TestPlaceHoles:
    """Test even hole distribution in both center modes."""

    def test_center_on_first_hole_on_axis(self) -> None:
        holes = place_holes_on_obround(L, W, 8, CenterMode.ON)
        assert (holes[0].x, holes[0].y) == pytest.approx((5.0, 0.0))

    def test_center_off_first_hole_half_spaced(self) -> None:
        holes = place_holes_on_obround(L, W, 8, CenterMode.OFF)
        expected = point_at_arc_length(L, W, P / 16)
        assert holes[0].is_close(expected, 1e-12)
        assert holes[0].y > 0

    def test_mode_accepts_plain_string(self) -> None:
        assert place_holes_on_obround(L, W, 8, "off")[0].is_close(place_holes_on_obround(L, W, 8, CenterMode.OFF)[0])

    @pytest.mark.parametrize("mode", [CenterMode.ON, CenterMode.OFF])
    def test_even_spacing(self, mode: CenterMode) -> None:
        n = 12
        holes = place_holes_on_obround(L, W, n, mode)
        assert len(holes) == n
        positions = [arc_length_at_point(L, W, p) for p in holes]
        for a, b in zip(positions, positions[1:] + [positions[0] + P]):
            assert (b - a) % P == pytest.approx(P / n, abs=1e-9)

    def test_holes_on_boundary(self) -> None:
        for p in place_holes_on_obround(L, W, 20, CenterMode.OFF):
            assert on_obround(p, L, W)

    def test_symmetric_about_x_axis(self) -> None:
        holes = place_holes_on_obround(L, W, 8, CenterMode.ON)
        ys = sorted(round(p.y, 9) for p in holes)
        assert ys == sorted(-y for y in ys)

    def test_zero_count_rejected(self) -> None:
        with pytest.raises(ValueError):
            place_holes_on_obround(L, W, 0)

    def test_overlap_is_clearance_error(self) -> None:
        # P = 10 pi, spacing ~0.785 for 40 holes, less than a 1.0 hole
        with pytest.raises(ClearanceError) as exc_info:
            place_holes_on_obround(10.0, 10.0, 40, CenterMode.ON, hole_dia=1.0)
        assert exc_info.value.field == "hole_count"

    def test_touching_is_clearance_error(self) -> None:
        with pytest.raises(ClearanceError):
            place_holes_on_obround(L, W, 4, hole_dia=P / 4)
