"""
Tests for external tangents, outside-arc selection and the jumper outline.

Run with: pytest tests/ -v
"""
import math

import numpy as np
import pytest

from gasketgen.model.errors import GeometricPreconditionError
from gasketgen.model.geometry_primitives import Arc, Circle, Line, Point
from gasketgen.model.tangents import (
    JumperCircles, build_jumper_outline, choose_outside_arc, external_tangents, tangent_precondition_holds,
)


def assert_tangent(line_p1: Point, line_p2: Point, circle: Circle) -> None:
    """The segment direction is perpendicular to the radius at each tangency point."""
    direction = line_p2 - line_p1
    for p in (line_p1, line_p2):
        radial = p - circle.center
        if abs(radial.magnitude - circle.radius) < 1e-9:
            assert abs(direction.normalize().dot(radial.normalize())) < 1e-9


class TestExternalTangents:
    """Test tangent construction between two circles."""

    def test_equal_radii_are_horizontal(self) -> None:
        pair = external_tangents(Circle(Point(-2.0, 0.0), 1.0), Circle(Point(2.0, 0.0), 1.0))
        assert (pair.top.p1.x, pair.top.p1.y) == pytest.approx((-2.0, 1.0))
        assert (pair.top.p2.x, pair.top.p2.y) == pytest.approx((2.0, 1.0))
        assert (pair.bottom.p1.x, pair.bottom.p1.y) == pytest.approx((-2.0, -1.0))

    def test_unequal_radii(self) -> None:
        a = Circle(Point(-2.0, 0.0), 1.0)
        b = Circle(Point(0.0, 0.0), 2.0)
        pair = external_tangents(a, b)

        # phi = acos(-1/2) = 120 deg
        assert (pair.top.p1.x, pair.top.p1.y) == pytest.approx((-2.5, math.sqrt(3) / 2))
        assert (pair.top.p2.x, pair.top.p2.y) == pytest.approx((-1.0, math.sqrt(3)))
        assert pair.top.p2.y > 0 > pair.bottom.p2.y

        for line in (pair.top, pair.bottom):
            assert line.p1.distance_to(a.center) == pytest.approx(a.radius)
            assert line.p2.distance_to(b.center) == pytest.approx(b.radius)
            assert_tangent(line.p1, line.p2, a)
            assert_tangent(line.p1, line.p2, b)

    def test_as_line(self) -> None:
        pair = external_tangents(Circle(Point(-2.0, 0.0), 1.0), Circle(Point(2.0, 0.0), 1.0))
        line = pair.top.as_line()
        assert isinstance(line, Line)
        assert line.length == pytest.approx(4.0)

    def test_contained_circle_rejected(self) -> None:
        with pytest.raises(GeometricPreconditionError):
            external_tangents(Circle(Point(0.0, 0.0), 3.0), Circle(Point(1.0, 0.0), 1.0))

    def test_internally_touching_rejected(self) -> None:
        with pytest.raises(GeometricPreconditionError):
            external_tangents(Circle(Point(0.0, 0.0), 3.0), Circle(Point(2.0, 0.0), 1.0))


class TestChooseOutsideArc:
    """Test arc selection by midpoint predicate."""

    def test_single_candidate_wins(self) -> None:
        circle = Circle(Point(0.0, 0.0), 1.0)
        arc = choose_outside_arc(circle, Point(0.0, -1.0), Point(0.0, 1.0), lambda p: p.x < 0)
        assert arc.clockwise
        assert arc.midpoint.x == pytest.approx(-1.0)

    def test_tie_takes_shorter_arc(self) -> None:
        circle = Circle(Point(0.0, 0.0), 1.0)
        start = Point(1.0, 0.0)
        end = Point(math.cos(0.5), math.sin(0.5))
        arc = choose_outside_arc(circle, start, end, lambda p: True)
        assert isinstance(arc, Arc)
        assert arc.length == pytest.approx(0.5)


class TestJumperOutline:
    """Test the compound tangent-arc OD."""

    def test_precondition(self) -> None:
        assert tangent_precondition_holds(6.0, 1.0, 2.0)
        assert not tangent_precondition_holds(2.0, 1.0, 2.0)
        assert not tangent_precondition_holds(1.0, 1.0, 2.0)

    def test_structure(self) -> None:
        loop = build_jumper_outline(6.0, 1.0, 2.0)
        assert len(loop.entities) == 8
        assert len(loop.lines) == 4
        assert len(loop.arcs) == 4
        assert [type(e) for e in loop.entities] == [Arc, Line] * 4
        assert loop.is_closed()

    def test_arcs_come_from_three_circles(self) -> None:
        loop = build_jumper_outline(6.0, 1.0, 2.0)
        centers = {(round(a.center.x, 9), round(a.center.y, 9)) for a in loop.arcs}
        assert centers == {(-3.0, 0.0), (0.0, 0.0), (3.0, 0.0)}

    def test_outline_encloses_all_circles(self) -> None:
        circles = JumperCircles.on_axis(6.0, 1.0, 2.0)
        pts = build_jumper_outline(6.0, 1.0, 2.0).to_points()
        for circle in (circles.left, circles.center, circles.right):
            d = np.hypot(pts[:, 0] - circle.center.x, pts[:, 1] - circle.center.y)
            assert np.all(d >= circle.radius - 1e-9)

    def test_sampled_extents(self) -> None:
        pts = build_jumper_outline(6.0, 1.0, 2.0).to_points()
        assert pts[:, 0].min() == pytest.approx(-4.0, abs=1e-2)
        assert pts[:, 0].max() == pytest.approx(4.0, abs=1e-2)
        assert pts[:, 1].max() == pytest.approx(2.0, abs=1e-2)
        assert pts[:, 1].min() == pytest.approx(-2.0, abs=1e-2)

    def test_symmetric_about_both_axes(self) -> None:
        loop = build_jumper_outline(6.0, 1.0, 2.0)
        assert loop.length > 0
        pts = loop.to_points()
        assert pts[:, 0].min() == pytest.approx(-pts[:, 0].max(), abs=1e-6)
        assert pts[:, 1].min() == pytest.approx(-pts[:, 1].max(), abs=1e-6)

    def test_valid_just_above_threshold(self) -> None:
        # cc / 2 exceeds |Rb - Rc| = 1 by 1e-3
        loop = build_jumper_outline(2.002, 1.0, 2.0)
        assert loop.is_closed()
        assert len(loop.arcs) == 4
        left, center_top = loop.entities[0], loop.entities[2]
        assert left.midpoint.x < -1.001
        assert center_top.midpoint.y > 0

    def test_rejected_at_threshold(self) -> None:
        with pytest.raises(GeometricPreconditionError):
            build_jumper_outline(2.0, 1.0, 2.0)

    def test_equal_outer_radii_form_stadium(self) -> None:
        # bolt 1 + 0.5 edge and ID 1 + 0.5 edge: both outer radii are 1
        loop = build_jumper_outline(4.0, 1.0, 1.0)
        assert loop.is_closed()
        assert len(loop.arcs) == 2
        assert all(abs(arc.sweep) < 2 * math.pi for arc in loop.arcs)
        assert loop.length == pytest.approx(2 * math.pi * 1.0 + 2 * 4.0)

    def test_coincident_points_give_no_arc(self) -> None:
        circle = Circle(Point(0.0, 0.0), 1.0)
        assert choose_outside_arc(circle, Point(0.0, 1.0), Point(0.0, 1.0), lambda p: p.y > 0) is None
