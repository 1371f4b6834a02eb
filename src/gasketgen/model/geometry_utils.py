from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from gasketgen.model.geometry_primitives import Point


def ellipse_to_polyline(
    center: Point,
    a: float,
    b: float,
    n_segments: int
) -> npt.NDArray[np.float64]:
    """
    Discretize an ellipse in XY into an (N,2) ring.

    The first point is not repeated at the end; consumers treat the ring as
    closed (DXF closed flag, matplotlib closed patch).

    Args:
        center: (x, y) coordinates of the ellipse center.
        a: Semi-axis along X.
        b: Semi-axis along Y.
        n_segments: Number of segments to use for discretization.

    Returns:
        An array of shape (n_segments, 2) with the point at parameter
        t = 2*pi*i/n_segments equal to (a*cos t, b*sin t) + center.
    """
    theta = np.linspace(0.0, 2.0 * np.pi, n_segments, endpoint=False)
    return np.c_[center.x + a * np.cos(theta), center.y + b * np.sin(theta)]


def arc_points(
    C: tuple[float, float],
    r: float,
    theta_start: float,
    theta_end: float,
    n_points: int = 25
    ) -> npt.NDArray[np.float64]:
    """
    Generate points along a circular arc between two polar angles.

    Args:
        C: Circle center (cx, cy).
        r: Circle radius.
        theta_start: Start angle in radians.
        theta_end: End angle in radians (the arc runs in the direction of the sign of
            `theta_end - theta_start`).
        n_points: Number of points to generate along the arc (including endpoints).

    Returns:
        Array of shape (n_points, 2) containing the (x, y) coordinates of the points along the arc.
    """
    cx, cy = C
    angles = np.linspace(theta_start, theta_end, n_points)

    x = cx + r * np.cos(angles)
    y = cy + r * np.sin(angles)

    return np.column_stack((x, y))


def polyline_extents(points: npt.NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y) of a point array."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])
