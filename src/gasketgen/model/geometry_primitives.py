"""
Geometric Primitives for outline construction and DXF export.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional, Union, TYPE_CHECKING
import numpy as np
import math

from gasketgen import config

if TYPE_CHECKING:
    import numpy.typing as npt


class Layer(StrEnum):
    """Grouping tag attached to every exported entity."""
    PERIMETER = config.LAYER_PERIMETER
    HOLES = config.LAYER_HOLES


@dataclass
class Vector:
    """
    A vector in the drawing plane representing direction and magnitude.
    """
    x: float
    y: float

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> Vector:
        if scalar == 0.0: raise ZeroDivisionError
        return Vector(self.x / scalar, self.y / scalar)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Direction in radians, (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def normalize(self) -> Vector:
        mag = self.magnitude
        if mag == 0.0: return Vector(0.0, 0.0)
        return self / mag

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y

    @classmethod
    def from_angle(cls, angle_rad: float, length: float = 1.0) -> Vector:
        return cls(length * math.cos(angle_rad), length * math.sin(angle_rad))


@dataclass(frozen=True)
class Point:
    """A point in the shape's local frame (drawings are centered at the origin)."""
    x: float
    y: float

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Point) -> Vector:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_close(self, other: Point, eps: float = config.GEOMETRY_EPS) -> bool:
        return self.distance_to(other) <= eps

    def to_tuple(self) -> tuple[float, float]:
        return (float(self.x), float(self.y))

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])


ORIGIN = Point(0.0, 0.0)


@dataclass
class Line:
    """A straight line between two points."""
    start: Point
    end: Point
    layer: Optional[Layer] = None

    def discretize(self, max_length: Optional[float] = None) -> npt.NDArray[np.float64]:
        if max_length is None:
            return np.array([self.start.to_array(), self.end.to_array()])

        resolution = max(2, math.ceil(self.length / max_length) + 1)
        return np.linspace(self.start.to_array(), self.end.to_array(), resolution)

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


@dataclass
class Circle:
    """A full circle. Holes are exported as CIRCLE entities."""
    center: Point
    radius: float
    layer: Optional[Layer] = None


@dataclass
class Arc:
    """
    A circular arc from `start` to `end` around `center`.

    Unlike a CAD kernel "shortest path" arc, the direction is explicit:
    counter-clockwise unless `clockwise` is set, so arcs larger than a
    half turn are representable.
    """
    start: Point
    center: Point
    end: Point
    clockwise: bool = False
    layer: Optional[Layer] = None

    @property
    def radius(self) -> float:
        return (self.start - self.center).magnitude

    @property
    def start_angle(self) -> float:
        return (self.start - self.center).angle

    @property
    def end_angle(self) -> float:
        return (self.end - self.center).angle

    @property
    def sweep(self) -> float:
        """Signed sweep in radians: positive CCW, negative CW, never zero."""
        diff = self.end_angle - self.start_angle
        if self.clockwise:
            while diff >= 0.0:
                diff -= 2.0 * math.pi
        else:
            while diff <= 0.0:
                diff += 2.0 * math.pi
        return diff

    @property
    def length(self) -> float:
        return abs(self.sweep) * self.radius

    @property
    def midpoint(self) -> Point:
        return self.point_at(0.5)

    def point_at(self, t: float) -> Point:
        """Point at fraction `t` of the sweep (0 = start, 1 = end)."""
        return self.center + Vector.from_angle(self.start_angle + self.sweep * t, self.radius)

    def dxf_angles(self) -> tuple[float, float]:
        """Start/end angles in degrees as DXF expects them (always CCW)."""
        a0 = math.degrees(self.start_angle)
        a1 = math.degrees(self.start_angle + self.sweep)
        if self.clockwise:
            a0, a1 = a1, a0
        return a0 % 360.0, a1 % 360.0

    def segment_count(
        self,
        max_length: float = config.ARC_MAX_SEGMENT_LENGTH,
        min_segments: int = config.ARC_MIN_SEGMENTS,
    ) -> int:
        """Adaptive segment count: proportional to arc length, with a floor."""
        return max(min_segments, math.ceil(self.length / max_length))

    def discretize(
        self,
        max_length: Optional[float] = None,
        min_segments: int = config.ARC_MIN_SEGMENTS,
    ) -> npt.NDArray[np.float64]:
        """
        Generates points along the arc from `start` to `end`, both included.
        """
        if max_length is not None:
            n = self.segment_count(max_length=max_length, min_segments=min_segments)
        else:
            n = max(min_segments, 1)

        angles = self.start_angle + self.sweep * np.linspace(0.0, 1.0, n + 1)
        x = self.center.x + self.radius * np.cos(angles)
        y = self.center.y + self.radius * np.sin(angles)
        return np.column_stack((x, y))


@dataclass
class Polyline:
    """An ordered point sequence; closed polylines have an implicit last->first segment."""
    points: npt.NDArray[np.float64]
    closed: bool = True
    layer: Optional[Layer] = None

    def __post_init__(self) -> None:
        self.points = np.asarray(self.points, dtype=np.float64).reshape(-1, 2)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def length(self) -> float:
        pts = np.vstack((self.points, self.points[:1])) if self.closed else self.points
        return float(np.sum(np.linalg.norm(np.diff(pts, axis=0), axis=1)))


# Union type for list handling
GeometricEntity = Union[Line, Arc]
DrawingEntity = Union[Line, Arc, Circle, Polyline]


@dataclass
class BoundaryLoop:
    """
    A single closed loop built from consecutive Lines and Arcs.
    Each entity starts where the previous one ends.
    """
    entities: List[GeometricEntity] = field(default_factory=list)

    def add_entities(self, new_entities: List[GeometricEntity]) -> None:
        self.entities.extend(new_entities)

    def close_loop(self) -> None:
        """
        Automatically adds a line from the last point back to the first point
        if they are not coincident.
        """
        if not self.entities:
            return

        first_point = self.entities[0].start
        last_point = self.entities[-1].end

        if first_point.distance_to(last_point) > 1e-6:
            self.entities.append(Line(start=last_point, end=first_point, layer=self.entities[-1].layer))

    @property
    def lines(self) -> list[Line]:
        return [e for e in self.entities if isinstance(e, Line)]

    @property
    def arcs(self) -> list[Arc]:
        return [e for e in self.entities if isinstance(e, Arc)]

    @property
    def length(self) -> float:
        return sum(e.length for e in self.entities)

    def is_closed(self, eps: float = 1e-6) -> bool:
        if not self.entities:
            return False
        joints_ok = all(
            a.end.distance_to(b.start) <= eps
            for a, b in zip(self.entities, self.entities[1:])
        )
        return joints_ok and self.entities[-1].end.distance_to(self.entities[0].start) <= eps

    def set_layer(self, layer: Layer) -> BoundaryLoop:
        for e in self.entities:
            e.layer = layer
        return self

    def to_points(
        self,
        max_length: float = config.ARC_MAX_SEGMENT_LENGTH,
        min_segments: int = config.ARC_MIN_SEGMENTS,
    ) -> npt.NDArray[np.float64]:
        """
        Sample the loop into a closed point ring (the last point is not repeated).
        Arcs use the adaptive segment count; lines contribute their endpoints only.
        """
        chunks = []
        for i, entity in enumerate(self.entities):
            if isinstance(entity, Arc):
                pts = entity.discretize(max_length=max_length, min_segments=min_segments)
            else:
                pts = entity.discretize()
            # shared joint with the previous entity
            chunks.append(pts if i == 0 else pts[1:])

        if not chunks:
            return np.empty((0, 2))

        ring = np.vstack(chunks)
        if len(ring) > 1 and np.allclose(ring[0], ring[-1]):
            ring = ring[:-1]
        return ring

    def to_polyline(self, layer: Optional[Layer] = None, **kwargs) -> Polyline:
        return Polyline(points=self.to_points(**kwargs), closed=True, layer=layer)
