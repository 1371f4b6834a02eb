"""
Jumper Gasket
=============
A center ID hole flanked by two bolt holes on the X axis. The OD wraps the
three offset circles (bolt radius + bolt edge offset, ID radius + ID edge
offset) with external tangent lines.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Optional

from gasketgen.model.clearance import ClearanceCheck, ClearanceReport, STRICT_POLICY
from gasketgen.model.errors import GasketIssue, GeometricPreconditionError
from gasketgen.model.gaskets.base import FieldInfo, FieldReader, GasketDrawing, GeometrySpec, ShapeKind
from gasketgen.model.gaskets.registry import register_gasket
from gasketgen.model.geometry_primitives import BoundaryLoop, Circle, Layer, ORIGIN, Point
from gasketgen.model.geometry_utils import polyline_extents
from gasketgen.model.tangents import build_jumper_outline, tangent_precondition_holds
from gasketgen.model.units import format_dimension

logger = logging.getLogger(__name__)


@register_gasket
@dataclass(frozen=True)
class JumperSpec(GeometrySpec):
    KIND = ShapeKind.JUMPER
    TITLE = "Jumper Gasket"
    FIELDS = (
        FieldInfo("id_dia", "Center ID Diameter"),
        FieldInfo("bolt_dia", "Bolt Hole Diameter"),
        FieldInfo("cc", "Bolt Hole Center To Center"),
        FieldInfo("bolt_edge_to_od", "Bolt Hole Edge To OD"),
        FieldInfo("id_edge_to_od", "ID Edge To OD"),
    )

    id_dia: float
    bolt_dia: float
    cc: float
    bolt_edge_to_od: float
    id_edge_to_od: float

    # ---- derived geometry ----
    @property
    def bolt_radius(self) -> float:
        return self.bolt_dia / 2

    @property
    def id_radius(self) -> float:
        return self.id_dia / 2

    @property
    def bolt_outer_radius(self) -> float:
        return self.bolt_radius + self.bolt_edge_to_od

    @property
    def center_outer_radius(self) -> float:
        return self.id_radius + self.id_edge_to_od

    @classmethod
    def from_fields(cls, reader: FieldReader) -> Optional[JumperSpec]:
        id_dia = reader.positive("id_dia")
        bolt_dia = reader.positive("bolt_dia")
        cc = reader.positive("cc")
        bolt_edge_to_od = reader.non_negative("bolt_edge_to_od")
        id_edge_to_od = reader.non_negative("id_edge_to_od")

        if reader.issues:
            return None
        return cls(
            id_dia=id_dia,
            bolt_dia=bolt_dia,
            cc=cc,
            bolt_edge_to_od=bolt_edge_to_od,
            id_edge_to_od=id_edge_to_od,
        )

    def check_constraints(self) -> Iterable[GasketIssue]:
        if not tangent_precondition_holds(self.cc, self.bolt_outer_radius, self.center_outer_radius):
            yield GeometricPreconditionError(
                "OD offsets create a contained-circle condition, cannot form straight tangent lines. "
                "Adjust OD offsets or spacing.",
                field="cc",
            )

    def place_holes(self) -> list[Point]:
        return [Point(-self.cc / 2, 0.0), Point(self.cc / 2, 0.0)]

    def compute_clearances(self) -> ClearanceReport:
        report = ClearanceReport()
        report.add(ClearanceCheck.evaluate(
            "Hole To Hole", self.cc - self.bolt_dia, STRICT_POLICY, field="cc",
            message="Bolt holes are touching/overlapping each other.",
        ))
        report.add(ClearanceCheck.evaluate(
            "Edge Of Hole to ID", self.cc / 2 - (self.bolt_radius + self.id_radius), STRICT_POLICY, field="cc",
            message="Bolt holes are touching/overlapping the center ID hole.",
        ))
        return report

    def outline_loop(self) -> BoundaryLoop:
        return build_jumper_outline(self.cc, self.bolt_outer_radius, self.center_outer_radius)

    def od_extents(self) -> tuple[float, float]:
        """Approximate OD width and height, measured on the sampled outline."""
        min_x, min_y, max_x, max_y = polyline_extents(self.outline_loop().to_points())
        return max_x - min_x, max_y - min_y

    def build_outline(self) -> GasketDrawing:
        perimeter = self.outline_loop().to_polyline(layer=Layer.PERIMETER)
        holes = [Circle(ORIGIN, self.id_radius, layer=Layer.HOLES)]
        holes.extend(Circle(p, self.bolt_radius, layer=Layer.HOLES) for p in self.place_holes())
        logger.debug(f"Jumper outline sampled into {len(perimeter)} points")
        return GasketDrawing(perimeter=[perimeter], holes=holes)

    def summary(self) -> str:
        f = format_dimension
        width, height = self.od_extents()
        return (
            f'OD Approx: {f(width, 2)}" x {f(height, 2)}" | '
            f'ID {f(self.id_dia)}" | Bolt {f(self.bolt_dia)}" @ C-C {f(self.cc)}" | '
            f'Edge To OD: bolt {f(self.bolt_edge_to_od)}", ID {f(self.id_edge_to_od)}"'
        )
