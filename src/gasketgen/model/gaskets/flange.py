"""
Flange Gasket
=============
Rectangular OD with optional corner radius, four bolt holes on a rectangular
pattern and a center cutout that is either a circle or a rounded rectangle.

Every clearance here is strict: touching counts as a failure, any positive
gap passes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Optional

from gasketgen.model.clearance import (
    ClearanceCheck, ClearanceReport, STRICT_POLICY,
    gap_circle_to_circle, gap_circle_to_rounded_cutout, gap_circle_to_rounded_od,
)
from gasketgen.model.errors import ConstraintError
from gasketgen.model.gaskets.base import (
    FieldInfo, FieldReader, FieldType, GasketDrawing, GeometrySpec, ShapeKind,
)
from gasketgen.model.gaskets.registry import register_gasket
from gasketgen.model.geometry_primitives import Circle, Layer, ORIGIN, Point
from gasketgen.model.shapes import RoundedRectShape, clamp_corner_radius
from gasketgen.model.units import format_dimension

logger = logging.getLogger(__name__)


class CutoutType(StrEnum):
    CIRCLE = "circle"
    RECT = "rect"


@register_gasket
@dataclass(frozen=True)
class FlangeSpec(GeometrySpec):
    KIND = ShapeKind.FLANGE
    TITLE = "Flange Gasket"
    FIELDS = (
        FieldInfo("od_x", "OD X"),
        FieldInfo("od_y", "OD Y"),
        FieldInfo("corner_radius", "Corner Radius", required=False),
        FieldInfo("bolt_hole_dia", "Bolt Hole Diameter"),
        FieldInfo("bolt_cc_x", "Bolt Hole Center To Center X"),
        FieldInfo("bolt_cc_y", "Bolt Hole Center To Center Y"),
        FieldInfo("cutout_type", "Center Cutout Type", type=FieldType.CHOICE, required=False,
                  choices=tuple(c.value for c in CutoutType), default=CutoutType.CIRCLE.value),
        FieldInfo("cutout_dia", "Center Cutout Diameter", required=False),
        FieldInfo("cutout_x", "Center Cutout X", required=False),
        FieldInfo("cutout_y", "Center Cutout Y", required=False),
        FieldInfo("cutout_radius", "Center Cutout Corner Radius", required=False),
    )

    od_x: float
    od_y: float
    bolt_hole_dia: float
    bolt_cc_x: float
    bolt_cc_y: float
    corner_radius: float = 0.0
    cutout_type: CutoutType = CutoutType.CIRCLE
    cutout_dia: Optional[float] = None
    cutout_x: Optional[float] = None
    cutout_y: Optional[float] = None
    cutout_radius: float = 0.0

    # ---- derived geometry ----
    @property
    def outer(self) -> RoundedRectShape:
        return RoundedRectShape(self.od_x, self.od_y, self.corner_radius)

    @property
    def cutout_rect(self) -> RoundedRectShape:
        return RoundedRectShape(self.cutout_x, self.cutout_y, self.cutout_radius)

    @property
    def hole_radius(self) -> float:
        return self.bolt_hole_dia / 2

    @classmethod
    def from_fields(cls, reader: FieldReader) -> Optional[FlangeSpec]:
        od_x = reader.positive("od_x")
        od_y = reader.positive("od_y")
        corner_radius = reader.optional_non_negative("corner_radius")
        if None not in (od_x, od_y, corner_radius) and clamp_corner_radius(corner_radius, od_x, od_y) != corner_radius:
            reader.add(ConstraintError("Corner Radius is too large for the OD.", field="corner_radius"))

        bolt_cc_x = reader.positive("bolt_cc_x")
        bolt_cc_y = reader.positive("bolt_cc_y")
        bolt_hole_dia = reader.positive("bolt_hole_dia")

        cutout_type = reader.choice("cutout_type", CutoutType, default=CutoutType.CIRCLE)
        cutout: dict[str, Optional[float]] = {}
        if cutout_type is CutoutType.CIRCLE:
            cutout["cutout_dia"] = reader.positive("cutout_dia")
        elif cutout_type is CutoutType.RECT:
            cutout["cutout_x"] = reader.positive("cutout_x")
            cutout["cutout_y"] = reader.positive("cutout_y")
            cutout["cutout_radius"] = reader.optional_non_negative("cutout_radius")
            cx, cy, cr = cutout["cutout_x"], cutout["cutout_y"], cutout["cutout_radius"]
            if None not in (cx, cy, cr) and clamp_corner_radius(cr, cx, cy) != cr:
                reader.add(ConstraintError("Center Cutout Corner Radius is too large for the cutout.",
                                           field="cutout_radius"))

        if reader.issues:
            return None
        return cls(
            od_x=od_x,
            od_y=od_y,
            corner_radius=corner_radius,
            bolt_hole_dia=bolt_hole_dia,
            bolt_cc_x=bolt_cc_x,
            bolt_cc_y=bolt_cc_y,
            cutout_type=cutout_type,
            **cutout,
        )

    def place_holes(self) -> list[Point]:
        hx = self.bolt_cc_x / 2
        hy = self.bolt_cc_y / 2
        return [Point(-hx, -hy), Point(hx, -hy), Point(-hx, hy), Point(hx, hy)]

    def compute_clearances(self) -> ClearanceReport:
        report = ClearanceReport()
        holes = self.place_holes()
        r = self.hole_radius

        # 1) Hole to OD, accounting for the OD corner radius
        hole_od = min(
            gap_circle_to_rounded_od(p.x, p.y, r, self.od_x, self.od_y, self.corner_radius)
            for p in holes
        )
        report.add(ClearanceCheck.evaluate(
            "Edge Of Hole to OD", hole_od, STRICT_POLICY, field="bolt_cc_x",
            message="Bolt holes are touching or outside the OD.",
        ))

        # 2) Hole to hole along each spacing direction
        report.add(ClearanceCheck.evaluate(
            "Hole To Hole X", self.bolt_cc_x - self.bolt_hole_dia, STRICT_POLICY, field="bolt_cc_x",
            message="Bolt holes are touching/overlapping each other on X spacing.",
        ))
        report.add(ClearanceCheck.evaluate(
            "Hole To Hole Y", self.bolt_cc_y - self.bolt_hole_dia, STRICT_POLICY, field="bolt_cc_y",
            message="Bolt holes are touching/overlapping each other on Y spacing.",
        ))

        # 3) Cutout inside OD
        if self.cutout_type is CutoutType.CIRCLE:
            cutout_od = gap_circle_to_rounded_od(0.0, 0.0, self.cutout_dia / 2, self.od_x, self.od_y, self.corner_radius)
        else:
            cutout_od = min(
                gap_circle_to_rounded_od(x, y, 0.0, self.od_x, self.od_y, self.corner_radius)
                for x, y in self.cutout_rect.points()
            )
        report.add(ClearanceCheck.evaluate(
            "Center Cutout to OD", cutout_od, STRICT_POLICY, field="cutout_type",
            message="Center cutout is touching or outside the OD.",
        ))

        # 4) Hole to cutout
        if self.cutout_type is CutoutType.CIRCLE:
            hole_cutout = min(gap_circle_to_circle(p, r, ORIGIN, self.cutout_dia / 2) for p in holes)
        else:
            hole_cutout = min(
                gap_circle_to_rounded_cutout(p.x, p.y, r, self.cutout_x, self.cutout_y, self.cutout_radius)
                for p in holes
            )
        report.add(ClearanceCheck.evaluate(
            "Edge Of Hole to Center Cutout", hole_cutout, STRICT_POLICY, field="bolt_hole_dia",
            message="Bolt holes are touching/overlapping the center cutout.",
        ))

        logger.debug(f"Flange clearances: min gap {report.min_gap:.4f}")
        return report

    def build_outline(self) -> GasketDrawing:
        holes = [Circle(p, self.hole_radius, layer=Layer.HOLES) for p in self.place_holes()]
        if self.cutout_type is CutoutType.CIRCLE:
            holes.append(Circle(ORIGIN, self.cutout_dia / 2, layer=Layer.HOLES))
        else:
            holes.extend(self.cutout_rect.to_entities(Layer.HOLES))

        return GasketDrawing(
            perimeter=self.outer.to_entities(Layer.PERIMETER),
            holes=holes,
        )

    def summary(self) -> str:
        f = format_dimension
        od = f'OD {f(self.od_x)}" x {f(self.od_y)}"'
        if self.corner_radius > 0:
            od += f' (R {f(self.corner_radius)}")'
        if self.cutout_type is CutoutType.CIRCLE:
            cutout = f'Cutout {f(self.cutout_dia)}"'
        else:
            cutout = f'Cutout {f(self.cutout_x)}" x {f(self.cutout_y)}" (R {f(self.cutout_radius)}")'
        return (
            f'{od} | Holes {f(self.bolt_hole_dia)}" @ C-C {f(self.bolt_cc_x)}" x {f(self.bolt_cc_y)}" | '
            f'{cutout}'
        )
