"""
Firetube (Obround) Gasket
=========================
Obround OD and ID with bolt holes evenly spaced by arc length along an
obround bolt circle.

The ID is either typed in directly or derived from the OD and a cross
section; when a cross section is given it wins and the ID fields are
ignored.

Side clearances are graded: the long side is measured with the short
dimensions and the short side with the long dimensions. Below the error
threshold the gasket is rejected, below the warning threshold it is
accepted with a warning.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Optional

from gasketgen.model.clearance import (
    ClearanceCheck, ClearancePolicy, ClearanceReport, FIRETUBE_POLICY, STRICT_POLICY, side_gap,
)
from gasketgen.model.errors import ConstraintError, GasketIssue
from gasketgen.model.gaskets.base import (
    FieldInfo, FieldReader, FieldType, GasketDrawing, GeometrySpec, ShapeKind,
)
from gasketgen.model.gaskets.registry import register_gasket
from gasketgen.model.geometry_primitives import Circle, Layer, Point
from gasketgen.model.perimeter import CenterMode, hole_spacing, place_holes_on_obround
from gasketgen.model.shapes import ObroundShape
from gasketgen.model.units import format_dimension

logger = logging.getLogger(__name__)


@register_gasket
@dataclass(frozen=True)
class FiretubeSpec(GeometrySpec):
    KIND = ShapeKind.FIRETUBE
    TITLE = "Firetube Gasket"
    FIELDS = (
        FieldInfo("od_long", "Long Side OD"),
        FieldInfo("od_short", "Short Side OD"),
        FieldInfo("id_long", "Long Side ID", required=False),
        FieldInfo("id_short", "Short Side ID", required=False),
        FieldInfo("cross_section", "Cross Section", required=False),
        FieldInfo("bc_long", "Long Side BC"),
        FieldInfo("bc_short", "Short Side BC"),
        FieldInfo("hole_count", "Number Of Holes", type=FieldType.INTEGER),
        FieldInfo("hole_dia", "Hole Diameter"),
        FieldInfo("center_mode", "Hole Centering", type=FieldType.CHOICE, required=False,
                  choices=tuple(m.value for m in CenterMode), default=CenterMode.ON.value),
    )

    od_long: float
    od_short: float
    bc_long: float
    bc_short: float
    hole_count: int
    hole_dia: float
    center_mode: CenterMode = CenterMode.ON
    id_dims: Optional[tuple[float, float]] = None
    cross_section: Optional[float] = None
    policy: ClearancePolicy = FIRETUBE_POLICY

    # ---- derived geometry ----
    @property
    def id_long(self) -> float:
        if self.cross_section is not None:
            return self.od_long - 2 * self.cross_section
        return self.id_dims[0]

    @property
    def id_short(self) -> float:
        if self.cross_section is not None:
            return self.od_short - 2 * self.cross_section
        return self.id_dims[1]

    @property
    def hole_radius(self) -> float:
        return self.hole_dia / 2

    @property
    def hole_spacing(self) -> float:
        """Center-to-center distance along the bolt circle."""
        return hole_spacing(self.bc_long, self.bc_short, self.hole_count)

    @classmethod
    def from_fields(cls, reader: FieldReader) -> Optional[FiretubeSpec]:
        od_long = reader.positive("od_long")
        od_short = reader.positive("od_short")

        cross_section = reader.optional_positive("cross_section")
        id_dims = None
        if reader.is_blank("cross_section"):
            id_long = reader.positive("id_long")
            id_short = reader.positive("id_short")
            if None not in (id_long, id_short):
                id_dims = (id_long, id_short)

        bc_long = reader.positive("bc_long")
        bc_short = reader.positive("bc_short")
        hole_count = reader.positive_integer("hole_count")
        hole_dia = reader.positive("hole_dia")
        center_mode = reader.choice("center_mode", CenterMode, default=CenterMode.ON)

        if reader.issues:
            return None
        return cls(
            od_long=od_long,
            od_short=od_short,
            bc_long=bc_long,
            bc_short=bc_short,
            hole_count=hole_count,
            hole_dia=hole_dia,
            center_mode=center_mode,
            id_dims=id_dims,
            cross_section=cross_section,
        )

    def check_constraints(self) -> Iterable[GasketIssue]:
        if self.od_long < self.od_short:
            yield ConstraintError("Long Side OD must be the same as or larger than Short Side OD.", field="od_short")
        if self.id_long < self.id_short:
            yield ConstraintError("Long Side ID must be the same as or larger than Short Side ID.", field="id_short")
        if self.bc_long < self.bc_short:
            yield ConstraintError("Long Side BC must be the same as or larger than Short Side BC.", field="bc_short")
        if self.id_short <= 0:
            yield ConstraintError("Cross Section leaves no ID inside the OD.", field="cross_section")
        if self.id_long >= self.od_long or self.id_short >= self.od_short:
            yield ConstraintError("ID must be smaller than OD.", field="id_long")
        if self.bc_long > self.od_long or self.bc_short > self.od_short:
            yield ConstraintError("BC must fit inside OD.", field="bc_long")

    def place_holes(self) -> list[Point]:
        return place_holes_on_obround(
            self.bc_long, self.bc_short, self.hole_count, self.center_mode, hole_dia=self.hole_dia,
        )

    def compute_clearances(self) -> ClearanceReport:
        report = ClearanceReport()
        r = self.hole_radius

        report.add(ClearanceCheck.evaluate(
            "Bolt Hole Center To Center", self.hole_spacing - self.hole_dia, STRICT_POLICY, field="hole_count",
            message="Bolt holes overlap: Bolt Hole Center To Center is not large enough for the hole diameter.",
        ))

        # Long side uses the short dimensions, short side the long ones
        sides = [
            ("Long Side - Edge Of Hole to OD", side_gap(self.od_short, self.bc_short, r), "bc_short"),
            ("Long Side - Edge Of Hole to ID", side_gap(self.bc_short, self.id_short, r), "bc_short"),
            ("Short Side - Edge Of Hole to OD", side_gap(self.od_long, self.bc_long, r), "bc_long"),
            ("Short Side - Edge Of Hole to ID", side_gap(self.bc_long, self.id_long, r), "bc_long"),
        ]
        for name, gap, field_name in sides:
            report.add(ClearanceCheck.evaluate(name, gap, self.policy, field=field_name))

        logger.debug(f"Firetube clearances: c2c={self.hole_spacing:.4f}, min gap {report.min_gap:.4f}")
        return report

    def build_outline(self) -> GasketDrawing:
        outer = ObroundShape(self.od_long, self.od_short)
        inner = ObroundShape(self.id_long, self.id_short)
        holes = [Circle(p, self.hole_radius, layer=Layer.HOLES) for p in self.place_holes()]
        return GasketDrawing(
            perimeter=outer.to_entities(Layer.PERIMETER),
            holes=[*inner.to_entities(Layer.HOLES), *holes],
        )

    def summary(self) -> str:
        f = format_dimension
        return (
            f'OD {f(self.od_long)}" x {f(self.od_short)}" | ID {f(self.id_long)}" x {f(self.id_short)}" | '
            f'BC {f(self.bc_long)}" x {f(self.bc_short)}" | {self.hole_count} x {f(self.hole_dia)}" '
            f'(center {self.center_mode}) | C-C {f(self.hole_spacing)}"'
        )
