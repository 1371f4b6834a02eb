"""Elliptical gasket: an ID ellipse grown outward by a constant cross section."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from gasketgen import config
from gasketgen.model.errors import ConstraintError, GasketIssue
from gasketgen.model.gaskets.base import FieldInfo, FieldReader, GasketDrawing, GeometrySpec, ShapeKind
from gasketgen.model.gaskets.registry import register_gasket
from gasketgen.model.geometry_primitives import Layer
from gasketgen.model.shapes import EllipseShape
from gasketgen.model.units import format_dimension


@register_gasket
@dataclass(frozen=True)
class EllipseSpec(GeometrySpec):
    KIND = ShapeKind.ELLIPSE
    TITLE = "Ellipse Gasket"
    FIELDS = (
        FieldInfo("id_long", "Long Side ID"),
        FieldInfo("id_short", "Short Side ID"),
        FieldInfo("cross_section", "Cross Section"),
    )

    id_long: float
    id_short: float
    cross_section: float

    @property
    def od_long(self) -> float:
        return self.id_long + 2 * self.cross_section

    @property
    def od_short(self) -> float:
        return self.id_short + 2 * self.cross_section

    @property
    def inner(self) -> EllipseShape:
        return EllipseShape(self.id_long, self.id_short)

    @property
    def outer(self) -> EllipseShape:
        return EllipseShape(self.od_long, self.od_short)

    @classmethod
    def from_fields(cls, reader: FieldReader) -> Optional[EllipseSpec]:
        id_long = reader.positive("id_long")
        id_short = reader.positive("id_short")
        cross_section = reader.positive("cross_section")
        if None in (id_long, id_short, cross_section):
            return None
        return cls(id_long=id_long, id_short=id_short, cross_section=cross_section)

    def check_constraints(self) -> Iterable[GasketIssue]:
        if self.id_short > self.id_long:
            yield ConstraintError("Short Side ID cannot be larger than Long Side ID.", field="id_short")

    def build_outline(self) -> GasketDrawing:
        return GasketDrawing(
            perimeter=self.outer.to_entities(Layer.PERIMETER, config.ELLIPSE_SEGMENTS),
            holes=self.inner.to_entities(Layer.HOLES, config.ELLIPSE_SEGMENTS),
        )

    def summary(self) -> str:
        f = format_dimension
        return (
            f'ID {f(self.id_long)}" x {f(self.id_short)}" | CS {f(self.cross_section)}" | '
            f'OD {f(self.od_long)}" x {f(self.od_short)}"'
        )
