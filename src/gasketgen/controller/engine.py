"""
Engine Facade
=============
The public entry points of the geometry engine. Everything here is pure:
no files, no global state. The session and the CLI build on top of it.

Functions:
    parse_dimension: Text to float (raises ParseError).
    validate_geometry: Raw inputs to a ValidationResult (never raises on bad input).
    build_outline: Spec to drawing entities.
    place_holes: Spec to bolt hole centers.
    compute_clearances: Spec to a ClearanceReport.
    to_dxf: Spec to DXF R12 text.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from gasketgen.controller import dxf_writer
from gasketgen.model.clearance import ClearanceReport
from gasketgen.model.gaskets import GasketDrawing, GeometrySpec, ShapeKind, ValidationResult, get_spec_class
from gasketgen.model.geometry_primitives import Point
from gasketgen.model.units import parse_dimension

logger = logging.getLogger(__name__)

__all__ = [
    "build_outline",
    "compute_clearances",
    "parse_dimension",
    "place_holes",
    "to_dxf",
    "validate_geometry",
]


def validate_geometry(kind: ShapeKind | str, raw: Mapping[str, Any]) -> ValidationResult:
    """
    Validate raw inputs for one gasket kind.

    Args:
        kind: One of the registered ShapeKinds ("ellipse", "flange", ...).
        raw: Field name -> raw text (or number). Blank optional fields may be
            missing, empty strings or None.

    Raises:
        KeyError: If `kind` is not a registered generator.
    """
    spec_cls = get_spec_class(kind)
    logger.debug(f"Validating {spec_cls.KIND} with fields {sorted(raw)}")
    return spec_cls.validate(raw)


def build_outline(spec: GeometrySpec) -> GasketDrawing:
    return spec.build_outline()


def place_holes(spec: GeometrySpec) -> list[Point]:
    return spec.place_holes()


def compute_clearances(spec: GeometrySpec) -> ClearanceReport:
    return spec.compute_clearances()


def to_dxf(spec: GeometrySpec) -> str:
    return dxf_writer.to_dxf(spec)
