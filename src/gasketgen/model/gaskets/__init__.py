"""
Gasket generators. Importing this package registers every shape kind.
"""
from gasketgen.model.gaskets.base import (
    FieldInfo, FieldReader, FieldType, GasketDrawing, GeometrySpec, ShapeKind, ValidationResult,
)
from gasketgen.model.gaskets.registry import get_spec_class, list_kinds, register_gasket
from gasketgen.model.gaskets.ellipse import EllipseSpec
from gasketgen.model.gaskets.flange import CutoutType, FlangeSpec
from gasketgen.model.gaskets.firetube import FiretubeSpec
from gasketgen.model.gaskets.jumper import JumperSpec

__all__ = [
    "CutoutType",
    "EllipseSpec",
    "FieldInfo",
    "FieldReader",
    "FieldType",
    "FiretubeSpec",
    "FlangeSpec",
    "GasketDrawing",
    "GeometrySpec",
    "JumperSpec",
    "ShapeKind",
    "ValidationResult",
    "get_spec_class",
    "list_kinds",
    "register_gasket",
]
