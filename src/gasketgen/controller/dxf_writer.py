"""
DXF Export Logic (ezdxf Adapter)
================================
This module translates a validated gasket drawing into a DXF R12 document.

Why is this file needed?
------------------------
1. Translation: It converts our abstract entities (Polyline, Circle, Arc,
   Line) into the matching ezdxf modelspace calls.
2. Export: It produces the text of the .dxf file and writes it to disk under
   a sanitized name.

Every document carries the linear unit in its header, a layer table holding
layer "0" plus the requested layers (color 7, CONTINUOUS) and the entities,
each on its own layer.
"""
from __future__ import annotations

import io
import logging
import os
import re
from typing import Iterable, Sequence, TYPE_CHECKING

import ezdxf

from gasketgen import config
from gasketgen.model.geometry_primitives import Arc, Circle, DrawingEntity, Layer, Line, Polyline

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from gasketgen.model.gaskets import GeometrySpec

# Get logger
logger = logging.getLogger(__name__)

DEFAULT_LAYERS: tuple[Layer, ...] = (Layer.PERIMETER, Layer.HOLES)

_DXF_SUFFIX = re.compile(r"\.dxf$", re.IGNORECASE)
_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def new_document(layers: Iterable[Layer | str] = DEFAULT_LAYERS) -> Drawing:
    """
    Create an empty R12 document with unit header and layer table.

    R12 has no $INSUNITS header variable, so the unit is declared through
    $LUNITS (decimal) only.
    """
    doc = ezdxf.new(config.DXF_VERSION)
    doc.header["$LUNITS"] = config.DXF_LUNITS_DECIMAL

    # R12 needs only layer "0"
    if "Defpoints" in doc.layers:
        doc.layers.remove("Defpoints")
    for name in layers:
        doc.layers.add(str(name), color=config.LAYER_COLOR, linetype=config.LAYER_LINETYPE)
    return doc


def add_entity(msp: Modelspace, entity: DrawingEntity) -> None:
    """Add one drawing entity to the modelspace on its own layer."""
    if entity.layer is None:
        raise ValueError(f"{type(entity).__name__} has no layer assigned.")
    attribs = {"layer": str(entity.layer)}

    match entity:
        case Polyline():
            points = [(float(x), float(y)) for x, y in entity.points]
            msp.add_polyline2d(points, close=entity.closed, dxfattribs=attribs)
        case Circle():
            msp.add_circle(entity.center.to_tuple(), float(entity.radius), dxfattribs=attribs)
        case Arc():
            start_angle, end_angle = entity.dxf_angles()
            msp.add_arc(entity.center.to_tuple(), float(entity.radius), start_angle, end_angle, dxfattribs=attribs)
        case Line():
            msp.add_line(entity.start.to_tuple(), entity.end.to_tuple(), dxfattribs=attribs)
        case _:
            raise TypeError(f"Unsupported entity type: {type(entity).__name__}")


def serialize(entities: Sequence[DrawingEntity], layers: Iterable[Layer | str] = DEFAULT_LAYERS) -> str:
    """
    Serialize entities into the text of a DXF R12 file.

    Args:
        entities: Drawing entities, each with a layer from `layers`.
        layers: Layer names for the layer table.

    Returns:
        The complete DXF document, ending with EOF.

    Raises:
        ValueError: If an entity sits on a layer that is not in the table.
    """
    layer_names = [str(name) for name in layers]
    doc = new_document(layer_names)
    msp = doc.modelspace()

    for entity in entities:
        if entity.layer is not None and str(entity.layer) not in layer_names:
            raise ValueError(f"Layer '{entity.layer}' is not in the layer table {layer_names}.")
        add_entity(msp, entity)

    stream = io.StringIO()
    doc.write(stream)
    logger.debug(f"Serialized {len(entities)} entities on layers {layer_names}")
    return stream.getvalue()


def to_dxf(spec: GeometrySpec) -> str:
    """DXF text of a validated spec on the Perimeter and Holes layers."""
    drawing = spec.build_outline()
    return serialize(drawing.entities(), drawing.layers)


# ------------------------------------------------------------------------------
# Persistence
# ------------------------------------------------------------------------------
def sanitize_filename_base(name: str | None, default: str) -> str:
    """
    Trim the name, drop a trailing ".dxf" and replace path-unsafe characters.
    Falls back to `default` when nothing is left.
    """
    s = str(name or "").strip()
    s = _DXF_SUFFIX.sub("", s).strip()
    s = _UNSAFE_CHARS.sub("_", s)
    return s or default


def save_dxf(text: str, directory: str, name: str | None, default: str = "gasket") -> str:
    """
    Write DXF text to `<directory>/<sanitized name>.dxf`.

    Returns:
        The path of the written file.
    """
    os.makedirs(directory, exist_ok=True)
    filepath = os.path.join(directory, sanitize_filename_base(name, default) + config.DXF_SUFFIX)

    logger.info(f"Saving DXF to: {filepath}")
    with open(filepath, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return filepath
