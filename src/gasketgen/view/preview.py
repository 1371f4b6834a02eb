"""
Preview Renderer
================
Draws a gasket drawing with matplotlib so it can be checked before export.

Uses the object-oriented `Figure` API, so no GUI backend is needed and the
result can be saved straight to PNG.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from matplotlib import patches
from matplotlib.figure import Figure

from gasketgen.model.gaskets import GasketDrawing, GeometrySpec
from gasketgen.model.geometry_primitives import Arc, Circle, DrawingEntity, Layer, Line, Polyline
from gasketgen.model.geometry_utils import polyline_extents

logger = logging.getLogger(__name__)

LAYER_COLORS: dict[Layer, str] = {
    Layer.PERIMETER: "black",
    Layer.HOLES: "tab:blue",
}


def _draw_entity(ax, entity: DrawingEntity, color: str) -> None:
    match entity:
        case Polyline():
            pts = entity.points
            if entity.closed and len(pts) > 0:
                pts = np.vstack([pts, pts[:1]])
            ax.plot(pts[:, 0], pts[:, 1], color=color, lw=1)
        case Circle():
            ax.add_patch(patches.Circle(entity.center.to_tuple(), entity.radius, fill=False, color=color, lw=1))
        case Arc():
            theta1, theta2 = entity.dxf_angles()
            ax.add_patch(patches.Arc(
                entity.center.to_tuple(), 2 * entity.radius, 2 * entity.radius,
                theta1=theta1, theta2=theta2, color=color, lw=1,
            ))
        case Line():
            ax.plot([entity.start.x, entity.end.x], [entity.start.y, entity.end.y], color=color, lw=1)


def _extents(drawing: GasketDrawing) -> tuple[float, float, float, float]:
    chunks = []
    for entity in drawing.entities():
        match entity:
            case Polyline():
                chunks.append(entity.points)
            case Circle():
                c, r = entity.center, entity.radius
                chunks.append(np.array([(c.x - r, c.y - r), (c.x + r, c.y + r)]))
            case Arc() | Line():
                chunks.append(entity.discretize())
    if not chunks:
        return -1.0, -1.0, 1.0, 1.0
    return polyline_extents(np.vstack(chunks))


def render_preview(source: GeometrySpec | GasketDrawing, title: Optional[str] = None) -> Figure:
    """
    Render a spec (or an already built drawing) into a new Figure.

    Perimeter entities are drawn in black, holes in blue, over a faint
    crosshair through the origin.
    """
    if isinstance(source, GeometrySpec):
        drawing = source.build_outline()
        title = title or source.summary()
    else:
        drawing = source

    fig = Figure(figsize=(8, 6), constrained_layout=True)
    ax = fig.add_subplot()
    ax.set_aspect("equal")

    # faint center crosshair
    ax.axhline(0.0, color="#e6e6e6", lw=1, zorder=0)
    ax.axvline(0.0, color="#e6e6e6", lw=1, zorder=0)

    for entity in drawing.entities():
        _draw_entity(ax, entity, LAYER_COLORS.get(entity.layer, "gray"))

    min_x, min_y, max_x, max_y = _extents(drawing)
    pad = 0.05 * max(max_x - min_x, max_y - min_y, 1e-6)
    ax.set_xlim(min_x - pad, max_x + pad)
    ax.set_ylim(min_y - pad, max_y + pad)

    ax.grid(visible=True, which="major", axis="both", linestyle="-", color="gray", lw=0.5)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    if title:
        ax.set_title(title, fontsize=9)

    logger.debug(f"Preview rendered with {len(drawing.entities())} entities")
    return fig


def save_preview(source: GeometrySpec | GasketDrawing, filepath: str, dpi: int = 150) -> str:
    fig = render_preview(source)
    fig.savefig(filepath, dpi=dpi)
    logger.info(f"Preview saved to: {filepath}")
    return filepath
