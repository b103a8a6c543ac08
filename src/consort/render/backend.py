"""Materialise draw primitives with matplotlib.

Grid units are used directly as data coordinates, the figure is sized in
proportion to the grid and the axes are hidden.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch

from ..config.settings import settings
from ..core.models import Arrow, Box, GridGeometry, Label, Primitive
from ..utils.logging import get_logger
from .style import DEFAULT_STYLE, RenderStyle

logger = get_logger(__name__)


def _draw_box(ax: Axes, box: Box, style: RenderStyle) -> None:
    # Rounded corners grow outward by the pad, so inset the rectangle.
    pad = min(style.box_rounding, box.x.size / 4, box.y.size / 4)
    ax.add_patch(
        FancyBboxPatch(
            (box.x.near + pad, box.y.near + pad),
            box.x.size - 2 * pad,
            box.y.size - 2 * pad,
            boxstyle=f"round,pad={pad:g}",
            fc=style.box_face_color,
            ec=style.box_edge_color,
            lw=style.line_width,
        )
    )


def _draw_label(ax: Axes, label: Label, style: RenderStyle) -> None:
    size = style.exclusion_font_size if label.alignment != "center" else style.font_size
    ax.text(
        label.x,
        label.y,
        label.text,
        ha=label.alignment,
        va="center",
        fontsize=size,
        multialignment=label.alignment,
    )


def _draw_arrow(ax: Axes, arrow: Arrow, style: RenderStyle) -> None:
    ax.annotate(
        "",
        xy=(arrow.x2, arrow.y2),
        xytext=(arrow.x1, arrow.y1),
        arrowprops=dict(
            arrowstyle=style.arrow_style,
            lw=style.line_width,
            color=style.arrow_color,
            shrinkA=0,
            shrinkB=0,
        ),
    )


def draw_primitives(
    primitives: Iterable[Primitive],
    geometry: GridGeometry,
    style: RenderStyle = DEFAULT_STYLE,
    scale: Optional[float] = None,
) -> Figure:
    """Paint primitives, in order, onto a new figure and return it."""
    scale = settings.figure_scale if scale is None else scale
    fig, ax = plt.subplots(figsize=(geometry.plot_width * scale, geometry.plot_height * scale))
    ax.set_xlim(0, geometry.plot_width)
    ax.set_ylim(0, geometry.plot_height)
    ax.set_aspect("equal")
    ax.axis("off")
    for primitive in primitives:
        if isinstance(primitive, Box):
            _draw_box(ax, primitive, style)
        elif isinstance(primitive, Label):
            _draw_label(ax, primitive, style)
        elif isinstance(primitive, Arrow):
            _draw_arrow(ax, primitive, style)
        else:
            raise TypeError(f"Unsupported primitive: {primitive!r}")
    return fig


def render_to_file(
    primitives: Iterable[Primitive],
    geometry: GridGeometry,
    output_path: Path,
    style: RenderStyle = DEFAULT_STYLE,
    dpi: Optional[int] = None,
) -> Path:
    """Draw primitives and save the figure (format chosen by file suffix).

    Args:
        primitives: Sequence from :func:`consort.render.diagram.render_diagram`.
        geometry: Geometry the primitives were computed against.
        output_path: PNG, SVG or PDF destination; parent directories are created.
        style: Visual constants.
        dpi: Raster resolution, defaults to ``settings.figure_dpi``.

    Returns:
        The path written.
    """
    fig = draw_primitives(primitives, geometry, style)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        fig.savefig(output_path, bbox_inches="tight", dpi=dpi or settings.figure_dpi)
    finally:
        plt.close(fig)
    logger.info(f"CONSORT diagram saved to {output_path}")
    return output_path
