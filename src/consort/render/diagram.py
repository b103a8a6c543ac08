"""Diagram renderer.

Walks the grid layer by layer, column by column, and emits draw
primitives for every populated cell.  Three cell shapes exist:

* the root cell, a box spanning several columns with no inbound arrow;
* closed cells, a box with a centered label and an optional inbound
  arrow from the cell above (or an explicit start point for splits);
* open cells on the exclusion layer, stacked text beside an arrow that
  carries the flow on to the following layer.

Positions without content produce nothing.  The output depends only on
the arguments, so identical inputs give identical primitive sequences.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.errors import InvalidGridSpec
from ..core.models import (
    Arrow,
    Box,
    CellContent,
    CellTemplate,
    ConsortTemplate,
    ContentTable,
    ExclusionTable,
    Extent,
    GridGeometry,
    Label,
    Primitive,
)
from ..utils.logging import get_logger
from .style import DEFAULT_STYLE, RenderStyle

logger = get_logger(__name__)

Point = Tuple[float, float]


def check_template_bounds(template: ConsortTemplate, geometry: GridGeometry) -> None:
    """Raise :class:`InvalidGridSpec` if a template cell falls outside the grid."""
    columns = len(geometry.columns)
    layers = len(geometry.layers)
    outside = [
        cell.cell
        for cell in template.cells
        if cell.layer > layers or cell.column + cell.span - 1 > columns
    ]
    excl = template.exclusion
    if excl.layer > layers:
        outside.append((excl.layer, min(excl.columns, default=1)))
    outside.extend((excl.layer, c) for c in excl.columns if not 1 <= c <= columns)
    if outside:
        raise InvalidGridSpec(
            f"Template cells {sorted(set(outside))} lie outside a {layers}x{columns} grid"
        )


def draw_root_cell(
    geometry: GridGeometry,
    layer: int,
    column: int,
    content: CellContent,
    span: int = 1,
    style: RenderStyle = DEFAULT_STYLE,
) -> List[Primitive]:
    """Box and label for the population entry point."""
    x = Extent.between(geometry.column(column).near, geometry.column(column + span - 1).far)
    y = geometry.layer(layer)
    text = style.label_format.format(label=content.label, count=content.count)
    return [
        Box(cell=(layer, column), x=x, y=y, style="root"),
        Label(cell=(layer, column), x=x.center, y=y.center, text=text),
    ]


def draw_closed_cell(
    geometry: GridGeometry,
    layer: int,
    column: int,
    content: CellContent,
    arrow_start: Optional[Point] = None,
    draw_arrow: bool = True,
    style: RenderStyle = DEFAULT_STYLE,
) -> List[Primitive]:
    """Box, centered label and inbound arrow for one cell.

    The arrow starts at ``arrow_start`` or, by default, at the bottom
    edge of the layer above in this cell's column.  It always ends on
    the top edge of this cell's box at the column center.  A cell on the
    first layer has no layer above and gets no default arrow.
    """
    x = geometry.column(column)
    y = geometry.layer(layer)
    text = style.label_format.format(label=content.label, count=content.count)
    primitives: List[Primitive] = [
        Box(cell=(layer, column), x=x, y=y),
        Label(cell=(layer, column), x=x.center, y=y.center, text=text),
    ]
    if not draw_arrow:
        return primitives
    if arrow_start is None:
        if layer == 1:
            return primitives
        arrow_start = (x.center, geometry.layer(layer - 1).near)
    primitives.append(
        Arrow(
            cell=(layer, column),
            x1=arrow_start[0],
            y1=arrow_start[1],
            x2=x.center,
            y2=y.far,
        )
    )
    return primitives


def draw_open_cell(
    geometry: GridGeometry,
    layer: int,
    column: int,
    lines: Sequence[str],
    text_x: Optional[float] = None,
    alignment: Optional[str] = None,
    arrow_start: Optional[Point] = None,
    arrow_end: Optional[Point] = None,
    style: RenderStyle = DEFAULT_STYLE,
) -> List[Primitive]:
    """Stacked exclusion text plus the arrow passing the flow downward.

    Columns in the left half of the grid put their text to the right of
    the arrow, left aligned; the right half mirrors this, so the
    annotations face the middle of the diagram.
    """
    x = geometry.column(column)
    y = geometry.layer(layer)
    if alignment is None:
        alignment = "left" if 2 * column <= len(geometry.columns) else "right"
    if text_x is None:
        gap = style.exclusion_text_gap * geometry.spec.column_spacing
        text_x = x.center + gap if alignment == "left" else x.center - gap
    if arrow_start is None:
        top = geometry.layer(layer - 1).near if layer > 1 else y.far
        arrow_start = (x.center, top)
    if arrow_end is None:
        bottom = geometry.layer(layer + 1).far if layer < len(geometry.layers) else y.near
        arrow_end = (x.center, bottom)
    return [
        Label(cell=(layer, column), x=text_x, y=y.center, text="\n".join(lines), alignment=alignment),
        Arrow(
            cell=(layer, column),
            x1=arrow_start[0],
            y1=arrow_start[1],
            x2=arrow_end[0],
            y2=arrow_end[1],
            style="exclusion",
        ),
    ]


def _split_start(
    geometry: GridGeometry,
    cell: CellTemplate,
    parent: CellTemplate,
    style: RenderStyle,
) -> Point:
    """Arrow start for a cell fed by ``parent``.

    Straight down when the cell sits under the parent box, otherwise from
    a point beside the parent's center toward the cell.
    """
    y = geometry.layer(parent.layer).near
    if parent.column <= cell.column < parent.column + parent.span:
        return (geometry.column(cell.column).center, y)
    center = geometry.column(parent.column).center
    offset = style.split_offset * geometry.spec.column_spacing
    return (center - offset if cell.column < parent.column else center + offset, y)


def render_diagram(
    geometry: GridGeometry,
    template: ConsortTemplate,
    content: ContentTable,
    exclusions: ExclusionTable,
    style: RenderStyle = DEFAULT_STYLE,
) -> List[Primitive]:
    """Emit primitives for every populated cell in layer-then-column order."""
    check_template_bounds(template, geometry)
    primitives: List[Primitive] = []
    exclusion_columns = set(template.exclusion.columns) & set(exclusions.columns)
    for layer in range(1, len(geometry.layers) + 1):
        for column in range(1, len(geometry.columns) + 1):
            if layer == exclusions.layer and column in exclusion_columns:
                primitives.extend(
                    draw_open_cell(
                        geometry,
                        layer,
                        column,
                        exclusions.lines(column, style.exclusion_line_format),
                        style=style,
                    )
                )
                continue
            cell_content = content.get(layer, column)
            if cell_content is None:
                continue
            cell = template.cell(layer, column)
            if cell is None:
                primitives.extend(draw_closed_cell(geometry, layer, column, cell_content, style=style))
            elif cell.is_root:
                primitives.extend(
                    draw_root_cell(geometry, layer, column, cell_content, span=cell.span, style=style)
                )
            else:
                parent = template.cell(*cell.parent)
                start = _split_start(geometry, cell, parent, style) if parent is not None else None
                primitives.extend(
                    draw_closed_cell(
                        geometry,
                        layer,
                        column,
                        cell_content,
                        arrow_start=start,
                        draw_arrow=cell.inbound_arrow,
                        style=style,
                    )
                )
    logger.debug(f"Rendered {len(primitives)} primitives")
    return primitives
