"""End-to-end diagram construction.

``dataset -> counts -> geometry -> primitives -> image``.  Every check
runs before the first primitive is emitted, so a failure never leaves a
partial diagram behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from .config.settings import settings
from .content.resolver import resolve_content, resolve_exclusions
from .content.template import REFERENCE_TEMPLATE
from .core.models import ConsortDiagram, ConsortTemplate, GridSpec
from .data.validation import validate_dataset
from .layout.geometry import compute_grid_geometry
from .render.backend import render_to_file
from .render.diagram import check_template_bounds, render_diagram
from .render.style import DEFAULT_STYLE, RenderStyle
from .utils.logging import get_logger

logger = get_logger(__name__)


def build_diagram(
    df: pd.DataFrame,
    spec: Optional[GridSpec] = None,
    template: ConsortTemplate = REFERENCE_TEMPLATE,
    style: RenderStyle = DEFAULT_STYLE,
    validate: bool = True,
) -> ConsortDiagram:
    """Compute geometry, content and draw primitives for ``df``.

    Args:
        df: One row per subject.
        spec: Grid specification; defaults to the configured grid.
        template: Which cells exist and which fields feed them.
        style: Visual tuning constants.
        validate: Run :func:`validate_dataset` first.

    Raises:
        InvalidGridSpec: Non-positive dimensions, or a template that does
            not fit the grid.
        UnknownLayerReference: The template names a field ``df`` lacks.
        InvalidDatasetError: Only when ``validate`` is set.
    """
    spec = spec if spec is not None else settings.grid_spec()
    geometry = compute_grid_geometry(spec)
    check_template_bounds(template, geometry)
    if validate:
        validate_dataset(df, template, column_count=spec.column_count)
    content = resolve_content(df, template)
    exclusions = resolve_exclusions(df, template)
    primitives = render_diagram(geometry, template, content, exclusions, style)
    logger.info(
        "Built CONSORT diagram",
        extra={
            "context": {
                "rows": len(df),
                "primitives": len(primitives),
                "width": geometry.plot_width,
                "height": geometry.plot_height,
            }
        },
    )
    return ConsortDiagram(
        geometry=geometry,
        content=content,
        exclusions=exclusions,
        primitives=tuple(primitives),
    )


def draw_consort_diagram(
    df: pd.DataFrame,
    output_path: Path,
    spec: Optional[GridSpec] = None,
    template: ConsortTemplate = REFERENCE_TEMPLATE,
    style: RenderStyle = DEFAULT_STYLE,
    dpi: Optional[int] = None,
) -> ConsortDiagram:
    """Build the diagram and save it as an image."""
    diagram = build_diagram(df, spec=spec, template=template, style=style)
    render_to_file(diagram.primitives, diagram.geometry, output_path, style=style, dpi=dpi)
    return diagram
