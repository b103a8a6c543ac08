"""Cell content resolver.

Turns a per-subject dataset into the two lookup tables the renderer
reads: the sparse content table for ordinary cells and the
reason-by-column exclusion table.
"""

from __future__ import annotations

from typing import Dict

import pandas as pd

from ..core.errors import UnknownLayerReference
from ..core.models import (
    Cell,
    CellContent,
    ConsortTemplate,
    ContentTable,
    ExclusionTable,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


def check_fields(df: pd.DataFrame, template: ConsortTemplate) -> None:
    """Raise :class:`UnknownLayerReference` for template fields missing from ``df``."""
    missing = [name for name in template.required_fields() if name not in df.columns]
    if missing:
        raise UnknownLayerReference(missing, available=[str(c) for c in df.columns])


def resolve_content(df: pd.DataFrame, template: ConsortTemplate) -> ContentTable:
    """Count subjects for every templated cell.

    A cell's count is the number of rows whose layer field equals the
    cell's column index; a cell without a field (the root) counts every
    row.  Cells that are not in the template are left out entirely.

    Raises:
        UnknownLayerReference: If the template names a field ``df`` lacks.
    """
    check_fields(df, template)
    if df.empty:
        logger.warning("Dataset has no rows; every count will be zero")
    cells: Dict[Cell, CellContent] = {}
    for cell in template.cells:
        if cell.field is None:
            count = len(df)
        else:
            count = int((df[cell.field] == cell.column).sum())
        cells[cell.cell] = CellContent(label=cell.label, count=count)
    logger.info(
        "Resolved cell content",
        extra={"context": {"cells": len(cells), "rows": len(df)}},
    )
    return ContentTable(cells=cells)


def resolve_exclusions(df: pd.DataFrame, template: ConsortTemplate) -> ExclusionTable:
    """Count excluded subjects by (reason, prior-layer column)."""
    check_fields(df, template)
    spec = template.exclusion
    source = df[spec.source_field]
    reason = df[spec.reason_field]
    counts: Dict[Cell, int] = {}
    for code in sorted(spec.reasons):
        for column in spec.columns:
            counts[(code, column)] = int(((source == column) & (reason == code)).sum())
    return ExclusionTable(layer=spec.layer, reasons=dict(spec.reasons), counts=counts)
