"""Dataset checks run before any counting or drawing."""

from __future__ import annotations

from typing import Optional

import pandas as pd

from ..content.resolver import check_fields
from ..core.errors import FlowConsistencyError, InvalidDatasetError
from ..core.models import ConsortTemplate
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _positions(df: pd.DataFrame, field: str) -> pd.Series:
    """Return ``field`` as integers, treating missing values as 0 (absent)."""
    series = df[field]
    if series.empty:
        # Header-only files read back as object columns
        return pd.Series(0, index=series.index, dtype=int)
    if not pd.api.types.is_numeric_dtype(series):
        raise InvalidDatasetError(f"Field '{field}' must be numeric, got dtype {series.dtype}")
    filled = series.fillna(0)
    if ((filled % 1) != 0).any():
        raise InvalidDatasetError(f"Field '{field}' contains non-integer values")
    return filled.astype(int)


def validate_dataset(
    df: pd.DataFrame,
    template: ConsortTemplate,
    column_count: Optional[int] = None,
) -> None:
    """Check that ``df`` can be counted against ``template``.

    Raises:
        UnknownLayerReference: A referenced field is missing.
        InvalidDatasetError: Positions are not integers in ``0..column_count``
            or an exclusion code is unknown.
        FlowConsistencyError: A subject is present at a layer without being
            present at the layer before, sits in a column its parent cell
            does not feed, or is both excluded and analysed.
    """
    check_fields(df, template)
    layer_fields = template.layer_fields()
    positions = {field: _positions(df, field) for _, field in layer_fields}

    if column_count is not None:
        for field, values in positions.items():
            bad = values[(values < 0) | (values > column_count)]
            if not bad.empty:
                raise InvalidDatasetError(
                    f"Field '{field}' has {len(bad)} value(s) outside 0..{column_count}"
                )

    excl = template.exclusion
    reasons = _positions(df, excl.reason_field)
    unknown = sorted(set(reasons.unique()) - set(excl.reasons) - {0})
    if unknown:
        raise InvalidDatasetError(f"Unknown exclusion reason code(s): {unknown}")
    source = positions.get(excl.source_field)
    if source is None:
        source = _positions(df, excl.source_field)

    for (prev_layer, prev_field), (layer, field) in zip(layer_fields, layer_fields[1:]):
        orphans = int(((positions[field] > 0) & (positions[prev_field] == 0)).sum())
        if orphans:
            raise FlowConsistencyError(
                f"{orphans} subject(s) present at layer {layer} ('{field}') "
                f"but absent at layer {prev_layer} ('{prev_field}')"
            )

    for cell in template.cells:
        parent = template.cell(*cell.parent) if cell.parent is not None else None
        if cell.field is None or parent is None or parent.field is None:
            continue
        here = positions[cell.field] == cell.column
        allowed = range(parent.column, parent.column + parent.span)
        strays = int((here & ~positions[parent.field].isin(allowed)).sum())
        if strays:
            raise FlowConsistencyError(
                f"{strays} subject(s) in column {cell.column} at layer {cell.layer} "
                f"('{cell.field}') did not come from column {parent.column} "
                f"at layer {parent.layer} ('{parent.field}')"
            )

    excluded = reasons > 0
    orphans = int((excluded & (source == 0)).sum())
    if orphans:
        raise FlowConsistencyError(
            f"{orphans} excluded subject(s) have no position in '{excl.source_field}'"
        )
    for layer, field in layer_fields:
        if layer <= excl.layer:
            continue
        both = int((excluded & (positions[field] > 0)).sum())
        if both:
            raise FlowConsistencyError(
                f"{both} subject(s) are both excluded and present at layer {layer} ('{field}')"
            )
    logger.debug(f"Validated dataset with {len(df)} rows")
