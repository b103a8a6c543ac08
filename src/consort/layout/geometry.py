"""Grid geometry calculator.

Converts a :class:`~consort.core.models.GridSpec` into absolute
coordinates.  Columns are placed from the rightmost to the leftmost and
layers from the topmost to the bottommost, each extent anchored one
spacing away from the previously placed one, which keeps spacing uniform
and adjacent extents disjoint.  The y axis grows upwards, so layer 1 has
the largest coordinates.
"""

from __future__ import annotations

from typing import List, Tuple

from ..core.errors import InvalidGridSpec
from ..core.models import Extent, GridGeometry, GridSpec
from ..utils.logging import get_logger

logger = get_logger(__name__)


def check_grid_spec(spec: GridSpec) -> None:
    """Raise :class:`InvalidGridSpec` unless every dimension is strictly positive."""
    problems = [
        f"{name}={getattr(spec, name)!r}"
        for name in (
            "column_count",
            "column_width",
            "column_spacing",
            "layer_count",
            "layer_depth",
            "layer_spacing",
        )
        if not getattr(spec, name) > 0
    ]
    if problems:
        raise InvalidGridSpec(f"Grid dimensions must be positive: {', '.join(problems)}")


def _stack(count: int, size: float, spacing: float, total: float) -> Tuple[Extent, ...]:
    """Place ``count`` extents downward from ``total - spacing``.

    Returns them in placement order: the first extent is the one touching
    the high end of the axis.
    """
    extents: List[Extent] = []
    far = total - spacing
    for _ in range(count):
        near = far - size
        extents.append(Extent.between(near, far))
        far = near - spacing
    return tuple(extents)


def compute_grid_geometry(spec: GridSpec) -> GridGeometry:
    """Compute column extents (left to right) and layer extents (top to bottom).

    Args:
        spec: Grid specification.  All six scalars must be positive.

    Returns:
        A frozen :class:`GridGeometry`.  ``columns[0]`` is the leftmost
        column, ``layers[0]`` the topmost layer.

    Raises:
        InvalidGridSpec: If any count or size is zero or negative.
    """
    check_grid_spec(spec)
    width = spec.plot_width
    height = spec.plot_height
    # Rightmost column is placed first; reverse so index 0 is leftmost.
    columns = tuple(reversed(_stack(spec.column_count, spec.column_width, spec.column_spacing, width)))
    layers = _stack(spec.layer_count, spec.layer_depth, spec.layer_spacing, height)
    logger.debug(
        f"Computed {spec.column_count}x{spec.layer_count} grid geometry ({width:g} x {height:g})"
    )
    return GridGeometry(
        spec=spec,
        columns=columns,
        layers=layers,
        plot_width=width,
        plot_height=height,
    )
