"""Core domain models for grids, templates, content tables and primitives."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field

Cell = Tuple[int, int]


class GridSpec(BaseModel):
    """Scalars defining the diagram coordinate system.

    Counts are numbers of columns/layers; widths, depths and spacings are
    in plot units.  Validation happens in
    :func:`consort.layout.geometry.check_grid_spec` so that callers get an
    :class:`~consort.core.errors.InvalidGridSpec` rather than a pydantic
    error.
    """

    model_config = ConfigDict(frozen=True)

    column_count: int = 4
    column_width: float = 28.0
    column_spacing: float = 5.0
    layer_count: int = 5
    layer_depth: float = 13.0
    layer_spacing: float = 8.0

    @property
    def plot_width(self) -> float:
        return self.column_count * self.column_width + (self.column_count + 1) * self.column_spacing

    @property
    def plot_height(self) -> float:
        return self.layer_count * self.layer_depth + (self.layer_count + 1) * self.layer_spacing


class Extent(BaseModel):
    """Placement of a column or layer on one axis.

    ``near`` is always the smaller coordinate: the left edge of a column
    or the bottom edge of a layer.
    """

    model_config = ConfigDict(frozen=True)

    near: float
    center: float
    far: float

    @classmethod
    def between(cls, near: float, far: float) -> "Extent":
        return cls(near=near, center=(near + far) / 2, far=far)

    @property
    def size(self) -> float:
        return self.far - self.near

    def overlaps(self, other: "Extent") -> bool:
        return self.near < other.far and other.near < self.far


class GridGeometry(BaseModel):
    """Precomputed column and layer extents for a grid specification."""

    model_config = ConfigDict(frozen=True)

    spec: GridSpec
    columns: Tuple[Extent, ...]
    layers: Tuple[Extent, ...]
    plot_width: float
    plot_height: float

    def column(self, index: int) -> Extent:
        """Extent of column ``index`` (1-based, left to right)."""
        if not 1 <= index <= len(self.columns):
            raise IndexError(f"Column {index} outside 1..{len(self.columns)}")
        return self.columns[index - 1]

    def layer(self, index: int) -> Extent:
        """Extent of layer ``index`` (1-based, top to bottom)."""
        if not 1 <= index <= len(self.layers):
            raise IndexError(f"Layer {index} outside 1..{len(self.layers)}")
        return self.layers[index - 1]


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class CellTemplate(BaseModel):
    """A templated closed cell (or the root cell) of the diagram."""

    model_config = ConfigDict(frozen=True)

    layer: int = Field(..., ge=1)
    column: int = Field(..., ge=1)
    label: str
    field: Optional[str] = Field(
        None, description="Dataset field holding the column index; None counts every row"
    )
    span: int = Field(1, ge=1, description="Number of columns the box covers")
    parent: Optional[Cell] = Field(None, description="Upstream cell feeding the inbound arrow")
    inbound_arrow: bool = True

    @property
    def cell(self) -> Cell:
        return (self.layer, self.column)

    @property
    def is_root(self) -> bool:
        return self.parent is None


class ExclusionTemplate(BaseModel):
    """The dedicated exclusion layer, rendered as open cells."""

    model_config = ConfigDict(frozen=True)

    layer: int = Field(..., ge=1)
    source_field: str = Field(..., description="Field with the prior-layer column")
    reason_field: str = Field(..., description="Field with the exclusion reason code")
    reasons: Dict[int, str]
    columns: Tuple[int, ...]


class ConsortTemplate(BaseModel):
    """Complete description of which cells exist and where counts come from."""

    model_config = ConfigDict(frozen=True)

    cells: Tuple[CellTemplate, ...]
    exclusion: ExclusionTemplate

    def cell(self, layer: int, column: int) -> Optional[CellTemplate]:
        for template in self.cells:
            if template.cell == (layer, column):
                return template
        return None

    def required_fields(self) -> List[str]:
        """Dataset fields referenced anywhere in the template, in first-use order."""
        fields: List[str] = []
        for name in [c.field for c in self.cells] + [
            self.exclusion.source_field,
            self.exclusion.reason_field,
        ]:
            if name is not None and name not in fields:
                fields.append(name)
        return fields

    def layer_fields(self) -> List[Tuple[int, str]]:
        """``(layer, field)`` pairs for ordinary layers, top to bottom."""
        seen: Dict[int, str] = {}
        for c in self.cells:
            if c.field is not None:
                seen.setdefault(c.layer, c.field)
        return sorted(seen.items())


# ---------------------------------------------------------------------------
# Resolved content
# ---------------------------------------------------------------------------


class CellContent(BaseModel):
    """Label and subject count shown in one cell."""

    model_config = ConfigDict(frozen=True)

    label: str
    count: int = Field(..., ge=0)


class ContentTable(BaseModel):
    """Sparse ``(layer, column) -> (label, count)`` mapping."""

    model_config = ConfigDict(frozen=True)

    cells: Dict[Cell, CellContent] = Field(default_factory=dict)

    def get(self, layer: int, column: int) -> Optional[CellContent]:
        return self.cells.get((layer, column))

    def counts(self, layer: int) -> Dict[int, int]:
        """Counts of one layer keyed by column."""
        return {col: content.count for (lay, col), content in sorted(self.cells.items()) if lay == layer}

    def __contains__(self, cell: object) -> bool:
        return cell in self.cells

    def __len__(self) -> int:
        return len(self.cells)


class ExclusionTable(BaseModel):
    """``(reason, column) -> count`` breakdown for the exclusion layer."""

    model_config = ConfigDict(frozen=True)

    layer: int
    reasons: Dict[int, str]
    counts: Dict[Cell, int] = Field(default_factory=dict)

    @property
    def columns(self) -> List[int]:
        return sorted({column for _, column in self.counts})

    def count(self, reason: int, column: int) -> int:
        return self.counts.get((reason, column), 0)

    def total(self, column: int) -> int:
        return sum(n for (_, col), n in self.counts.items() if col == column)

    def lines(self, column: int, fmt: str = "{reason} (n = {count})") -> List[str]:
        """One text line per reason, in reason-code order."""
        return [
            fmt.format(reason=self.reasons[reason], count=self.count(reason, column))
            for reason in sorted(self.reasons)
        ]


# ---------------------------------------------------------------------------
# Draw primitives
# ---------------------------------------------------------------------------


class Box(BaseModel):
    """Rectangle covering a column extent and a layer extent."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["box"] = "box"
    cell: Cell
    x: Extent
    y: Extent
    style: str = "closed"


class Label(BaseModel):
    """Text anchored at a point."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["label"] = "label"
    cell: Cell
    x: float
    y: float
    text: str
    alignment: Literal["left", "center", "right"] = "center"


class Arrow(BaseModel):
    """Arrow from (x1, y1) to (x2, y2)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["arrow"] = "arrow"
    cell: Cell
    x1: float
    y1: float
    x2: float
    y2: float
    style: str = "flow"


Primitive = Union[Box, Label, Arrow]


class ConsortDiagram(BaseModel):
    """Everything needed to paint a diagram, computed in one pass."""

    model_config = ConfigDict(frozen=True)

    geometry: GridGeometry
    content: ContentTable
    exclusions: ExclusionTable
    primitives: Tuple[Primitive, ...]

    def populated_cells(self) -> List[Cell]:
        """Distinct cells that produced at least one primitive, in draw order."""
        cells: List[Cell] = []
        for primitive in self.primitives:
            if primitive.cell not in cells:
                cells.append(primitive.cell)
        return cells
