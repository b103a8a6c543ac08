"""Unit tests for core value objects."""

import pytest
from pydantic import ValidationError

from consort.content.template import REFERENCE_TEMPLATE
from consort.core.models import (
    Arrow,
    Box,
    CellContent,
    CellTemplate,
    ContentTable,
    Extent,
    ExclusionTable,
    GridSpec,
    Label,
)


class TestGridSpec:
    """Tests for GridSpec."""

    def test_defaults_are_reference(self) -> None:
        """Test the default spec is the reference 4x5 grid."""
        spec = GridSpec()
        assert (spec.column_count, spec.column_width, spec.column_spacing) == (4, 28, 5)
        assert (spec.layer_count, spec.layer_depth, spec.layer_spacing) == (5, 13, 8)
        assert spec.plot_width == 137
        assert spec.plot_height == 113

    def test_frozen(self) -> None:
        """Test specs cannot be mutated in place."""
        spec = GridSpec()
        with pytest.raises(ValidationError):
            spec.column_count = 3  # type: ignore[misc]


class TestExtent:
    """Tests for Extent."""

    def test_between(self) -> None:
        """Test the center is the midpoint."""
        ext = Extent.between(5, 33)
        assert (ext.near, ext.center, ext.far, ext.size) == (5, 19, 33, 28)

    def test_overlaps(self) -> None:
        """Test touching extents do not overlap but nested ones do."""
        assert not Extent.between(0, 1).overlaps(Extent.between(1, 2))
        assert Extent.between(0, 3).overlaps(Extent.between(1, 2))


class TestTemplate:
    """Tests for the reference template structure."""

    def test_cell_count(self) -> None:
        """Test eleven closed/root cells and four exclusion columns."""
        assert len(REFERENCE_TEMPLATE.cells) == 11
        assert REFERENCE_TEMPLATE.exclusion.columns == (1, 2, 3, 4)
        assert len(REFERENCE_TEMPLATE.exclusion.reasons) == 3

    def test_single_root(self) -> None:
        """Test the only parentless cell is the two-column root."""
        roots = [c for c in REFERENCE_TEMPLATE.cells if c.is_root]
        assert len(roots) == 1
        assert roots[0].cell == (1, 2)
        assert roots[0].span == 2

    def test_required_fields(self) -> None:
        """Test the dataset fields the template reads."""
        assert REFERENCE_TEMPLATE.required_fields() == ["arm", "subgroup", "analysed", "exclusion_reason"]
        assert REFERENCE_TEMPLATE.layer_fields() == [(2, "arm"), (3, "subgroup"), (5, "analysed")]

    def test_cell_lookup(self) -> None:
        """Test lookup by position."""
        assert REFERENCE_TEMPLATE.cell(3, 4).label == "Allocated to B2"
        assert REFERENCE_TEMPLATE.cell(2, 1) is None

    def test_invalid_position(self) -> None:
        """Test layer and column indices are 1-based."""
        with pytest.raises(ValidationError):
            CellTemplate(layer=0, column=1, label="x")


class TestTables:
    """Tests for content and exclusion tables."""

    def test_negative_count_rejected(self) -> None:
        """Test counts cannot be negative."""
        with pytest.raises(ValidationError):
            CellContent(label="x", count=-1)

    def test_content_lookup(self) -> None:
        """Test sparse lookup and per-layer counts."""
        table = ContentTable(cells={(2, 2): CellContent(label="a", count=3)})
        assert (2, 2) in table
        assert table.get(2, 3) is None
        assert table.counts(2) == {2: 3}

    def test_exclusion_defaults_to_zero(self) -> None:
        """Test missing breakdown entries read as zero."""
        table = ExclusionTable(layer=4, reasons={1: "r"}, counts={(1, 2): 4})
        assert table.count(1, 2) == 4
        assert table.count(1, 3) == 0
        assert table.columns == [2]

    def test_box_holds_cell(self) -> None:
        """Test primitives remember which cell they belong to."""
        box = Box(cell=(1, 2), x=Extent.between(0, 1), y=Extent.between(0, 1))
        assert box.kind == "box"
        assert box.style == "closed"

    def test_label_and_arrow_are_frozen(self) -> None:
        """Test label and arrow primitives carry their kind and reject edits."""
        label = Label(cell=(4, 1), x=1.0, y=2.0, text="n = 0", alignment="left")
        arrow = Arrow(cell=(2, 2), x1=0.0, y1=5.0, x2=0.0, y2=3.0)
        assert (label.kind, arrow.kind, arrow.style) == ("label", "arrow", "flow")
        with pytest.raises(ValidationError):
            label.text = "changed"
        with pytest.raises(ValidationError):
            CellContent(label="Analysed", count=-1)
