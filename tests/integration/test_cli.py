"""Integration tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from consort.cli.main import app
from consort.data.sample import make_sample_dataset

runner = CliRunner()


@pytest.mark.integration
def test_draw_sample(tmp_path: Path):
    """Test drawing the built-in cohort."""
    output = tmp_path / "diagram.png"
    result = runner.invoke(app, ["draw", "--sample", "--output", str(output), "--dpi", "72"])
    assert result.exit_code == 0, result.output
    assert output.exists()
    assert "Primitives: 36" in result.output


@pytest.mark.integration
def test_draw_from_csv(tmp_path: Path):
    """Test drawing from a dataset file."""
    data = tmp_path / "cohort.csv"
    make_sample_dataset().to_csv(data, index=False)
    output = tmp_path / "diagram.svg"
    result = runner.invoke(app, ["draw", "--data", str(data), "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.exists()


@pytest.mark.integration
def test_draw_from_header_only_csv(tmp_path: Path):
    """Test a CSV written by `sample --rows 0` still draws."""
    data = tmp_path / "empty.csv"
    result = runner.invoke(app, ["sample", "-o", str(data), "--rows", "0"])
    assert result.exit_code == 0, result.output
    output = tmp_path / "empty.png"
    result = runner.invoke(app, ["draw", "--data", str(data), "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.exists()
    assert "Subjects: 0" in result.output


@pytest.mark.integration
def test_draw_requires_input(tmp_path: Path):
    """Test draw without --data or --sample fails."""
    result = runner.invoke(app, ["draw", "-o", str(tmp_path / "x.png")])
    assert result.exit_code == 1


@pytest.mark.integration
def test_draw_reports_missing_field(tmp_path: Path):
    """Test a dataset lacking a field exits with an error."""
    data = tmp_path / "bad.csv"
    make_sample_dataset().drop(columns=["arm"]).to_csv(data, index=False)
    result = runner.invoke(app, ["draw", "--data", str(data), "-o", str(tmp_path / "x.png")])
    assert result.exit_code == 1
    assert "arm" in result.output
    assert not (tmp_path / "x.png").exists()


@pytest.mark.integration
def test_geometry_command():
    """Test the extents table for the reference grid."""
    result = runner.invoke(app, ["geometry"])
    assert result.exit_code == 0, result.output
    assert "137 x 113" in result.output


@pytest.mark.integration
def test_geometry_rejects_bad_grid():
    """Test a zero-width grid is reported."""
    result = runner.invoke(app, ["geometry", "--column-width", "0"])
    assert result.exit_code == 1
    assert "column_width" in result.output


@pytest.mark.integration
def test_counts_command():
    """Test cell counts are printed for the sample cohort."""
    result = runner.invoke(app, ["counts", "--sample"])
    assert result.exit_code == 0, result.output
    assert "Enrolled" in result.output
    assert "Withdrew consent" in result.output


@pytest.mark.integration
def test_sample_command(tmp_path: Path):
    """Test writing the sample cohort."""
    output = tmp_path / "cohort.csv"
    result = runner.invoke(app, ["sample", "-o", str(output), "--rows", "20"])
    assert result.exit_code == 0, result.output
    assert output.exists()
    assert len(output.read_text().strip().splitlines()) == 21
