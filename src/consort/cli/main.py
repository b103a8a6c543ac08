"""CLI application using Typer for drawing CONSORT diagrams."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config.settings import settings
from ..core.errors import ConsortError
from ..core.models import GridSpec
from ..data.sample import make_sample_dataset
from ..io.dataset import load_dataset, save_dataset
from ..io.paths import default_output_path
from ..layout.geometry import compute_grid_geometry
from ..pipeline import build_diagram, draw_consort_diagram
from ..utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="consort",
    help="Draw CONSORT participant-flow diagrams from subject-level data",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override CONSORT_LOG_LEVEL"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text"),
) -> None:
    """Configure logging before running a command."""
    if log_format is not None and log_format not in ("json", "text"):
        console.print(f"[red]Error: --log-format must be 'json' or 'text', got '{log_format}'[/red]")
        raise typer.Exit(2)
    configure_logging(level=log_level, log_format=log_format)


def _grid_spec(
    columns: Optional[int],
    column_width: Optional[float],
    column_spacing: Optional[float],
    layers: Optional[int],
    layer_depth: Optional[float],
    layer_spacing: Optional[float],
) -> GridSpec:
    base = settings.grid_spec()
    overrides = {
        "column_count": columns,
        "column_width": column_width,
        "column_spacing": column_spacing,
        "layer_count": layers,
        "layer_depth": layer_depth,
        "layer_spacing": layer_spacing,
    }
    return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def _load(data: Optional[Path], sample: bool, seed: Optional[int]):
    if data is not None:
        return load_dataset(data)
    if sample:
        return make_sample_dataset(seed=seed)
    console.print("[red]Error: Must provide --data or --sample[/red]")
    raise typer.Exit(1)


@app.command()
def draw(
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="CSV or parquet file, one row per subject"),
    sample: bool = typer.Option(False, "--sample", help="Use the built-in 100-subject sample cohort"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Shuffle seed for --sample"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Image file (PNG/SVG/PDF)"),
    dpi: Optional[int] = typer.Option(None, "--dpi", help="Raster resolution"),
    columns: Optional[int] = typer.Option(None, "--columns"),
    column_width: Optional[float] = typer.Option(None, "--column-width"),
    column_spacing: Optional[float] = typer.Option(None, "--column-spacing"),
    layers: Optional[int] = typer.Option(None, "--layers"),
    layer_depth: Optional[float] = typer.Option(None, "--layer-depth"),
    layer_spacing: Optional[float] = typer.Option(None, "--layer-spacing"),
) -> None:
    """Draw a CONSORT diagram and save it as an image."""
    console.print("[bold blue]Drawing CONSORT diagram[/bold blue]")
    spec = _grid_spec(columns, column_width, column_spacing, layers, layer_depth, layer_spacing)
    if output is None:
        output = default_output_path()
    try:
        df = _load(data, sample, seed)
        diagram = draw_consort_diagram(df, output, spec=spec, dpi=dpi)
    except (ConsortError, FileNotFoundError) as exc:
        logger.error(f"Diagram failed: {exc}")
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)
    console.print(f"Subjects: {len(df)}")
    console.print(f"Primitives: {len(diagram.primitives)}")
    console.print(f"[green]✓ CONSORT diagram saved to {output}[/green]")


@app.command()
def counts(
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="CSV or parquet file"),
    sample: bool = typer.Option(False, "--sample", help="Use the built-in sample cohort"),
) -> None:
    """Print the per-cell counts without drawing."""
    try:
        df = _load(data, sample, None)
        diagram = build_diagram(df)
    except (ConsortError, FileNotFoundError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)

    table = Table(title="Cell counts")
    table.add_column("Layer", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Label")
    table.add_column("n", justify="right")
    for (layer, column), content in sorted(diagram.content.cells.items()):
        table.add_row(str(layer), str(column), content.label.replace("\n", " "), str(content.count))
    console.print(table)

    excl = Table(title=f"Exclusions (layer {diagram.exclusions.layer})")
    excl.add_column("Reason")
    for column in diagram.exclusions.columns:
        excl.add_column(f"Col {column}", justify="right")
    for code, reason in sorted(diagram.exclusions.reasons.items()):
        excl.add_row(reason, *(str(diagram.exclusions.count(code, c)) for c in diagram.exclusions.columns))
    console.print(excl)


@app.command()
def geometry(
    columns: Optional[int] = typer.Option(None, "--columns"),
    column_width: Optional[float] = typer.Option(None, "--column-width"),
    column_spacing: Optional[float] = typer.Option(None, "--column-spacing"),
    layers: Optional[int] = typer.Option(None, "--layers"),
    layer_depth: Optional[float] = typer.Option(None, "--layer-depth"),
    layer_spacing: Optional[float] = typer.Option(None, "--layer-spacing"),
) -> None:
    """Show the computed column and layer extents."""
    spec = _grid_spec(columns, column_width, column_spacing, layers, layer_depth, layer_spacing)
    try:
        geo = compute_grid_geometry(spec)
    except ConsortError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)
    console.print(f"Plot size: {geo.plot_width:g} x {geo.plot_height:g}")
    table = Table(title="Extents")
    table.add_column("Axis")
    table.add_column("Index", justify="right")
    table.add_column("Near", justify="right")
    table.add_column("Center", justify="right")
    table.add_column("Far", justify="right")
    for axis, extents in (("column", geo.columns), ("layer", geo.layers)):
        for i, ext in enumerate(extents, start=1):
            table.add_row(axis, str(i), f"{ext.near:g}", f"{ext.center:g}", f"{ext.far:g}")
    console.print(table)


@app.command("sample")
def sample_cmd(
    output: Path = typer.Option(Path("consort_sample.csv"), "--output", "-o", help="CSV or parquet file"),
    rows: int = typer.Option(100, "--rows", "-n", help="Number of subjects"),
    analysed_fraction: float = typer.Option(0.4, "--analysed-fraction", help="Share of each subgroup analysed"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Shuffle seed"),
) -> None:
    """Write the sample cohort to disk."""
    try:
        df = make_sample_dataset(n=rows, analysed_fraction=analysed_fraction, seed=seed)
    except ValueError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)
    save_dataset(df, output)
    console.print(f"[green]✓ Sample cohort ({len(df)} rows) saved to {output}[/green]")


if __name__ == "__main__":
    app()
