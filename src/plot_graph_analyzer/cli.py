"""Command-line interface for Plot Graph Analyzer."""

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from plot_graph_analyzer import __version__
from plot_graph_analyzer.graph.annotations import AnnotationParseError
from plot_graph_analyzer.graph.plot_graph import PlotGraphError

console = Console()


def setup_logging(level: str) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", "-l", default=None, help="Logging level (defaults to PGA_LOG_LEVEL or INFO)")
def main(log_level: str | None) -> None:
    """Plot Graph Analyzer - Find plot units in simulated stories and score their tellability."""
    from plot_graph_analyzer.config import get_settings

    setup_logging(log_level or get_settings().log_level)


def _analyze_log(file_path: Path):
    """Replay a JSON plot log into a recorder and analyze it."""
    from plot_graph_analyzer.analysis import PlotAnalyzer
    from plot_graph_analyzer.graph.recorder import PlotRecorder
    from plot_graph_analyzer.models import PlotLog

    try:
        plot_log = PlotLog.model_validate_json(file_path.read_text(encoding="utf-8"))
        recorder = PlotRecorder(plot_log.involved_characters(), name=plot_log.name or file_path.stem)
        for event in plot_log.events:
            recorder.report(event)
        return recorder.analyze(PlotAnalyzer())
    except (ValidationError, AnnotationParseError, PlotGraphError) as e:
        raise click.ClickException(f"Cannot analyze {file_path}: {e}") from e


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output file for results (JSON)")
def analyze(path: str, output: str | None) -> None:
    """Analyze a recorded plot log (JSON) and report its tellability."""
    result = _analyze_log(Path(path))
    tellability = result.tellability
    score = tellability.compute()

    console.print(f"[bold]Plot:[/bold] {result.graph.name}")
    console.print(f"[dim]Characters: {', '.join(root.label for root in result.graph.roots)}[/dim]\n")

    table = Table(title="Tellability")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Functional units", f"{tellability.num_functional_units:,}")
    table.add_row("Polyvalent vertices", f"{tellability.num_polyvalent_vertices:,}")
    table.add_row("All vertices", f"{tellability.num_all_vertices:,}")
    table.add_row("Productive conflicts", f"{tellability.productive_conflicts:,}")
    table.add_row("Suspense", f"{tellability.suspense:,}")
    table.add_row("Plot length", f"{tellability.plot_length:,}")
    table.add_row("Symmetry", f"{tellability.symmetry:.3f}")
    table.add_row("[bold]Tellability[/bold]", f"[bold]{score:.3f}[/bold]")

    console.print(table)

    if tellability.plot_unit_types:
        console.print("\n[bold]Functional units found:[/bold]")
        for name, count in sorted(tellability.functional_unit_count.items(), key=lambda x: -x[1]):
            if count:
                console.print(f"  {name}: {count}")

    polyvalent = [vertex for vertex in result.graph.vertices if vertex.polyvalent]
    if polyvalent:
        console.print("\n[bold]Polyvalent vertices:[/bold]")
        for vertex in polyvalent:
            character = result.graph.character_of(vertex)
            console.print(f"  \\[{escape(character)}] {escape(str(vertex))}: {', '.join(vertex.units)}")

    if output:
        output_path = Path(output)
        output_data = {
            "name": result.graph.name,
            **tellability.to_dict(),
            "polyvalent_vertices": [
                {
                    "character": result.graph.character_of(vertex),
                    "label": vertex.label,
                    "units": vertex.units,
                }
                for vertex in polyvalent
            ],
        }

        with open(output_path, "w") as f:
            json.dump(output_data, f, indent=2)

        console.print(f"\n[green]OK[/green] Results saved to {output_path}")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output HTML file (defaults to <log>.html)")
def visualize(path: str, output: str | None) -> None:
    """Render an analyzed plot log as interactive HTML."""
    from plot_graph_analyzer.visualize import save_html

    file_path = Path(path)
    result = _analyze_log(file_path)
    output_path = Path(output) if output else file_path.with_suffix(".html")

    with console.status("Rendering graph..."):
        save_html(result.graph, output_path)

    console.print(f"[green]OK[/green] Visualization saved to {output_path}")
    console.print(f"[dim]{len(result.graph)} vertices, {result.graph.number_of_edges()} edges[/dim]")


@main.command()
def units() -> None:
    """List the functional unit catalog."""
    from plot_graph_analyzer.units import DEFAULT_LIBRARY

    table = Table(title="Functional Units")
    table.add_column("Unit", style="cyan")
    table.add_column("Vertices", justify="right")
    table.add_column("Pattern")
    table.add_column("Counted", justify="center")

    for unit in DEFAULT_LIBRARY.all_units:
        table.add_row(
            unit.name,
            str(unit.size),
            "\n".join(unit.describe()),
            "no" if unit.primitive else "yes",
        )

    console.print(table)


@main.command()
@click.argument("label")
def annotations(label: str) -> None:
    """Show the term and annotations of an event label."""
    from plot_graph_analyzer.graph.annotations import parse_annotations, remove_annots

    try:
        term = remove_annots(label)
        parsed = parse_annotations(label)
    except AnnotationParseError as e:
        raise click.ClickException(str(e)) from e

    console.print(f"[bold]Term:[/bold] {escape(term)}")
    if not parsed:
        console.print("[dim]No annotations[/dim]")
        return

    table = Table()
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for key, value in parsed.items():
        table.add_row(escape(key), escape(value))
    console.print(table)


if __name__ == "__main__":
    main()
