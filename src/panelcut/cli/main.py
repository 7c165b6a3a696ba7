"""Typer CLI for cutting stock optimization."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from panelcut.application import OptimizeCutsCommand
from panelcut.application.config import (
    ConfigError,
    CuttingJobConfiguration,
    config_to_strategy,
    load_config,
)
from panelcut.cli.commands import display_load_error, validate_command
from panelcut.domain import (
    OptimizationPhilosophy,
    OptimizationResult,
    OptimizationStrategy,
    PlacementMode,
)
from panelcut.infrastructure import (
    CutDiagramRenderer,
    CutSequenceFormatter,
    JsonExporter,
    ResultReportFormatter,
)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    DIAGRAM = "diagram"
    SEQUENCE = "sequence"
    ALL = "all"


app = typer.Typer(
    name="panelcut",
    help="Optimize cutting layouts for sheet goods and dimensional lumber.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _load_job(job_file: Path) -> CuttingJobConfiguration:
    try:
        return load_config(job_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def _resolve_strategy(
    config: CuttingJobConfiguration,
    philosophy: OptimizationPhilosophy | None,
    first_fit: bool,
) -> OptimizationStrategy | None:
    """Apply command-line overrides to the job's strategy.

    Returns None when nothing is overridden. Switching philosophy drops any
    custom weights from the job file.
    """
    if philosophy is None and not first_fit:
        return None

    base = config_to_strategy(config)
    mode = PlacementMode.FIRST_FIT if first_fit else base.mode
    if philosophy is None or philosophy == base.philosophy:
        return OptimizationStrategy(base.philosophy, base.weights, mode)
    return OptimizationStrategy.preset(philosophy, mode)


def _render(
    result: OptimizationResult,
    output_format: OutputFormat,
    command: OptimizeCutsCommand,
    width: int,
) -> str:
    if output_format == OutputFormat.JSON:
        return JsonExporter().export(result, command.cut_sequences(result))

    sections: list[str] = []
    if output_format in (OutputFormat.TEXT, OutputFormat.ALL):
        sections.append(ResultReportFormatter().format(result))
    if result.success and output_format in (OutputFormat.DIAGRAM, OutputFormat.ALL):
        sections.append(CutDiagramRenderer().render_all_ascii(result, width))
    if result.success and output_format in (OutputFormat.SEQUENCE, OutputFormat.ALL):
        sections.append(CutSequenceFormatter().format(command.cut_sequences(result)))
    if not sections:
        sections.append(ResultReportFormatter().format(result))
    return "\n\n".join(sections)


@app.command()
def optimize(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text, json, diagram, sequence, all"),
    ] = OutputFormat.TEXT,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to this file"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", min=0, help="Saw kerf in mm (overrides the job file)"),
    ] = None,
    philosophy: Annotated[
        OptimizationPhilosophy | None,
        typer.Option("--philosophy", "-p", help="Optimization philosophy preset"),
    ] = None,
    first_fit: Annotated[
        bool,
        typer.Option("--first-fit", help="Use first-fit instead of best-fit placement"),
    ] = False,
    width: Annotated[
        int,
        typer.Option("--width", "-w", min=20, help="Diagram width in characters"),
    ] = 80,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log placement decisions to stderr"),
    ] = False,
) -> None:
    """Optimize a cutting job and print the layout.

    Exits with code 1 if the job cannot be loaded or not every part fits.
    """
    _configure_logging(verbose)
    config = _load_job(job_file)

    command = OptimizeCutsCommand()
    strategy = _resolve_strategy(config, philosophy, first_fit)
    result = command.execute(config, kerf=kerf, strategy=strategy)

    output = _render(result, output_format, command, width)
    if output_file is not None:
        output_file.write_text(output, encoding="utf-8")
        typer.echo(f"Wrote {output_format.value} output to {output_file}")
    else:
        typer.echo(output)

    if not result.success:
        typer.echo(f"Error: {result.message}", err=True)
        raise typer.Exit(code=1)


@app.command()
def diagram(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    width: Annotated[
        int,
        typer.Option("--width", "-w", min=20, help="Diagram width in characters"),
    ] = 80,
    summary: Annotated[
        bool,
        typer.Option("--summary/--no-summary", help="Append the waste summary"),
    ] = True,
) -> None:
    """Show ASCII cut diagrams for an optimized job."""
    config = _load_job(job_file)
    result = OptimizeCutsCommand().execute(config)

    if not result.success:
        typer.echo(f"Error: {result.message}", err=True)
        raise typer.Exit(code=1)

    renderer = CutDiagramRenderer()
    typer.echo(renderer.render_all_ascii(result, width))
    if summary:
        typer.echo()
        typer.echo(renderer.render_waste_summary(result))


if __name__ == "__main__":
    app()
