"""Validate command for checking cutting job files.

This module provides the `validate` command that checks a JSON job file for
syntax and schema errors, then runs the feasibility pre-check (fit and
capacity) without packing anything.
"""

from pathlib import Path
from typing import Annotated

import typer

from panelcut.application import OptimizeCutsCommand
from panelcut.application.config import ConfigError, load_config


def validate_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a cutting job file.

    Checks the job file for:
    - JSON syntax errors
    - Schema validation errors (missing fields, non-positive sizes, etc.)
    - Parts that fit no stock row, and stock shortfalls per material

    Exit codes:
        0 - Job is valid and looks feasible
        1 - Job has errors

    Example:
        panelcut validate shelves.json
    """
    typer.echo(f"Validating {job_file}...")
    typer.echo()

    try:
        config = load_config(job_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    problems = OptimizeCutsCommand().check(config)
    if problems:
        typer.echo("Errors:", err=True)
        for problem in problems:
            typer.echo(f"  {problem}", err=True)
        typer.echo()
        typer.echo(f"Validation failed: {len(problems)} error(s)", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"Validation passed: {len(config.stocks)} stock row(s), "
        f"{len(config.parts)} part row(s)."
    )


def display_load_error(error: ConfigError) -> None:
    """Display a job loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)
