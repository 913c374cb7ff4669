"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and build summaries.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import TransformError
from .pipeline import BuildReport


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, TransformError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_build_summary(report: BuildReport) -> None:
    """Print written outputs and any per-file failures."""

    for path in report.written:
        typer.echo(f"Wrote: {path}")
    for failure in report.failures:
        error = failure.error
        stage = error.stage if error is not None else "unknown"
        detail = error.detail if error is not None else ""
        typer.secho(
            f"Failed: {failure.source} at stage `{stage}`: {detail}",
            fg=typer.colors.RED,
            err=True,
        )
    typer.echo(f"Files written: {len(report.written)}")
    typer.echo(f"Files failed: {len(report.failures)}")
