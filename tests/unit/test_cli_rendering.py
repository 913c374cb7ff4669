"""Unit tests for CLI output and error rendering helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer

from monstershape.cli_rendering import echo_build_summary, exit_with_command_error
from monstershape.errors import TransformError
from monstershape.pipeline import BuildReport, FileResult


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print stage diagnostics and hint before exiting with code 1."""

    error = TransformError(
        stage="parse",
        source_name="broken.yml",
        detail="Failed to parse `broken.yml` with grammar `default_safe`: bad flow sequence",
        hint="Fix the YAML syntax or choose a less restrictive grammar.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("convert", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "convert failed at stage `parse`" in captured.err
    assert "Hint: Fix the YAML syntax or choose a less restrictive grammar." in captured.err


def test_exit_with_command_error_omits_missing_hint(capsys: pytest.CaptureFixture[str]) -> None:
    """Stage errors without a hint should print a single diagnostic line."""

    error = TransformError(stage="normalize", source_name="x.yml", detail="Invalid field")

    with pytest.raises(typer.Exit):
        exit_with_command_error("build", error)

    captured = capsys.readouterr()
    assert "build failed at stage `normalize`: Invalid field" in captured.err
    assert "Hint:" not in captured.err


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for non-stage failures."""

    error = RuntimeError("unexpected output error")

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("build", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "build failed: unexpected output error" in captured.err


def test_echo_build_summary_lists_written_and_failed_files(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Summary should list outputs on stdout and failures on stderr."""

    report = BuildReport(
        results=(
            FileResult(source=Path("a.yml"), output=Path("out/a.json")),
            FileResult(
                source=Path("b.yml"),
                error=TransformError(stage="parse", source_name="b.yml", detail="bad YAML"),
            ),
        )
    )

    echo_build_summary(report)

    captured = capsys.readouterr()
    assert f"Wrote: {Path('out/a.json')}" in captured.out
    assert "Files written: 1" in captured.out
    assert "Files failed: 1" in captured.out
    assert "Failed: b.yml at stage `parse`: bad YAML" in captured.err
