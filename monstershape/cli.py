"""Command-line interface for monstershape.

Responsibilities:
- Expose user-facing commands for single-file and batch transforms.
- Convert CLI arguments into `BuildConfig` / `TransformOptions`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_build_summary, exit_with_command_error
from .config import BuildConfig, ConfigLoader, TransformOptions
from .document.parser import GrammarVariant, parse_grammar_variant
from .errors import TransformError
from .parsing import parse_key_list
from .pipeline import MonsterBuildPipeline
from .telemetry.logger import RunLogger
from .transform import transform

app = typer.Typer(
    name="monstershape",
    no_args_is_help=True,
    help="Convert YAML monster descriptions into normalized JSON records.",
)


class BuildProgressIndicator:
    """Render deterministic per-file progress lines for batch commands."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        """Initialize progress indicator metadata for a command invocation."""

        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a file entering a stage."""

        spinner = self._SPINNER_FRAMES[(stage_index - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} "
            f"{spinner} {stage_index}/{stage_total} stage={stage_name}"
        )


def _load_base_config(config_path: Path | None) -> BuildConfig:
    """Load YAML config when requested, else environment defaults, as stage errors."""

    try:
        if config_path is None:
            return ConfigLoader.from_env()
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise TransformError(
            stage="config",
            source_name=str(config_path),
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        label = f"config file `{config_path}`" if config_path is not None else "environment"
        raise TransformError(
            stage="config",
            source_name=str(config_path or "<env>"),
            detail=f"Invalid {label}: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise TransformError(
            stage="config",
            source_name=str(config_path),
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _resolve_options(
    base: TransformOptions,
    grammar: str | None,
    unsafe: bool,
    indent: int | None,
    sort_keys: bool,
    keys: str | None,
    reject_empty: bool,
) -> TransformOptions:
    """Apply explicit CLI overrides on top of configured transform options."""

    try:
        variant = parse_grammar_variant(grammar) if grammar is not None else None
    except ValueError as exc:
        raise TransformError(
            stage="config",
            source_name="<cli>",
            detail=str(exc),
            hint="Run `monstershape grammars` to list valid names.",
        ) from exc

    options = replace(
        base,
        strict_grammar=False if unsafe else base.strict_grammar,
        grammar_variant=variant if variant is not None else base.grammar_variant,
        indent=indent if indent is not None else base.indent,
        sort_keys=True if sort_keys else base.sort_keys,
        key_filter=parse_key_list(keys) or base.key_filter,
        allow_empty=False if reject_empty else base.allow_empty,
    )
    try:
        options.validate()
    except ValueError as exc:
        raise TransformError(
            stage="config",
            source_name="<cli>",
            detail=str(exc),
        ) from exc
    return options


GrammarOption = Annotated[
    str | None,
    typer.Option("--grammar", help="Grammar variant; overrides `--unsafe`."),
]
UnsafeOption = Annotated[
    bool,
    typer.Option("--unsafe", help="Use the full grammar instead of the safe one."),
]
IndentOption = Annotated[
    int | None,
    typer.Option("--indent", help="Pretty-print JSON with this indentation width."),
]
SortKeysOption = Annotated[
    bool, typer.Option("--sort-keys", help="Sort output keys alphabetically.")
]
KeysOption = Annotated[
    str | None,
    typer.Option("--keys", help="Comma-separated output key whitelist, in output order."),
]
RejectEmptyOption = Annotated[
    bool,
    typer.Option("--reject-empty", help="Fail on empty source files instead of emitting `{}`."),
]


@app.command("build")
def build_command(
    inputs: Annotated[
        list[Path] | None,
        typer.Argument(help="Source `.yml` files or directories. Required unless set by config."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory (overrides config file value)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with build defaults."),
    ] = None,
    grammar: GrammarOption = None,
    unsafe: UnsafeOption = False,
    indent: IndentOption = None,
    sort_keys: SortKeysOption = False,
    keys: KeysOption = None,
    reject_empty: RejectEmptyOption = False,
    workers: Annotated[
        int | None,
        typer.Option("--workers", help="Transform files on this many threads."),
    ] = None,
    continue_on_error: Annotated[
        bool,
        typer.Option("--continue-on-error", help="Keep going after a file fails."),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Emit per-stage phase logs to stderr.")
    ] = False,
) -> None:
    """Transform monster files into JSON records under an output directory."""

    try:
        base = _load_base_config(config_file)
        options = _resolve_options(
            base.options, grammar, unsafe, indent, sort_keys, keys, reject_empty
        )
        config = BuildConfig(
            inputs=tuple(inputs) if inputs else base.inputs,
            output_dir=out if out is not None else base.output_dir,
            options=options,
            workers=workers if workers is not None else base.workers,
            continue_on_error=continue_on_error or base.continue_on_error,
            extension=base.extension,
        )
        progress = BuildProgressIndicator("build")
        pipeline = MonsterBuildPipeline(
            run_logger=RunLogger() if verbose else None,
            stage_progress_callback=progress.on_stage_start,
        )
        report = pipeline.run(config)
    except Exception as exc:
        exit_with_command_error("build", exc)

    echo_build_summary(report)
    if report.failures:
        raise typer.Exit(code=1)


@app.command("convert")
def convert_command(
    input_file: Annotated[Path, typer.Argument(help="Source `.yml` file.")],
    grammar: GrammarOption = None,
    unsafe: UnsafeOption = False,
    indent: IndentOption = None,
    sort_keys: SortKeysOption = False,
    keys: KeysOption = None,
    reject_empty: RejectEmptyOption = False,
) -> None:
    """Transform one monster file and print the JSON record to stdout."""

    try:
        options = _resolve_options(
            TransformOptions(), grammar, unsafe, indent, sort_keys, keys, reject_empty
        )
        try:
            raw = input_file.read_bytes()
        except OSError as exc:
            raise TransformError(
                stage="read",
                source_name=str(input_file),
                detail=f"Failed to read `{input_file}`: {exc}",
                hint="Verify the file exists and is readable.",
            ) from exc
        data = transform(raw, options, source_name=str(input_file))
    except Exception as exc:
        exit_with_command_error("convert", exc)

    typer.echo(data.decode("utf-8"))


@app.command("grammars")
def grammars_command() -> None:
    """List accepted grammar variant names."""

    for variant in GrammarVariant:
        typer.echo(variant.value)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
