"""Batch build orchestration for monstershape.

Responsibilities:
- Discover source documents and transform each one independently.
- Write complete output files only for successful transforms.
- Report per-file outcomes in input order.

Key types:
- `MonsterBuildPipeline`: orchestration facade.
- `BuildReport`: immutable record of a build's per-file results.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import TypeVar

from ..config import BuildConfig, TransformOptions
from ..errors import TransformError
from ..io.storage import OutputStore, discover_sources, read_source
from ..telemetry.logger import RunLogger
from ..transform import transform

_StageResult = TypeVar("_StageResult")


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of transforming one source file.

    Attributes:
        source: Source document path.
        output: Written output path, or `None` when the transform failed.
        error: Failure for this file, or `None` on success.
    """

    source: Path
    output: Path | None = None
    error: TransformError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class BuildReport:
    """Per-file results of one build, in input order."""

    results: tuple[FileResult, ...]

    @property
    def written(self) -> tuple[Path, ...]:
        return tuple(result.output for result in self.results if result.output is not None)

    @property
    def failures(self) -> tuple[FileResult, ...]:
        return tuple(result for result in self.results if not result.ok)


class MonsterBuildPipeline:
    """Coordinate discovery, transform, and write for one build."""

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
    ) -> None:
        """Initialize optional runtime logging and progress reporting hooks."""

        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback

    def run(self, config: BuildConfig) -> BuildReport:
        """Transform every source named by `config` and write outputs.

        Raises:
            TransformError: Invalid config, missing inputs, or (unless
                `continue_on_error` is set) the first failing file.
        """

        try:
            config.validate()
        except ValueError as exc:
            raise TransformError(
                stage="config",
                source_name="<config>",
                detail=f"Invalid build configuration: {exc}",
                hint="Fix config values and rerun.",
            ) from exc

        sources = self._run_stage("discover", lambda: self._discover(config))
        store = OutputStore(config.output_dir, config.extension)
        build_one = partial(
            self._build_one,
            store=store,
            options=config.options,
            total=len(sources),
            continue_on_error=config.continue_on_error,
        )

        if config.workers > 1 and len(sources) > 1:
            with ThreadPoolExecutor(max_workers=config.workers) as executor:
                results = list(executor.map(build_one, sources, range(1, len(sources) + 1)))
        else:
            results = [
                build_one(source, index) for index, source in enumerate(sources, start=1)
            ]
        return BuildReport(results=tuple(results))

    def _discover(self, config: BuildConfig) -> list[Path]:
        """Expand configured inputs, mapping missing paths to stage errors."""

        if not config.inputs:
            raise TransformError(
                stage="discover",
                source_name="<inputs>",
                detail="No input files or directories were given.",
                hint="Pass one or more `.yml` files or directories.",
            )
        try:
            return discover_sources(config.inputs)
        except FileNotFoundError as exc:
            raise TransformError(
                stage="discover",
                source_name="<inputs>",
                detail=str(exc),
                hint="Verify the input paths exist.",
            ) from exc

    def _build_one(
        self,
        source: Path,
        index: int,
        *,
        store: OutputStore,
        options: TransformOptions,
        total: int,
        continue_on_error: bool,
    ) -> FileResult:
        """Read, transform, and write one source file."""

        if self._stage_progress_callback is not None:
            self._stage_progress_callback("transform", index, total)
        try:
            output = self._run_stage(
                "transform",
                lambda: self._transform_file(source, store, options),
                source=source,
            )
        except TransformError as exc:
            if not continue_on_error:
                raise
            return FileResult(source=source, error=exc)
        return FileResult(source=source, output=output)

    def _transform_file(
        self, source: Path, store: OutputStore, options: TransformOptions
    ) -> Path:
        """Transform `source` and write its output; nothing is written on failure."""

        source_name = str(source)
        try:
            raw = read_source(source)
        except OSError as exc:
            raise TransformError(
                stage="read",
                source_name=source_name,
                detail=f"Failed to read `{source}`: {exc}",
                hint="Verify the file exists and is readable.",
            ) from exc

        data = transform(raw, options, source_name=source_name)

        try:
            return store.save_bytes(source, data)
        except OSError as exc:
            raise TransformError(
                stage="write",
                source_name=source_name,
                detail=f"Failed to write output for `{source}`: {exc}",
                hint="Verify the output directory is writable.",
            ) from exc

    def _run_stage(
        self, stage_name: str, action: Callable[[], _StageResult], **context: object
    ) -> _StageResult:
        """Run one stage action with start/complete/failure telemetry."""

        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage_name, **context)
        try:
            result = action()
        except Exception as exc:
            if self._run_logger is not None:
                self._run_logger.log_stage_failure(
                    stage_name, error_type=type(exc).__name__, **context
                )
            raise
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage_name, **context)
        return result
