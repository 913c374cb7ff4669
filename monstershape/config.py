"""Configuration model and loaders for monstershape.

Responsibilities:
- Define per-transform options as an immutable dataclass.
- Define batch build settings for the pipeline and CLI.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `TransformOptions`: grammar, empty-input policy, and output formatting.
- `BuildConfig`: inputs, output directory, and batch behavior for one build.
- `ConfigLoader`: static construction helpers for `BuildConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .document.parser import GrammarVariant, parse_grammar_variant, resolve_grammar
from .parsing import (
    normalize_optional_string,
    parse_integer_like,
    parse_key_list,
    parse_required_boolean,
)


_DEFAULT_OUTPUT_DIR = Path("out")
_DEFAULT_EXTENSION = ".json"


@dataclass(frozen=True, slots=True)
class TransformOptions:
    """Options shared by every file transformed in one run.

    Attributes:
        strict_grammar: Use the safe grammar (`True`) or the full grammar (`False`).
        grammar_variant: Explicit grammar; overrides `strict_grammar` when set.
        key_filter: Output key whitelist and order, applied at every level.
        sort_keys: Sort output keys alphabetically.
        indent: Pretty-print indentation width; `None` for compact output.
        allow_empty: Tolerate empty source files as empty records.
    """

    strict_grammar: bool = True
    grammar_variant: GrammarVariant | None = None
    key_filter: tuple[str, ...] | None = None
    sort_keys: bool = False
    indent: int | None = None
    allow_empty: bool = True

    @property
    def grammar(self) -> GrammarVariant:
        """Return the effective grammar variant."""

        return resolve_grammar(self.strict_grammar, self.grammar_variant)

    def validate(self) -> None:
        """Validate option values before any file is transformed."""

        if self.indent is not None and self.indent < 0:
            raise ValueError("`indent` must be a non-negative integer.")
        if self.key_filter is not None and not all(
            isinstance(key, str) and key for key in self.key_filter
        ):
            raise ValueError("`key_filter` must contain non-empty key names.")


@dataclass(slots=True)
class BuildConfig:
    """Configuration for one batch build.

    Attributes:
        inputs: Source files or directories to transform.
        output_dir: Directory receiving output files.
        options: Per-file transform options.
        workers: Number of threads transforming files concurrently.
        continue_on_error: Record failures and keep going instead of stopping.
        extension: Output file extension.
    """

    inputs: tuple[Path, ...] = ()
    output_dir: Path = _DEFAULT_OUTPUT_DIR
    options: TransformOptions = field(default_factory=TransformOptions)
    workers: int = 1
    continue_on_error: bool = False
    extension: str = _DEFAULT_EXTENSION

    def validate(self) -> None:
        """Validate build configuration values."""

        self.options.validate()
        if self.workers <= 0:
            raise ValueError("`workers` must be a positive integer.")
        if not self.extension.startswith(".") or len(self.extension) < 2:
            raise ValueError("`extension` must start with `.`, for example `.json`.")


class ConfigLoader:
    """Factory methods for creating `BuildConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "inputs",
            "output_dir",
            "safe",
            "grammar",
            "key_filter",
            "sort_keys",
            "indent",
            "allow_empty",
            "workers",
            "continue_on_error",
            "extension",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> BuildConfig:
        """Create a validated build config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> BuildConfig:
        """Create a validated build config from `MONSTERSHAPE_*` variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload: dict[str, Any] = {}
        for key in ConfigLoader._SUPPORTED_YAML_KEYS:
            value = normalize_optional_string(env_map.get(f"MONSTERSHAPE_{key.upper()}"))
            if value is not None:
                payload[key] = value
        if "inputs" in payload:
            payload["inputs"] = [
                item for item in payload["inputs"].split(os.pathsep) if item.strip()
            ]
        return ConfigLoader._build_config_from_mapping(payload, source_label="environment")

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        payload = yaml.safe_load(raw_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> BuildConfig:
        """Build a validated config from a normalized mapping payload."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        grammar_name = ConfigLoader._optional_string(payload, "grammar")
        options = TransformOptions(
            strict_grammar=ConfigLoader._optional_boolean(payload, "safe", default=True),
            grammar_variant=(
                parse_grammar_variant(grammar_name) if grammar_name is not None else None
            ),
            key_filter=parse_key_list(payload.get("key_filter")),
            sort_keys=ConfigLoader._optional_boolean(payload, "sort_keys", default=False),
            indent=ConfigLoader._optional_int(payload, "indent", source_label, minimum=0),
            allow_empty=ConfigLoader._optional_boolean(payload, "allow_empty", default=True),
        )
        output_dir = ConfigLoader._optional_string(payload, "output_dir")
        config = BuildConfig(
            inputs=ConfigLoader._optional_paths(payload, "inputs", source_label),
            output_dir=Path(output_dir) if output_dir is not None else _DEFAULT_OUTPUT_DIR,
            options=options,
            workers=ConfigLoader._optional_int(payload, "workers", source_label, minimum=1) or 1,
            continue_on_error=ConfigLoader._optional_boolean(
                payload, "continue_on_error", default=False
            ),
            extension=ConfigLoader._optional_string(payload, "extension") or _DEFAULT_EXTENSION,
        )
        config.validate()
        return config

    @staticmethod
    def _optional_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        return normalize_optional_string(payload.get(key))

    @staticmethod
    def _optional_boolean(payload: Mapping[str, Any], key: str, *, default: bool) -> bool:
        """Read an optional boolean field using the shared token parser."""

        value = payload.get(key)
        if normalize_optional_string(value) is None:
            return default
        return parse_required_boolean(value, key)

    @staticmethod
    def _optional_int(
        payload: Mapping[str, Any], key: str, source_label: str, *, minimum: int
    ) -> int | None:
        """Read an optional integer field bounded below by `minimum`."""

        value = payload.get(key)
        if normalize_optional_string(value) is None:
            return None
        parsed = parse_integer_like(value)
        if parsed is None or parsed < minimum:
            raise ValueError(
                f"{source_label} requires `{key}` to be an integer >= {minimum}."
            )
        return parsed

    @staticmethod
    def _optional_paths(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> tuple[Path, ...]:
        """Read an optional path or list of paths."""

        value = payload.get(key)
        if value is None:
            return ()
        if isinstance(value, (str, Path)):
            value = [value]
        if not isinstance(value, list):
            raise ValueError(f"{source_label} requires `{key}` to be a path or list of paths.")
        paths = []
        for item in value:
            normalized = normalize_optional_string(item)
            if normalized is not None:
                paths.append(Path(normalized))
        return tuple(paths)
