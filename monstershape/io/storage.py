"""Source discovery and output storage.

Responsibilities:
- Expand input paths into an ordered list of source documents.
- Read source bytes and write complete output files under an output root.
"""

from __future__ import annotations

from pathlib import Path

from ..transform import output_name


SOURCE_SUFFIXES = (".yml", ".yaml")


def discover_sources(inputs: tuple[Path, ...] | list[Path]) -> list[Path]:
    """Return source files for `inputs`, expanding directories to their YAML files.

    Directory contents are sorted; explicit files keep their given order.
    Duplicates are dropped.

    Raises:
        FileNotFoundError: An input path does not exist.
    """

    sources: list[Path] = []
    seen: set[Path] = set()
    for path in inputs:
        if path.is_dir():
            candidates = sorted(
                candidate
                for candidate in path.rglob("*")
                if candidate.is_file() and candidate.suffix.lower() in SOURCE_SUFFIXES
            )
        elif path.is_file():
            candidates = [path]
        else:
            raise FileNotFoundError(f"Input path not found: `{path}`.")
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            sources.append(candidate)
    return sources


class OutputStore:
    """Filesystem-backed store for transformed records."""

    def __init__(self, root: Path, extension: str = ".json") -> None:
        """Initialize the store with a root output directory and file extension."""

        self.root = root
        self.extension = extension

    def output_path(self, source: Path) -> Path:
        """Return where the output for `source` is written."""

        return self.root / output_name(source, self.extension)

    def save_bytes(self, source: Path, data: bytes) -> Path:
        """Write output bytes for `source` and return the final path."""

        path = self.output_path(source)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def exists(self, source: Path) -> bool:
        """Return whether output for `source` already exists."""

        return self.output_path(source).exists()


def read_source(path: Path) -> bytes:
    """Read raw source bytes; decoding is the transform's responsibility."""

    return path.read_bytes()
