"""Input/output components for monstershape.

This package discovers source files and stores transformed output.
"""

from .storage import SOURCE_SUFFIXES, OutputStore, discover_sources, read_source

__all__ = ["SOURCE_SUFFIXES", "OutputStore", "discover_sources", "read_source"]
