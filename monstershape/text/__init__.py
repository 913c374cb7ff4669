"""Text cleanup and formatting components.

This package provides deterministic markdown stripping and the small string
formatting rules used while normalizing monster records.
"""

from .cleaners import (
    MarkdownStripper,
    RemoveBlockQuotes,
    RemoveEmphasis,
    RemoveHeaders,
    RemoveImages,
    RemoveInlineCode,
    RemoveLinks,
    strip_markdown,
)
from .formatting import capitalize_first, challenge_value, format_bonus_list, signed

__all__ = [
    "MarkdownStripper",
    "RemoveBlockQuotes",
    "RemoveEmphasis",
    "RemoveHeaders",
    "RemoveImages",
    "RemoveInlineCode",
    "RemoveLinks",
    "capitalize_first",
    "challenge_value",
    "format_bonus_list",
    "signed",
    "strip_markdown",
]
