"""Deterministic markdown stripping rules.

Responsibilities:
- Provide composable rules that remove inline markdown from description text.
- Keep stripping idempotent by applying the rule sequence to a fixed point.
"""

from __future__ import annotations

import re
from typing import Protocol


class CleanerRule(Protocol):
    """Protocol for text cleaning rules."""

    def apply(self, text: str) -> str:
        """Apply a single cleaning transformation."""


class RemoveImages:
    """Replace `![alt](url)` images with their alt text."""

    _IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")

    def apply(self, text: str) -> str:
        return self._IMAGE_RE.sub(r"\1", text)


class RemoveLinks:
    """Replace inline `[label](url)` and reference `[label][ref]` links with the label."""

    _INLINE_RE = re.compile(r"\[([^\]]+)\]\([^)]*\)")
    _REFERENCE_RE = re.compile(r"\[([^\]]+)\]\[[^\]]*\]")

    def apply(self, text: str) -> str:
        text = self._INLINE_RE.sub(r"\1", text)
        return self._REFERENCE_RE.sub(r"\1", text)


class RemoveHeaders:
    """Drop ATX header markers (`# Title`) at line starts."""

    def apply(self, text: str) -> str:
        return re.sub(r"(?m)^[ \t]{0,3}#{1,6}[ \t]+", "", text)


class RemoveBlockQuotes:
    """Drop `>` block quote markers at line starts."""

    def apply(self, text: str) -> str:
        return re.sub(r"(?m)^[ \t]{0,3}>[ \t]?", "", text)


class RemoveEmphasis:
    """Unwrap bold, italic, and strikethrough spans.

    Delimiters must hug non-space text, so arithmetic such as ``2 * 3`` and
    identifiers such as ``snake_case`` are left alone.
    """

    _PATTERNS = (
        re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*"),
        re.compile(r"(?<!\w)__(?=\S)(.+?)(?<=\S)__(?!\w)"),
        re.compile(r"~~(?=\S)(.+?)(?<=\S)~~"),
        re.compile(r"\*(?=[^\s*])(.+?)(?<=[^\s*])\*"),
        re.compile(r"(?<!\w)_(?=[^\s_])(.+?)(?<=[^\s_])_(?!\w)"),
    )

    def apply(self, text: str) -> str:
        for pattern in self._PATTERNS:
            text = pattern.sub(r"\1", text)
        return text


class RemoveInlineCode:
    """Unwrap backtick code spans."""

    def apply(self, text: str) -> str:
        return re.sub(r"`([^`]+)`", r"\1", text)


class MarkdownStripper:
    """Apply a sequence of markdown rules until the text stops changing."""

    def __init__(self, rules: list[CleanerRule] | None = None) -> None:
        """Initialize with custom rules or the default rule sequence."""

        self.rules = rules or [
            RemoveImages(),
            RemoveLinks(),
            RemoveHeaders(),
            RemoveBlockQuotes(),
            RemoveInlineCode(),
            RemoveEmphasis(),
        ]

    def strip(self, text: str) -> str:
        """Return `text` with all configured markup removed."""

        current = text
        while True:
            stripped = self._apply_once(current)
            if stripped == current:
                return stripped
            current = stripped

    def _apply_once(self, text: str) -> str:
        for rule in self.rules:
            text = rule.apply(text)
        return text


def strip_markdown(value: object) -> str:
    """Strip markdown from a description value, converting non-strings with `str()`."""

    text = value if isinstance(value, str) else str(value)
    return MarkdownStripper().strip(text)
