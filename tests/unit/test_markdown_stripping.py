"""Unit tests for markdown stripping rules."""

from __future__ import annotations

import pytest

from monstershape.text.cleaners import (
    MarkdownStripper,
    RemoveEmphasis,
    RemoveLinks,
    strip_markdown,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("The dragon can breathe *air* and **water**.", "The dragon can breathe air and water."),
        ("Make a [DC 14](https://example.com/dc) save.", "Make a DC 14 save."),
        ("See [the rules][srd] for details.", "See the rules for details."),
        ("![Lich portrait](lich.png) stares back.", "Lich portrait stares back."),
        ("## Spellcasting\nThe lich casts spells.", "Spellcasting\nThe lich casts spells."),
        ("> A quoted line", "A quoted line"),
        ("Uses its _Paralyzing Touch_.", "Uses its Paralyzing Touch."),
        ("Deals ~~cold~~ damage with `Frost`.", "Deals cold damage with Frost."),
        ("***Legendary Resistance (3/Day).***", "Legendary Resistance (3/Day)."),
        ("__bold__ and *[linked](url)*", "bold and linked"),
    ],
)
def test_strip_markdown_removes_inline_markup(text: str, expected: str) -> None:
    """Stripping should remove emphasis, links, images, headers, and code markers."""

    assert strip_markdown(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "Melee Weapon Attack: +5 to hit, reach 5 ft., one target. Hit: 2d6+3",
        "The creature multiplies 2 * 3 * 4 times per snake_case_name round.",
        "Plain prose without markup.",
        "",
    ],
)
def test_strip_markdown_is_noop_on_plain_text(text: str) -> None:
    """Text without markup should pass through unchanged."""

    assert strip_markdown(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "****nested**** emphasis",
        "*[**deep**](url)*",
        "# *Title* with [link](x)",
        "__*mixed*__ _**markers**_",
    ],
)
def test_strip_markdown_is_idempotent(text: str) -> None:
    """Stripping twice should equal stripping once."""

    once = strip_markdown(text)

    assert strip_markdown(once) == once


def test_strip_markdown_converts_non_string_values() -> None:
    """Numeric descriptions should be converted with `str()`."""

    assert strip_markdown(42) == "42"


def test_markdown_stripper_accepts_custom_rules() -> None:
    """A custom rule list should limit which markup is removed."""

    stripper = MarkdownStripper(rules=[RemoveLinks()])

    assert stripper.strip("*[x](y)*") == "*x*"
    assert MarkdownStripper(rules=[RemoveEmphasis()]).strip("*[x](y)*") == "[x](y)"
