"""Field formatting helpers for normalized monster records.

Responsibilities:
- Capitalize display labels without touching the rest of the text.
- Render signed bonuses (`+3`, `-2`) and comma-joined bonus lists.
- Map textual challenge fractions to decimal values.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable


_CHALLENGE_FRACTIONS = {
    "1/8": 0.125,
    "1/4": 0.25,
    "1/2": 0.5,
}


def capitalize_first(value: object) -> str:
    """Uppercase the first character only; `str.capitalize` would lowercase the rest."""

    text = value if isinstance(value, str) else str(value)
    return text[:1].upper() + text[1:]


def signed(value: int) -> str:
    """Render an integer with an explicit sign."""

    sign = "+" if value >= 0 else "-"
    return f"{sign}{abs(value)}"


def format_bonus_list(
    bonuses: Iterable[tuple[str, int]],
    label: Callable[[str], str] = str,
) -> str:
    """Join `(name, bonus)` pairs as ``"<Name> +3, <Name> -1"``."""

    return ", ".join(f"{label(name)} {signed(bonus)}" for name, bonus in bonuses)


def challenge_value(value: object) -> object:
    """Map `"1/8"`, `"1/4"`, `"1/2"` to decimals; pass anything else through unchanged."""

    if isinstance(value, str) and value in _CHALLENGE_FRACTIONS:
        return _CHALLENGE_FRACTIONS[value]
    return value
