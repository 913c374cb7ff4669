"""Unit tests for shared configuration and source value parsing helpers."""

import pytest

from monstershape.parsing import (
    normalize_optional_string,
    parse_integer_like,
    parse_key_list,
    parse_permissive_boolean,
    parse_required_boolean,
)


def test_normalize_optional_string_handles_blank_values() -> None:
    """Normalization should return `None` for `None` and blank textual values."""

    assert normalize_optional_string(None) is None
    assert normalize_optional_string("") is None
    assert normalize_optional_string("   ") is None
    assert normalize_optional_string("  value  ") == "value"


@pytest.mark.parametrize(
    ("token", "expected"),
    [("TrUe", True), ("  ON ", True), ("FALSE", False), ("nO", False)],
)
def test_parse_permissive_boolean_accepts_mixed_case_tokens(
    token: str, expected: bool
) -> None:
    """Permissive parsing should accept valid tokens case-insensitively."""

    assert parse_permissive_boolean(token) is expected


def test_parse_required_boolean_raises_for_invalid_token() -> None:
    """Strict boolean parsing should name the offending field."""

    with pytest.raises(ValueError, match="`sort_keys` must be a boolean value"):
        parse_required_boolean("maybe", "sort_keys")


@pytest.mark.parametrize(
    ("value", "expected"),
    [(3, 3), (-2, -2), ("+4", 4), (" -1 ", -1), (5.0, 5), ("x", None), (True, None), (2.5, None)],
)
def test_parse_integer_like_accepts_ints_and_integral_strings(
    value: object, expected: int | None
) -> None:
    """Integer parsing should accept failsafe strings but reject booleans and fractions."""

    assert parse_integer_like(value) == expected


def test_parse_key_list_splits_and_trims() -> None:
    """Key lists should accept comma-separated text or sequences and drop blanks."""

    assert parse_key_list(" name, AC ,,HP ") == ("name", "AC", "HP")
    assert parse_key_list(["name", " type "]) == ("name", "type")
    assert parse_key_list("  ") is None
    assert parse_key_list(None) is None
