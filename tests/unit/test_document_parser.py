"""Unit tests for grammar-variant YAML parsing."""

from __future__ import annotations

import datetime

import pytest

from monstershape.document.parser import (
    DocumentParser,
    GrammarVariant,
    parse,
    parse_grammar_variant,
    resolve_grammar,
)
from monstershape.document.tree import ABSENT, MappingValue
from monstershape.errors import EmptyInputError, ParseError


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("DEFAULT_SAFE_SCHEMA", GrammarVariant.DEFAULT_SAFE),
        ("default_full_schema", GrammarVariant.DEFAULT_FULL),
        ("CORE_SCHEMA", GrammarVariant.CORE),
        ("json", GrammarVariant.JSON),
        (" failsafe ", GrammarVariant.FAILSAFE),
    ],
)
def test_parse_grammar_variant_accepts_schema_style_names(
    name: str, expected: GrammarVariant
) -> None:
    """Grammar names should parse case-insensitively with or without `_schema`."""

    assert parse_grammar_variant(name) is expected


def test_parse_grammar_variant_rejects_unknown_names() -> None:
    """Unknown grammar names should list the supported variants."""

    with pytest.raises(ValueError, match="Grammar `yolo` is not valid; supported: default_safe"):
        parse_grammar_variant("yolo")


def test_resolve_grammar_prefers_explicit_variant() -> None:
    """An explicit variant should override the strict/full switch."""

    assert resolve_grammar(True) is GrammarVariant.DEFAULT_SAFE
    assert resolve_grammar(False) is GrammarVariant.DEFAULT_FULL
    assert resolve_grammar(True, "core") is GrammarVariant.CORE
    assert resolve_grammar(False, GrammarVariant.JSON) is GrammarVariant.JSON


def test_parse_returns_mapping_tree_for_monster_document() -> None:
    """A monster document should parse into a mapping tree."""

    tree = parse("name: Goblin\nac: 15\n", GrammarVariant.DEFAULT_SAFE, "goblin.yml")

    assert isinstance(tree, MappingValue)
    assert tree.field("name").to_python() == "Goblin"
    assert tree.field("ac").to_python() == 15


@pytest.mark.parametrize("text", ["", "   \n\t", "# only a comment\n"])
def test_empty_input_is_absent_for_tolerant_grammars(text: str) -> None:
    """Empty documents should parse to `ABSENT` rather than fail."""

    assert parse(text, GrammarVariant.DEFAULT_SAFE, "empty.yml") is ABSENT
    assert parse(text, GrammarVariant.FAILSAFE, "empty.yml") is ABSENT


def test_empty_input_is_rejected_by_json_grammar_and_strict_policy() -> None:
    """The JSON grammar and `allow_empty=False` should report empty input."""

    with pytest.raises(EmptyInputError, match="empty.yml is empty"):
        parse("", GrammarVariant.JSON, "empty.yml")

    with pytest.raises(EmptyInputError):
        DocumentParser(GrammarVariant.DEFAULT_SAFE, allow_empty=False).parse(" ", "empty.yml")


def test_malformed_yaml_raises_parse_error_with_source_name() -> None:
    """Syntax errors should carry the source name and grammar diagnostic."""

    with pytest.raises(ParseError) as exc_info:
        parse("name: [unclosed\n", GrammarVariant.DEFAULT_SAFE, "broken.yml")

    assert exc_info.value.source_name == "broken.yml"
    assert exc_info.value.grammar == "default_safe"
    assert "broken.yml" in exc_info.value.detail


def test_non_mapping_root_is_rejected() -> None:
    """A document describing a list instead of one monster should fail to parse."""

    with pytest.raises(ParseError, match="document root must be a mapping"):
        parse("- goblin\n- orc\n", GrammarVariant.DEFAULT_SAFE, "list.yml")


def test_safe_grammar_rejects_python_tags() -> None:
    """Language-specific tags should be disallowed by the safe grammar."""

    with pytest.raises(ParseError):
        parse("name: !!python/tuple [a, b]\n", GrammarVariant.DEFAULT_SAFE, "tags.yml")


def test_full_grammar_accepts_python_tuple_tag() -> None:
    """The full grammar should accept the limited python tags it allows."""

    tree = parse("name: !!python/tuple [a, b]\n", GrammarVariant.DEFAULT_FULL, "tags.yml")

    assert tree.field("name").to_python() == ["a", "b"]


def test_core_grammar_keeps_timestamps_as_strings() -> None:
    """The core grammar should not resolve timestamps."""

    safe_tree = parse("seen: 2001-12-14\n", GrammarVariant.DEFAULT_SAFE, "date.yml")
    core_tree = parse("seen: 2001-12-14\n", GrammarVariant.CORE, "date.yml")

    assert safe_tree.field("seen").to_python() == datetime.date(2001, 12, 14)
    assert core_tree.field("seen").to_python() == "2001-12-14"


def test_core_grammar_rejects_explicit_set_tag() -> None:
    """Explicit tags outside the core schema should be rejected."""

    with pytest.raises(ParseError):
        parse("tags: !!set {a, b}\n", GrammarVariant.CORE, "set.yml")


def test_json_grammar_only_resolves_json_scalars() -> None:
    """The JSON grammar should leave YAML-only booleans as strings."""

    tree = parse("ac: 15\ncr: 0.5\nflying: yes\nswims: true\n", GrammarVariant.JSON, "j.yml")

    assert tree.field("ac").to_python() == 15
    assert tree.field("cr").to_python() == 0.5
    assert tree.field("flying").to_python() == "yes"
    assert tree.field("swims").to_python() is True


def test_failsafe_grammar_keeps_every_scalar_as_string() -> None:
    """The failsafe grammar should deliver numbers as strings."""

    tree = parse("ac: 15\ncr: 1/2\n", GrammarVariant.FAILSAFE, "f.yml")

    assert tree.field("ac").to_python() == "15"
    assert tree.field("cr").to_python() == "1/2"


@pytest.mark.parametrize(
    "text",
    [
        "name: Goblin\nsenses: 2020-13-45\n",
        "name: Goblin\nhp: !!int seven\n",
    ],
)
def test_unconvertible_scalar_values_raise_parse_error(text: str) -> None:
    """Values that scan cleanly but fail conversion should be parse errors."""

    with pytest.raises(ParseError) as exc_info:
        parse(text, GrammarVariant.DEFAULT_SAFE, "goblin.yml")

    assert exc_info.value.source_name == "goblin.yml"
    assert exc_info.value.grammar == "default_safe"


def test_recursive_alias_raises_parse_error() -> None:
    """A node that contains itself through an alias should be rejected."""

    with pytest.raises(ParseError, match="recursive alias"):
        parse("name: Goblin\nspeed: &s [*s]\n", GrammarVariant.DEFAULT_SAFE, "loop.yml")


def test_repeated_non_recursive_alias_is_accepted() -> None:
    """Reusing an anchor in sibling positions is not a cycle."""

    tree = parse(
        "base: &b {walk: 30 ft.}\nspeed: *b\n", GrammarVariant.DEFAULT_SAFE, "alias.yml"
    )

    assert tree.field("speed").to_python() == {"walk": "30 ft."}
