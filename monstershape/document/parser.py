"""YAML document parsing with selectable grammar variants.

Responsibilities:
- Map grammar variant names onto PyYAML loader classes.
- Turn raw source text into a typed document tree.
- Report malformed syntax, unconvertible values, and disallowed constructs as `ParseError`.
"""

from __future__ import annotations

from enum import Enum
import io
import re

import yaml

from ..errors import EmptyInputError, ParseError
from .tree import ABSENT, MappingValue, Node, build_tree


_YAML_TAG = "tag:yaml.org,2002:"
_CORE_TAGS = frozenset(
    f"{_YAML_TAG}{name}" for name in ("null", "bool", "int", "float", "str", "seq", "map")
)
_JSON_IMPLICIT_RESOLVERS = (
    (f"{_YAML_TAG}null", re.compile(r"^(?:null|)$"), ["n", ""]),
    (f"{_YAML_TAG}bool", re.compile(r"^(?:true|false)$"), ["t", "f"]),
    (f"{_YAML_TAG}int", re.compile(r"^-?(?:0|[1-9][0-9]*)$"), list("-0123456789")),
    (
        f"{_YAML_TAG}float",
        re.compile(r"^-?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?(?:[eE][-+]?[0-9]+)?$"),
        list("-0123456789"),
    ),
)


class CoreSchemaLoader(yaml.SafeLoader):
    """Safe loader limited to null, bool, int, float, str, seq, and map."""

    yaml_constructors = {
        tag: constructor
        for tag, constructor in yaml.SafeLoader.yaml_constructors.items()
        if tag is None or tag in _CORE_TAGS
    }
    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag in _CORE_TAGS]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


class JsonSchemaLoader(yaml.SafeLoader):
    """Core loader that only resolves JSON-compatible plain scalars."""

    yaml_constructors = dict(CoreSchemaLoader.yaml_constructors)
    yaml_implicit_resolvers: dict[str, list[tuple[str, re.Pattern[str]]]] = {}


for _tag, _regexp, _first in _JSON_IMPLICIT_RESOLVERS:
    JsonSchemaLoader.add_implicit_resolver(_tag, _regexp, _first)


class GrammarVariant(str, Enum):
    """Named trust levels controlling which YAML constructs are accepted."""

    DEFAULT_SAFE = "default_safe"
    DEFAULT_FULL = "default_full"
    CORE = "core"
    JSON = "json"
    FAILSAFE = "failsafe"

    @property
    def loader(self) -> type:
        return _LOADERS[self]

    @property
    def requires_content(self) -> bool:
        """Whether empty input is an error rather than an empty document."""

        return self is GrammarVariant.JSON


_LOADERS: dict[GrammarVariant, type] = {
    GrammarVariant.DEFAULT_SAFE: yaml.SafeLoader,
    GrammarVariant.DEFAULT_FULL: yaml.FullLoader,
    GrammarVariant.CORE: CoreSchemaLoader,
    GrammarVariant.JSON: JsonSchemaLoader,
    GrammarVariant.FAILSAFE: yaml.BaseLoader,
}


def parse_grammar_variant(name: str) -> GrammarVariant:
    """Parse a grammar name such as `DEFAULT_SAFE_SCHEMA` or `core`.

    Raises:
        ValueError: If the name does not match a known variant.
    """

    token = name.strip().lower()
    if token.endswith("_schema"):
        token = token[: -len("_schema")]
    for variant in GrammarVariant:
        if variant.value == token:
            return variant
    supported = ", ".join(variant.value for variant in GrammarVariant)
    raise ValueError(f"Grammar `{name}` is not valid; supported: {supported}.")


def resolve_grammar(
    strict_grammar: bool, grammar_variant: GrammarVariant | str | None = None
) -> GrammarVariant:
    """Pick the grammar for a run; an explicit variant overrides `strict_grammar`."""

    if grammar_variant is not None:
        if isinstance(grammar_variant, GrammarVariant):
            return grammar_variant
        return parse_grammar_variant(grammar_variant)
    return GrammarVariant.DEFAULT_SAFE if strict_grammar else GrammarVariant.DEFAULT_FULL


class DocumentParser:
    """Parse one YAML source document into a typed tree."""

    def __init__(self, grammar: GrammarVariant, allow_empty: bool = True) -> None:
        """Initialize with a grammar variant and the empty-input policy."""

        self.grammar = grammar
        self.allow_empty = allow_empty

    def parse(self, text: str, source_name: str) -> Node:
        """Parse `text` and return its tree, or `ABSENT` for an empty document.

        Raises:
            EmptyInputError: Empty input under a grammar or policy that forbids it.
            ParseError: Malformed syntax, unconvertible values, recursive aliases,
                disallowed tags, or a non-mapping root.
        """

        if not text.strip():
            self._check_empty_allowed(source_name)
            return ABSENT

        stream = io.StringIO(text)
        stream.name = source_name
        # Constructors raise plain ValueError/TypeError for values that scan cleanly
        # but cannot be converted, such as `2020-13-45` or `!!int seven`.
        try:
            loaded = yaml.load(stream, Loader=self.grammar.loader)
            tree = build_tree(loaded)
        except (yaml.YAMLError, ValueError, TypeError) as exc:
            raise ParseError(
                source_name=source_name,
                grammar=self.grammar.value,
                detail=str(exc),
            ) from exc

        if not tree.present:
            self._check_empty_allowed(source_name)
            return ABSENT
        if not isinstance(tree, MappingValue):
            raise ParseError(
                source_name=source_name,
                grammar=self.grammar.value,
                detail=(
                    "document root must be a mapping describing one monster, "
                    f"got {type(loaded).__name__}"
                ),
            )
        return tree

    def _check_empty_allowed(self, source_name: str) -> None:
        """Raise when the active policy does not tolerate empty documents."""

        if self.grammar.requires_content or not self.allow_empty:
            raise EmptyInputError(source_name=source_name, grammar=self.grammar.value)


def parse(
    text: str,
    grammar: GrammarVariant = GrammarVariant.DEFAULT_SAFE,
    source_name: str = "<document>",
    allow_empty: bool = True,
) -> Node:
    """Parse source text with the given grammar variant."""

    return DocumentParser(grammar, allow_empty=allow_empty).parse(text, source_name)
