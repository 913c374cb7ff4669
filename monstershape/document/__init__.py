"""Source document parsing components.

This package turns raw YAML text into a typed document tree that the record
normalizer can query without ad hoc existence checks.
"""

from .parser import (
    DocumentParser,
    GrammarVariant,
    parse,
    parse_grammar_variant,
    resolve_grammar,
)
from .tree import ABSENT, Absent, MappingValue, Node, ScalarValue, SequenceValue, build_tree, lookup

__all__ = [
    "ABSENT",
    "Absent",
    "DocumentParser",
    "GrammarVariant",
    "MappingValue",
    "Node",
    "ScalarValue",
    "SequenceValue",
    "build_tree",
    "lookup",
    "parse",
    "parse_grammar_variant",
    "resolve_grammar",
]
