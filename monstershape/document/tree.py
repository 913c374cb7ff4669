"""Typed document tree produced by the parser.

Responsibilities:
- Represent loader output as a closed set of node variants.
- Provide safe field and dotted-path lookup that never raises for missing keys.

Key types:
- `ScalarValue`, `SequenceValue`, `MappingValue`: present nodes.
- `Absent` / `ABSENT`: the single "no value" node.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from typing import Union


class Absent:
    """Node standing in for a missing key or an explicit `null` value."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    present = False

    def field(self, name: str) -> Node:
        """Absent nodes have no fields."""

        return self

    def to_python(self) -> None:
        return None

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()


@dataclass(frozen=True, slots=True)
class ScalarValue:
    """A leaf value such as a string, number, boolean, or date."""

    value: str | int | float | bool | date | object

    present = True

    def field(self, name: str) -> Node:
        """Scalars have no fields."""

        return ABSENT

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True, slots=True)
class SequenceValue:
    """An ordered list of nodes."""

    items: tuple[Node, ...]

    present = True

    def field(self, name: str) -> Node:
        """Sequences have no named fields."""

        return ABSENT

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> list[object]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class MappingValue:
    """An ordered mapping of string keys to nodes."""

    entries: tuple[tuple[str, Node], ...]

    present = True

    def field(self, name: str) -> Node:
        """Return the node stored under `name`, or `ABSENT`."""

        for key, node in self.entries:
            if key == name:
                return node
        return ABSENT

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def __iter__(self) -> Iterator[tuple[str, Node]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_python(self) -> dict[str, object]:
        return {key: node.to_python() for key, node in self.entries}


Node = Union[Absent, ScalarValue, SequenceValue, MappingValue]


def build_tree(value: object) -> Node:
    """Convert plain loader output into a document tree.

    Mapping keys are coerced to `str`; `None` becomes `ABSENT` at every level.

    Raises:
        ValueError: A container holds itself through a recursive alias.
    """

    return _build_node(value, frozenset())


def _build_node(value: object, ancestors: frozenset[int]) -> Node:
    if value is None:
        return ABSENT
    if isinstance(value, (dict, list, tuple)):
        if id(value) in ancestors:
            raise ValueError("recursive alias: a node contains itself")
        ancestors = ancestors | {id(value)}
    if isinstance(value, dict):
        return MappingValue(
            entries=tuple(
                (str(key), _build_node(item, ancestors)) for key, item in value.items()
            )
        )
    if isinstance(value, (list, tuple)):
        return SequenceValue(items=tuple(_build_node(item, ancestors) for item in value))
    return ScalarValue(value=value)


def lookup(node: Node, path: str) -> Node:
    """Resolve a dotted field path such as ``damage.resistances``.

    Any missing key or non-mapping intermediate yields `ABSENT`.
    """

    current = node
    for part in path.split("."):
        current = current.field(part)
        if not current.present:
            return ABSENT
    return current
