"""JSON serialization of normalized records.

Responsibilities:
- Encode record payloads as UTF-8 JSON bytes.
- Apply an optional key whitelist/order at every mapping level.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
import json

from .models.datatypes import MonsterRecord


def filter_keys(value: object, keys: Sequence[str]) -> object:
    """Keep only `keys` (in that order) in every mapping nested inside `value`."""

    if isinstance(value, dict):
        return {key: filter_keys(value[key], keys) for key in keys if key in value}
    if isinstance(value, list):
        return [filter_keys(item, keys) for item in value]
    return value


def _json_default(value: object) -> object:
    """Encode loader values JSON has no native type for."""

    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_record(
    record: MonsterRecord,
    *,
    key_filter: Sequence[str] | None = None,
    sort_keys: bool = False,
    indent: int | None = None,
) -> bytes:
    """Encode `record` as JSON bytes.

    Without `indent` the output is compact, with no whitespace after separators.

    Raises:
        TypeError: The record holds a value JSON cannot encode.
        ValueError: The record holds a circular reference or a non-finite float.
    """

    payload: object = record.as_payload()
    if key_filter:
        payload = filter_keys(payload, key_filter)
    separators = (",", ":") if indent is None else (",", ": ")
    text = json.dumps(
        payload,
        ensure_ascii=False,
        allow_nan=False,
        indent=indent,
        separators=separators,
        sort_keys=sort_keys,
        default=_json_default,
    )
    return text.encode("utf-8")
