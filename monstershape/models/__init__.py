"""Shared typed data models for monstershape.

This package contains the record dataclasses exchanged between the normalizer,
the serializer, and the build pipeline.
"""

from .datatypes import MonsterRecord, RecordEntry

__all__ = ["MonsterRecord", "RecordEntry"]
