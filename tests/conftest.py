"""Shared pytest fixtures for the full monstershape test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixture_paths import (
    lich_fixture_path as resolve_lich_fixture_path,
    young_green_dragon_fixture_path as resolve_young_green_dragon_fixture_path,
)


@pytest.fixture
def dragon_fixture_path() -> Path:
    """Provide the fully populated dragon source document."""

    return resolve_young_green_dragon_fixture_path()


@pytest.fixture
def lich_fixture_path() -> Path:
    """Provide the legendary-action source document."""

    return resolve_lich_fixture_path()


@pytest.fixture
def monster_sources(tmp_path: Path) -> Path:
    """Copy the dragon and lich fixtures into a scratch source directory."""

    source_dir = tmp_path / "monsters"
    source_dir.mkdir()
    for fixture in (resolve_young_green_dragon_fixture_path(), resolve_lich_fixture_path()):
        (source_dir / fixture.name).write_bytes(fixture.read_bytes())
    return source_dir
