from pathlib import Path

import pytest

from monstershape.io.storage import OutputStore, discover_sources, read_source


def test_output_store_writes_json_named_after_source(tmp_path: Path) -> None:
    store = OutputStore(tmp_path / "out")

    path = store.save_bytes(Path("monsters/goblin.yml"), b'{"name":"Goblin"}')

    assert path == tmp_path / "out" / "goblin.json"
    assert path.read_bytes() == b'{"name":"Goblin"}'
    assert store.exists(Path("other/goblin.yaml"))
    assert not store.exists(Path("orc.yml"))


def test_output_store_honors_custom_extension(tmp_path: Path) -> None:
    store = OutputStore(tmp_path, ".record")

    assert store.output_path(Path("lich.yaml")) == tmp_path / "lich.record"


def test_discover_sources_expands_directories_sorted(tmp_path: Path) -> None:
    nested = tmp_path / "monsters" / "undead"
    nested.mkdir(parents=True)
    (tmp_path / "monsters" / "orc.yml").write_text("name: Orc\n", encoding="utf-8")
    (tmp_path / "monsters" / "goblin.YAML").write_text("name: Goblin\n", encoding="utf-8")
    (tmp_path / "monsters" / "notes.txt").write_text("ignore me\n", encoding="utf-8")
    (nested / "lich.yaml").write_text("name: Lich\n", encoding="utf-8")
    explicit = tmp_path / "single.yml"
    explicit.write_text("name: Single\n", encoding="utf-8")

    sources = discover_sources([explicit, tmp_path / "monsters", explicit])

    assert [source.name for source in sources] == [
        "single.yml",
        "goblin.YAML",
        "orc.yml",
        "lich.yaml",
    ]


def test_discover_sources_rejects_missing_paths(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Input path not found"):
        discover_sources([tmp_path / "missing.yml"])


def test_read_source_returns_raw_bytes(tmp_path: Path) -> None:
    source = tmp_path / "bom.yml"
    source.write_bytes(b"\xef\xbb\xbfname: Goblin\n")

    assert read_source(source) == b"\xef\xbb\xbfname: Goblin\n"
