"""Unit tests for zspell_index.writer."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING

import pytest

from zspell_index.config import OutputSettings
from zspell_index.errors import IOWriteError, ResponseFormatError, SerializationError
from zspell_index.models import Downloadable, HunspellFormat, Index, IndexEntry
from zspell_index.writer import OutputPaths, load_index, output_paths, write_index

if TYPE_CHECKING:
    from pathlib import Path


def _index() -> Index:
    dl = Downloadable(urls=["https://raw.example.test/x"], hash="sha1:abc", size=3)
    entry = IndexEntry(
        lang="en",
        tags=["source-wooorm"],
        format=HunspellFormat(aff=dl, dic=dl),
        lic=dl,
    )
    return Index(items=[entry])


# ---------------------------------------------------------------------------
# output_paths
# ---------------------------------------------------------------------------


class TestOutputPaths:
    def test_complete_run_uses_canonical_names(self, tmp_path: Path) -> None:
        paths = output_paths(OutputSettings(directory=str(tmp_path)), incomplete=False)
        assert paths.compact == tmp_path / "zspell-index.json"
        assert paths.pretty == tmp_path / "zspell-index-pretty.json"

    def test_incomplete_run_marks_both_names(self, tmp_path: Path) -> None:
        paths = output_paths(OutputSettings(directory=str(tmp_path)), incomplete=True)
        assert paths.compact == tmp_path / "zspell-index.incomplete.json"
        assert paths.pretty == tmp_path / "zspell-index-pretty.incomplete.json"

    def test_custom_marker(self, tmp_path: Path) -> None:
        settings = OutputSettings(directory=str(tmp_path), incomplete_marker="partial")
        paths = output_paths(settings, incomplete=True)
        assert paths.compact.name == "zspell-index.partial.json"


# ---------------------------------------------------------------------------
# write_index / load_index
# ---------------------------------------------------------------------------


class TestWriteIndex:
    def test_writes_compact_and_pretty(self, tmp_path: Path) -> None:
        paths = output_paths(OutputSettings(directory=str(tmp_path)), incomplete=False)
        index = _index()
        write_index(index, paths)

        compact = paths.compact.read_text(encoding="utf-8")
        pretty = paths.pretty.read_text(encoding="utf-8")
        assert "\n" not in compact
        assert pretty.startswith("{\n  ")
        assert json.loads(compact) == json.loads(pretty)
        assert json.loads(compact)["items"][0]["fmt"] == "hunspell"

    def test_round_trip_through_disk(self, tmp_path: Path) -> None:
        paths = output_paths(OutputSettings(directory=str(tmp_path)), incomplete=False)
        index = _index()
        write_index(index, paths)
        assert load_index(paths.compact) == index
        assert load_index(paths.pretty) == index

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        out = tmp_path / "a" / "b"
        write_index(_index(), output_paths(OutputSettings(directory=str(out)), incomplete=False))
        assert (out / "zspell-index.json").exists()

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        paths = output_paths(OutputSettings(directory=str(tmp_path)), incomplete=False)
        paths.compact.write_text("old", encoding="utf-8")
        write_index(_index(), paths)
        assert paths.compact.read_text(encoding="utf-8") != "old"

    def test_no_temp_files_left_behind(self, tmp_path: Path) -> None:
        paths = output_paths(OutputSettings(directory=str(tmp_path)), incomplete=False)
        write_index(_index(), paths)
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "zspell-index-pretty.json",
            "zspell-index.json",
        ]

    def test_serialization_failure_writes_nothing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def failing_to_json(self, *, pretty: bool = False) -> str:
            raise ValueError("boom")

        monkeypatch.setattr(Index, "to_json", failing_to_json)
        paths = output_paths(OutputSettings(directory=str(tmp_path)), incomplete=False)
        with pytest.raises(SerializationError):
            write_index(_index(), paths)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "getuid") and os.getuid() == 0),
        reason="Permission checks don't apply on Windows or when running as root.",
    )
    def test_unwriteable_directory_raises(self, tmp_path: Path) -> None:
        readonly = tmp_path / "readonly"
        readonly.mkdir()
        readonly.chmod(0o555)
        try:
            paths = output_paths(OutputSettings(directory=str(readonly)), incomplete=False)
            with pytest.raises(IOWriteError):
                write_index(_index(), paths)
        finally:
            readonly.chmod(0o755)

    def test_failed_pretty_write_keeps_existing_pretty_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        paths = OutputPaths(compact=tmp_path / "c.json", pretty=tmp_path / "p.json")
        paths.pretty.write_text("previous", encoding="utf-8")
        real_replace = os.replace

        def failing_replace(src, dst):
            if str(dst).endswith("p.json"):
                raise OSError("disk full")
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", failing_replace)
        with pytest.raises(IOWriteError):
            write_index(_index(), paths)

        assert paths.compact.exists()
        assert paths.pretty.read_text(encoding="utf-8") == "previous"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["c.json", "p.json"]


class TestLoadIndex:
    def test_rejects_unknown_schema_version(self, tmp_path: Path) -> None:
        path = tmp_path / "index.json"
        data = json.loads(_index().to_json())
        data["schema_version"] = 99
        path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(ResponseFormatError):
            load_index(path)

    def test_rejects_garbage(self, tmp_path: Path) -> None:
        path = tmp_path / "index.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(ResponseFormatError):
            load_index(path)
