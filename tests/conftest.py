"""Shared fixtures: GitHub contents API payloads and a pinned source."""

from __future__ import annotations

from typing import Any

import pytest

from zspell_index.config import SourceConfig

API = "https://api.example.test/repos/wooorm/dictionaries"
REVISION = "0123abcd"


def _dir_item(name: str, parent: str = "dictionaries") -> dict[str, Any]:
    path = f"{parent}/{name}"
    return {
        "name": name,
        "path": path,
        "size": 0,
        "sha": f"tree-{name}",
        "url": f"{API}/contents/{path}?ref={REVISION}",
        "html_url": f"https://github.example.test/tree/{path}",
        "git_url": f"{API}/git/trees/tree-{name}",
        "type": "dir",
        "download_url": None,
    }


def _file_item(
    name: str, sha: str, size: int = 10, parent: str = "dictionaries/en"
) -> dict[str, Any]:
    path = f"{parent}/{name}"
    return {
        "name": name,
        "path": path,
        "size": size,
        "sha": sha,
        "url": f"{API}/contents/{path}?ref={REVISION}",
        "html_url": f"https://github.example.test/blob/{path}",
        "git_url": f"{API}/git/blobs/{sha}",
        "type": "file",
        "download_url": f"https://raw.example.test/{path}",
    }


@pytest.fixture()
def source() -> SourceConfig:
    return SourceConfig(
        api_url=API,
        branch="main",
        dictionaries_path="dictionaries",
        source_tag="source-wooorm",
        revision=REVISION,
    )


@pytest.fixture()
def en_listing() -> list[dict[str, Any]]:
    return [
        _file_item("index.aff", "aaa", size=100),
        _file_item("index.dic", "bbb", size=2000),
        _file_item("license", "ccc", size=30),
        _file_item("package.json", "ddd"),
    ]


@pytest.fixture()
def dir_item():
    """Factory for a ``type: dir`` contents API entry."""
    return _dir_item


@pytest.fixture()
def file_item():
    """Factory for a ``type: file`` contents API entry."""
    return _file_item
