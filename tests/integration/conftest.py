"""Integration test fixtures.

Provides Settings pointed at a temporary output directory and a pinned
revision, plus an environment for running the CLI as a subprocess.
Payload factories come from tests/conftest.py (dir_item, file_item).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from zspell_index.config import Settings

if TYPE_CHECKING:
    from pathlib import Path

    from zspell_index.config import SourceConfig


@pytest.fixture()
def settings(tmp_path: Path, source: SourceConfig) -> Settings:
    return Settings(
        source=source.model_dump(),
        output={"directory": str(tmp_path / "out")},
        logging={"level": "DEBUG"},
    )


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if not k.startswith("ZSPELL_INDEX__")}
    env.pop("GITHUB_API_TOKEN", None)
    env["ZSPELL_INDEX__OUTPUT__DIRECTORY"] = str(tmp_path / "out")
    return env
