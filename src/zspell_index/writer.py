"""Index serialization to disk.

Both representations are rendered before anything touches the filesystem,
and each file is written to a temporary sibling and moved into place, so a
target is either fully replaced or left as it was.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from zspell_index.errors import IOWriteError, ResponseFormatError, SerializationError
from zspell_index.models.index import Index

if TYPE_CHECKING:
    from zspell_index.config import OutputSettings

log = structlog.get_logger()


@dataclass(frozen=True)
class OutputPaths:
    compact: Path
    pretty: Path


def _with_marker(name: str, marker: str) -> str:
    # "zspell-index.json" -> "zspell-index.incomplete.json"
    path = Path(name)
    return f"{path.stem}.{marker}{path.suffix}"


def output_paths(settings: OutputSettings, *, incomplete: bool) -> OutputPaths:
    """Target paths for this run; incomplete runs never reuse the canonical names."""
    directory = Path(settings.directory).expanduser()
    compact, pretty = settings.file_name, settings.pretty_file_name
    if incomplete:
        compact = _with_marker(compact, settings.incomplete_marker)
        pretty = _with_marker(pretty, settings.incomplete_marker)
    return OutputPaths(compact=directory / compact, pretty=directory / pretty)


def _atomic_write(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise IOWriteError(f"cannot write {path}: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise IOWriteError(f"cannot write {path}: {exc}") from exc


def write_index(index: Index, paths: OutputPaths) -> None:
    """Write the compact and pretty forms of ``index``.

    Raises ``SerializationError`` or ``IOWriteError``.
    """
    try:
        compact = index.to_json()
        pretty = index.to_json(pretty=True)
    except (ValueError, TypeError) as exc:
        raise SerializationError(f"cannot serialize index: {exc}") from exc

    log.info("writing_index", path=str(paths.compact))
    _atomic_write(paths.compact, compact)
    log.info("writing_index", path=str(paths.pretty), pretty=True)
    _atomic_write(paths.pretty, pretty)


def load_index(path: Path) -> Index:
    """Read an index written by ``write_index``.

    Raises ``ResponseFormatError`` for malformed content or a
    ``schema_version`` this package does not understand.
    """
    try:
        return Index.from_json(path.read_bytes())
    except ValidationError as exc:
        raise ResponseFormatError(f"{path} is not a valid index: {exc}") from exc
