"""Build the zspell dictionary index from a remote file tree."""

from __future__ import annotations

__version__ = "0.1.0"
