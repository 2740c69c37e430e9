from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from zspell_index.errors import ErrorCode
from zspell_index.models.index import Index

MissingFile = Literal["affix", "dictionary", "license"]


class SkippedLanguage(BaseModel):
    """A language directory without a complete file set. Not an error."""

    model_config = ConfigDict(frozen=True)

    lang: str
    missing: MissingFile


class FailedLanguage(BaseModel):
    """A language that hit a hard error during resolution."""

    model_config = ConfigDict(frozen=True)

    lang: str
    code: ErrorCode
    message: str


class BuildResult(BaseModel):
    """Outcome of one synchronization run."""

    model_config = ConfigDict(frozen=True)

    index: Index
    revision: str  # Commit the crawl was pinned to
    skipped: list[SkippedLanguage] = []
    failures: list[FailedLanguage] = []

    @property
    def incomplete(self) -> bool:
        return bool(self.failures)
