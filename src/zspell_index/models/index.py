"""Index manifest models.

The serialized shape is consumed by clients outside this repository, so field
names are part of the wire format. ``IndexEntry.format`` is flattened into the
entry object and discriminated by its ``fmt`` key.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)
from uuid6 import uuid7

INDEX_VERSION = 1
"""Version of the index serialization format."""

SOURCE_TAG_PREFIX = "source-"
SIZE_TAGS = frozenset({"size-compact", "size-medium", "size-large"})

_HASH_RE = re.compile(r"^[a-z0-9]+:[0-9a-f]+$")


class Downloadable(BaseModel):
    """A file that can be downloaded."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    urls: list[str] = Field(min_length=1)  # In order of precedence
    hash: str  # "<algorithm>:<hex-digest>", e.g. "sha1:3f78..."
    size: int = Field(ge=0)  # Bytes

    @field_validator("hash")
    @classmethod
    def validate_hash(cls, v: str) -> str:
        if not _HASH_RE.match(v):
            raise ValueError(f"hash must look like '<algorithm>:<hex-digest>', got {v!r}")
        return v


class HunspellFormat(BaseModel):
    """Affix rules plus a word list."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    fmt: Literal["hunspell"] = "hunspell"
    aff: Downloadable
    dic: Downloadable


class WordlistFormat(BaseModel):
    """One word per line, no affix rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    fmt: Literal["wordlist"] = "wordlist"
    file: Downloadable


DictionaryFormat = Annotated[HunspellFormat | WordlistFormat, Field(discriminator="fmt")]

_HUNSPELL_KEYS = ("aff", "dic")
# A wordlist entry carries its Downloadable fields inline, next to "fmt"
_WORDLIST_KEYS = ("urls", "hash", "size")


class IndexEntry(BaseModel):
    """A single dictionary within an index.

    ``tags`` must contain exactly one ``source-*`` tag identifying where the
    dictionary came from, and may carry one ``size-*`` tag. Merge logic uses
    them to decide when one entry supersedes another for the same language.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    lang: str
    tags: list[str]
    is_ext: bool = False  # Extends a base dictionary (e.g. jargon)
    id: UUID = Field(default_factory=lambda: UUID(int=uuid7().int))
    format: DictionaryFormat
    lic: Downloadable

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        sources = [t for t in v if t.startswith(SOURCE_TAG_PREFIX)]
        if len(sources) != 1:
            raise ValueError(f"exactly one '{SOURCE_TAG_PREFIX}*' tag is required, got {sources}")
        sizes = [t for t in v if t.startswith("size-")]
        if len(sizes) > 1 or any(t not in SIZE_TAGS for t in sizes):
            raise ValueError(f"at most one size tag from {sorted(SIZE_TAGS)} is allowed")
        return v

    @model_validator(mode="before")
    @classmethod
    def nest_format(cls, data: object) -> object:
        """Lift flattened ``fmt`` fields into ``format`` when parsing JSON."""
        if not isinstance(data, dict) or "format" in data or "fmt" not in data:
            return data
        data = dict(data)
        fmt = data.pop("fmt")
        if fmt == "hunspell":
            data["format"] = {"fmt": fmt, **{k: data.pop(k) for k in _HUNSPELL_KEYS if k in data}}
        elif fmt == "wordlist":
            file = {k: data.pop(k) for k in _WORDLIST_KEYS if k in data}
            data["format"] = {"fmt": fmt, "file": file}
        else:
            data["format"] = {"fmt": fmt}
        return data

    @model_serializer(mode="wrap")
    def flatten_format(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        fmt = data.pop("format")
        if fmt["fmt"] == "wordlist":
            fmt.update(fmt.pop("file"))
        data.update(fmt)
        return data

    @property
    def source_tag(self) -> str:
        return next(t for t in self.tags if t.startswith(SOURCE_TAG_PREFIX))

    def downloadables(self) -> list[Downloadable]:
        """All files a consumer must fetch for this entry, license last."""
        match self.format:
            case HunspellFormat(aff=aff, dic=dic):
                files = [aff, dic]
            case WordlistFormat(file=file):
                files = [file]
        return [*files, self.lic]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Index(BaseModel):
    """The main index entrypoint."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: int = INDEX_VERSION
    updated: datetime = Field(default_factory=_utcnow)
    # Only set by caching consumers to decide when to refresh their copy
    retrieved: datetime | None = None
    items: list[IndexEntry] = []

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: int) -> int:
        if v != INDEX_VERSION:
            raise ValueError(f"unsupported schema_version {v} (expected {INDEX_VERSION})")
        return v

    def mark_retrieved(self, at: datetime | None = None) -> Index:
        return self.model_copy(update={"retrieved": at or _utcnow()})

    def to_json(self, *, pretty: bool = False) -> str:
        return self.model_dump_json(indent=2 if pretty else None)

    @classmethod
    def from_json(cls, data: str | bytes) -> Index:
        return cls.model_validate_json(data)
