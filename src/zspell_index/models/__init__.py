from __future__ import annotations

from zspell_index.models.build import BuildResult, FailedLanguage, SkippedLanguage
from zspell_index.models.index import (
    INDEX_VERSION,
    DictionaryFormat,
    Downloadable,
    HunspellFormat,
    Index,
    IndexEntry,
    WordlistFormat,
)
from zspell_index.models.listing import DirListing, FileListing, Listing

__all__ = [
    # index
    "INDEX_VERSION",
    "Index",
    "IndexEntry",
    "DictionaryFormat",
    "HunspellFormat",
    "WordlistFormat",
    "Downloadable",
    # listing
    "Listing",
    "DirListing",
    "FileListing",
    # build
    "BuildResult",
    "SkippedLanguage",
    "FailedLanguage",
]
