"""Turn one language directory listing into an index entry."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import structlog

from zspell_index.errors import StructuralError
from zspell_index.models.build import MissingFile, SkippedLanguage
from zspell_index.models.index import Downloadable, HunspellFormat, IndexEntry
from zspell_index.models.listing import DirListing, FileListing

if TYPE_CHECKING:
    from zspell_index.config import SourceConfig
    from zspell_index.models.listing import Listing

log = structlog.get_logger()

AFFIX_SUFFIX = ".aff"
DICTIONARY_SUFFIX = ".dic"
LICENSE_NAME = "license"

# The contents API only exposes git blob shas
HASH_ALGORITHM = "sha1"


def _find(listing: Sequence[Listing], matches: Callable[[str], bool]) -> Listing | None:
    return next((item for item in listing if matches(item.name)), None)


def _skip(lang: str, missing: MissingFile) -> SkippedLanguage:
    log.warning("dictionary_skipped", lang=lang, missing=missing)
    return SkippedLanguage(lang=lang, missing=missing)


def make_downloadable(item: Listing) -> Downloadable:
    match item:
        case FileListing():
            return Downloadable(
                urls=[item.download_url],
                hash=f"{HASH_ALGORITHM}:{item.sha}",
                size=item.size,
            )
        case DirListing():
            raise StructuralError(f"expected a file but {item.path!r} is a directory")


def resolve_language(
    lang: str, listing: Sequence[Listing], source: SourceConfig
) -> IndexEntry | SkippedLanguage:
    """Build the Hunspell entry for ``lang``.

    Returns ``SkippedLanguage`` when the affix, dictionary or license file is
    absent. Raises ``StructuralError`` when a matched name is a directory.
    """
    aff = _find(listing, lambda name: name.endswith(AFFIX_SUFFIX))
    dic = _find(listing, lambda name: name.endswith(DICTIONARY_SUFFIX))
    lic = _find(listing, lambda name: name.lower().endswith(LICENSE_NAME))

    if aff is None:
        return _skip(lang, "affix")
    if dic is None:
        return _skip(lang, "dictionary")
    if lic is None:
        return _skip(lang, "license")

    return IndexEntry(
        lang=lang,
        tags=[source.source_tag],
        is_ext=False,
        format=HunspellFormat(aff=make_downloadable(aff), dic=make_downloadable(dic)),
        lic=make_downloadable(lic),
    )
