"""Index synchronization: crawl every language directory and assemble an index.

Failures are handled in three tiers:

* a language without a complete file set is skipped (``SkippedLanguage``),
  and the run stays complete;
* a recoverable error while resolving one language is logged and recorded in
  ``BuildResult.failures``, which marks the run incomplete;
* any error while pinning the revision or listing the top-level directory
  propagates to the caller and aborts the run.

Languages are resolved one at a time in listing order. Output order follows
the remote tree without a sort step, and the API is never hit concurrently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from zspell_index.errors import ZSpellIndexError
from zspell_index.models.build import BuildResult, FailedLanguage, SkippedLanguage
from zspell_index.models.index import Index, IndexEntry
from zspell_index.models.listing import DirListing
from zspell_index.resolver import resolve_language

if TYPE_CHECKING:
    from zspell_index.config import SourceConfig
    from zspell_index.lister import DirectoryLister

log = structlog.get_logger()


class IndexBuilder:
    def __init__(self, lister: DirectoryLister, source: SourceConfig) -> None:
        self._lister = lister
        self._source = source

    async def build(self) -> BuildResult:
        revision = await self._lister.latest_revision(self._source)
        top_level = await self._lister.list_directory(self._source.contents_url(revision))

        items: list[IndexEntry] = []
        skipped: list[SkippedLanguage] = []
        failures: list[FailedLanguage] = []

        for listing in top_level:
            if not isinstance(listing, DirListing):
                continue
            lang = listing.name
            log.info("locating_dictionary", lang=lang)

            try:
                children = await self._lister.list_directory(listing.url)
                outcome = resolve_language(lang, children, self._source)
            except ZSpellIndexError as exc:
                if not exc.recoverable:
                    raise
                log.error("dictionary_failed", lang=lang, code=exc.code, error=exc.message)
                failures.append(FailedLanguage(lang=lang, code=exc.code, message=exc.message))
                continue

            if isinstance(outcome, SkippedLanguage):
                skipped.append(outcome)
            else:
                items.append(outcome)

        result = BuildResult(
            index=Index(items=items),
            revision=revision,
            skipped=skipped,
            failures=failures,
        )
        log.info(
            "index_built",
            revision=revision,
            entries=len(items),
            skipped=len(skipped),
            failed=len(failures),
            incomplete=result.incomplete,
        )
        return result
