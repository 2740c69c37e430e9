"""Remote directory listing and revision pinning."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from zspell_index.errors import ResponseFormatError
from zspell_index.models.listing import TREE_ADAPTER

if TYPE_CHECKING:
    from zspell_index.config import SourceConfig
    from zspell_index.fetcher import Fetcher
    from zspell_index.models.listing import Listing

log = structlog.get_logger()


class DirectoryLister:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list_directory(self, url: str) -> list[Listing]:
        """Return the entries of one remote directory in API order.

        Raises ``TransportError`` or ``ResponseFormatError``.
        """
        payload = await self._fetcher.fetch_json(url)
        if not isinstance(payload, list):
            raise ResponseFormatError(f"expected a directory listing from {url}")
        try:
            return TREE_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            raise ResponseFormatError(
                f"malformed directory listing from {url}: {exc.error_count()} error(s)"
            ) from exc

    async def latest_revision(self, source: SourceConfig) -> str:
        """Commit sha to pin the crawl to.

        A configured ``source.revision`` is returned without a request.
        """
        if source.revision:
            log.info("revision_pinned", revision=source.revision)
            return source.revision

        payload = await self._fetcher.fetch_json(source.commits_url())
        if not isinstance(payload, dict):
            raise ResponseFormatError("invalid response while requesting latest commit")
        sha = payload.get("sha")
        if not isinstance(sha, str) or not sha:
            raise ResponseFormatError("latest commit response is missing sha")

        log.info("revision_resolved", branch=source.branch, revision=sha)
        return sha
