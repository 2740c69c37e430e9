"""HTTP transport for the GitHub API.

Retries, rate-limit backoff and pagination are out of scope: each call makes
exactly one request bounded by the client timeout.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from zspell_index.errors import ResponseFormatError, TransportError

if TYPE_CHECKING:
    from zspell_index.config import FetcherSettings

log = structlog.get_logger()

GITHUB_ACCEPT = "application/vnd.github+json"


def build_headers(
    settings: FetcherSettings, environ: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Default request headers, including the bearer token when one is set."""
    env = os.environ if environ is None else environ
    headers = {"Accept": GITHUB_ACCEPT, "User-Agent": settings.user_agent}
    token = env.get(settings.token_env_var)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    else:
        log.warning(
            "api_token_missing",
            env_var=settings.token_env_var,
            hint="requests are unauthenticated and may be rate limited",
        )
    return headers


def build_http_client(
    settings: FetcherSettings, environ: Mapping[str, str] | None = None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=build_headers(settings, environ),
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
    )


class Fetcher:
    """Fetches JSON documents, mapping failures onto the error taxonomy."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> bytes:
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

        if response.status_code != 200:
            raise TransportError(f"GET {url} returned HTTP {response.status_code}")
        log.debug("fetch_complete", url=url, bytes=len(response.content))
        return response.content

    async def fetch_json(self, url: str) -> Any:
        body = await self.fetch(url)
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ResponseFormatError(f"response from {url} is not valid JSON: {exc}") from exc
