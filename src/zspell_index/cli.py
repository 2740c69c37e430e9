"""Entry point: ``zspell-index`` or ``python -m zspell_index.cli``.

Exit codes: 0 for a complete index, 2 when the index was written under the
incomplete names, 1 when the run aborted without output.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import structlog

from zspell_index.builder import IndexBuilder
from zspell_index.config import LoggingSettings, Settings
from zspell_index.errors import ZSpellIndexError
from zspell_index.fetcher import Fetcher, build_http_client
from zspell_index.lister import DirectoryLister
from zspell_index.writer import output_paths, write_index

log = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INCOMPLETE = 2


def configure_logging(settings: LoggingSettings) -> None:
    """Route structlog output to stderr; stdout stays free for callers."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.level]
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


async def run(settings: Settings) -> int:
    source = settings.source_config()
    async with build_http_client(settings.fetcher) as client:
        builder = IndexBuilder(DirectoryLister(Fetcher(client)), source)
        result = await builder.build()

    paths = output_paths(settings.output, incomplete=result.incomplete)
    if result.incomplete:
        log.warning("writing_incomplete_index", failed=[f.lang for f in result.failures])
    write_index(result.index, paths)
    return EXIT_INCOMPLETE if result.incomplete else EXIT_OK


def main() -> int:
    settings = Settings()
    configure_logging(settings.logging)
    try:
        return asyncio.run(run(settings))
    except ZSpellIndexError as exc:
        log.error("sync_failed", code=exc.code, error=exc.message)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
