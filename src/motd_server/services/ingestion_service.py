"""Ingestion service: one sweep over all configured providers."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from motd_server.exceptions import MotdError
from motd_server.protocols import CacheStore, TaggedProvider, UntaggedProvider

logger = logging.getLogger(__name__)


@dataclass
class IngestReport:
    """Counts for one ingestion sweep."""

    stored: int = 0
    failed: int = 0


class IngestionService:
    """Fetch fresh content from every provider into the cache.

    One sweep asks the tagged provider once per ``(tag, rating)`` pair and
    the untagged provider once. Every failure, whichever provider it comes
    from, is logged and the sweep moves on, so one provider outage never
    starves the others.
    """

    def __init__(
        self,
        cache: CacheStore,
        tagged_provider: TaggedProvider | None = None,
        untagged_provider: UntaggedProvider | None = None,
        tags: Mapping[str, str] | None = None,
    ) -> None:
        self._cache = cache
        self._tagged = tagged_provider
        self._untagged = untagged_provider
        self._tags = dict(tags or {})

    async def run_once(self) -> IngestReport:
        """Run one sweep.

        Returns:
            IngestReport with how many entries were stored and failed
        """
        report = IngestReport()

        if self._tagged is not None:
            for tag, rating in self._tags.items():
                try:
                    url = await self._tagged.get_random(tag, rating)
                    await self._cache.ingest(url)
                except MotdError as e:
                    logger.error("failed to cache content for tag %r (rating %r): %s", tag, rating, e)
                    report.failed += 1
                else:
                    report.stored += 1

        if self._untagged is not None:
            try:
                source = await self._untagged.get_random()
                await self._cache.ingest(source.url, source.caption)
            except MotdError as e:
                logger.error("failed to cache untagged content: %s", e)
                report.failed += 1
            else:
                report.stored += 1

        logger.debug("ingestion sweep done: %d stored, %d failed", report.stored, report.failed)
        return report
