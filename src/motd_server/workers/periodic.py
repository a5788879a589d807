"""Timer-driven background workers.

Each worker waits on the shared stop event with the tick interval as the
timeout, so shutdown is noticed within one interval even while the timer
is pending. A tick already in flight is allowed to finish.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from motd_server.exceptions import MotdError
from motd_server.protocols import CacheStore
from motd_server.services import IngestionService

logger = logging.getLogger(__name__)


class PeriodicWorker(ABC):
    """Run ``tick()`` every ``interval`` seconds until the stop event is set.

    Errors raised by a tick are logged and never stop the worker.
    """

    name = "worker"

    def __init__(self, interval: float, stop_event: asyncio.Event) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._stop_event = stop_event
        self._ticks = 0

    @abstractmethod
    async def tick(self) -> None:
        """Do one unit of periodic work."""

    async def run(self) -> None:
        """Tick until the stop event is set."""
        logger.info("starting %s worker (interval=%ss)", self.name, self._interval)

        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                await self._run_tick()

        logger.info("%s worker stopped after %d tick(s)", self.name, self._ticks)

    async def _run_tick(self) -> None:
        self._ticks += 1
        try:
            await self.tick()
        except MotdError as e:
            logger.error("%s tick failed: %s", self.name, e)
        except Exception:  # noqa: BLE001
            logger.exception("%s tick raised unexpectedly", self.name)

    @property
    def ticks(self) -> int:
        """Number of ticks started so far."""
        return self._ticks


class IngestionWorker(PeriodicWorker):
    """Refresh the cache from all providers on every tick."""

    name = "ingestion"

    def __init__(self, ingestion: IngestionService, interval: float, stop_event: asyncio.Event) -> None:
        super().__init__(interval, stop_event)
        self._ingestion = ingestion

    async def tick(self) -> None:
        await self._ingestion.run_once()


class RetentionWorker(PeriodicWorker):
    """Trim the cache to ``max_files`` entries on every tick."""

    name = "retention"

    def __init__(self, cache: CacheStore, max_files: int, interval: float, stop_event: asyncio.Event) -> None:
        super().__init__(interval, stop_event)
        if max_files <= 0:
            raise ValueError("max_files must be positive")
        self._cache = cache
        self._max_files = max_files

    async def tick(self) -> None:
        result = await self._cache.trim(self._max_files)
        if result.failed:
            logger.warning("%d cache file(s) could not be removed", len(result.failed))
        logger.debug("retention pass: %d of %d entries kept", result.remaining, result.total)
