"""Application wiring and lifecycle.

Initializes all layers from one Settings value:
1. CacheService (repository + download client)
2. Providers (Giphy when tags are configured, XKCD always)
3. IngestionService and the two periodic workers
4. ConnectionHandler and TCPServer

Shutdown order: signal the workers, wait for both to exit, close the
listener (which waits for in-flight connections), close HTTP clients.
"""

import asyncio
import logging

import httpx

from motd_server.config import Settings
from motd_server.exceptions import MotdError
from motd_server.handlers import ConnectionHandler
from motd_server.repositories import GiphyProvider, XkcdProvider
from motd_server.server import TCPServer
from motd_server.services import CacheService, IngestionService
from motd_server.workers import IngestionWorker, RetentionWorker

logger = logging.getLogger(__name__)


class MotdApplication:
    """The running motd-server: two workers and one listener over one cache."""

    def __init__(
        self,
        settings: Settings,
        cache: CacheService,
        ingestion: IngestionService,
        server: TCPServer,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._server = server
        self._client = client
        self._stop_event = asyncio.Event()
        self._workers = [
            IngestionWorker(ingestion, settings.download_interval, self._stop_event),
            RetentionWorker(cache, settings.cache_max_files, settings.cleanup_interval, self._stop_event),
        ]
        self._tasks: list[asyncio.Task] = []

    @classmethod
    def create(cls, settings: Settings) -> "MotdApplication":
        """Factory method building every component from settings.

        Raises:
            StorageError: If the cache directory cannot be created
            ConfigurationError: If Giphy tags are set but the key file is unusable
        """
        client = httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True)
        cache = CacheService.create(settings.cache_dir, client=client, timeout=settings.http_timeout)

        giphy = None
        if settings.giphy_tags:
            giphy = GiphyProvider.from_key_file(
                settings.giphy_api_key_file,
                max_file_size=settings.max_file_size,
                client=client,
            )
        else:
            logger.info("no giphy tags configured, giphy provider disabled")

        ingestion = IngestionService(
            cache=cache,
            tagged_provider=giphy,
            untagged_provider=XkcdProvider(client=client),
            tags=settings.giphy_tags,
        )
        server = TCPServer(settings.listen_host, settings.listen_port, ConnectionHandler(cache=cache))

        return cls(settings=settings, cache=cache, ingestion=ingestion, server=server, client=client)

    async def run(self) -> None:
        """Start the workers and serve until ``stop()`` is called.

        Raises:
            ListenerError: If the listener cannot bind; workers are stopped
                before the error propagates.
        """
        if self.stopping:
            return

        logger.info("starting motd-server")
        self._tasks = [asyncio.create_task(w.run(), name=f"motd-{w.name}") for w in self._workers]

        try:
            await self._server.start()
        except Exception:
            await self.stop()
            raise

        try:
            stats = await self._cache.get_stats()
        except MotdError as e:
            logger.warning("failed to read cache stats: %s", e)
        else:
            logger.info("cache holds %d entries (%d bytes)", stats["total_entries"], stats["total_bytes"])

        if self.stopping:
            # stop() ran while the listener was binding and could not close it
            await self._server.stop()
            await asyncio.gather(*self._tasks)
            return
        await self._server.serve_forever()

    async def stop(self) -> None:
        """Stop workers, then the listener, then close HTTP clients."""
        if self._stop_event.is_set():
            return
        logger.info("stopping motd-server")

        self._stop_event.set()
        if self._tasks:
            await asyncio.gather(*self._tasks)

        await self._server.stop()
        await self._cache.close()
        if self._client is not None:
            await self._client.aclose()

    @property
    def server(self) -> TCPServer:
        """Get the TCP server (for testing)."""
        return self._server

    @property
    def stopping(self) -> bool:
        """Whether shutdown has been requested."""
        return self._stop_event.is_set()
