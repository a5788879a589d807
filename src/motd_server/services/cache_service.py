"""Cache service for core business logic.

This service implements the three cache operations on top of the file
repository: ingest (download + store), get_random and trim. Blocking
filesystem calls are moved off the event loop with asyncio.to_thread.
"""

import asyncio
import logging
from pathlib import Path

import httpx

from motd_server.entities import CacheEntryEntity, TrimResult
from motd_server.exceptions import DownloadError
from motd_server.repositories import FileCacheRepository

logger = logging.getLogger(__name__)


class CacheService:
    """Core cache orchestration service.

    Satisfies the CacheStore protocol. It is the single shared resource of
    the server: the ingestion and retention workers and every connection
    handler call into the same instance concurrently. No lock is needed
    since each entry is an independent file and create/rename/unlink are
    atomic.

    Example:
        ```python
        from motd_server.services import CacheService

        cache = CacheService.create(cache_dir="~/.motd")
        await cache.ingest("https://imgs.xkcd.com/comics/python.png", "import antigravity")
        data = await cache.get_random()
        await cache.trim(50)
        ```
    """

    def __init__(
        self,
        repository: FileCacheRepository,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the cache service.

        Args:
            repository: File storage backend (required).
            client: HTTP client used for downloads. If None, created lazily.
            timeout: Download timeout in seconds for a lazily created client.
        """
        self._repository = repository
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    @classmethod
    def create(
        cls,
        cache_dir: str | Path,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> "CacheService":
        """Factory method to create CacheService with a file repository.

        Args:
            cache_dir: Cache directory, created if missing.
            client: HTTP client used for downloads.
            timeout: Download timeout in seconds.

        Returns:
            Configured CacheService instance
        """
        return cls(
            repository=FileCacheRepository.create(cache_dir),
            client=client,
            timeout=timeout,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def _download(self, source_url: str) -> bytes:
        try:
            url = httpx.URL(source_url)
        except httpx.InvalidURL as e:
            raise DownloadError("invalid content URL", {"url": source_url}) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise DownloadError("content URL must be an absolute http(s) URL", {"url": source_url})

        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DownloadError(
                "failed to download content",
                {"url": source_url, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise DownloadError("failed to download content", {"url": source_url, "error": str(e)}) from e

        return response.content

    async def ingest(self, source_url: str, caption: str | None = None) -> None:
        """Download content and store it as one new cache entry.

        Business logic:
        1. Fetch the full body into memory
        2. Build the entry (base64 identity and payload, envelope)
        3. Delegate to the repository for an atomic, fsynced write

        Args:
            source_url: Absolute http(s) URL of the content
            caption: Optional caption appended after the payload

        Raises:
            DownloadError: If the URL is invalid or the download fails
            StorageError: If the entry cannot be written
        """
        logger.info("caching content from %s", source_url)

        payload = await self._download(source_url)
        entry = CacheEntryEntity(source_url=source_url, payload=payload, caption=caption)
        path = await asyncio.to_thread(self._repository.store, entry)

        logger.debug("successfully cached %s (%d bytes)", path.name, len(payload))

    async def get_random(self) -> bytes:
        """Return the contents of one uniformly chosen cache entry.

        Raises:
            EmptyCacheError: If the cache is empty
            StorageError: If listing or reading fails
        """
        return await asyncio.to_thread(self._repository.read_random)

    async def trim(self, max_files: int) -> TrimResult:
        """Delete the oldest entries so at most ``max_files`` remain.

        Args:
            max_files: Retention ceiling (positive)

        Returns:
            TrimResult for the pass
        """
        return await asyncio.to_thread(self._repository.trim, max_files)

    async def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        return await asyncio.to_thread(self._repository.get_stats)

    async def close(self) -> None:
        """Close the download client if this service created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @property
    def repository(self) -> FileCacheRepository:
        """Get the underlying repository (for testing)."""
        return self._repository
