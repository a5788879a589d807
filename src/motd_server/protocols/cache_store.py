"""Cache storage protocol.

Defines the interface the workers and the TCP handler use to reach the
cache. The default implementation is CacheService over a flat directory
of envelope files.
"""

from typing import Protocol, runtime_checkable

from motd_server.entities import TrimResult


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for the shared content cache.

    Any type that implements these coroutines satisfies the protocol, no
    explicit inheritance needed. Tests use small fakes in its place.
    """

    async def ingest(self, source_url: str, caption: str | None = None) -> None:
        """Download a URL and store it as one new cache entry.

        Args:
            source_url: Absolute http(s) URL of the content
            caption: Optional text appended after the payload

        Raises:
            DownloadError: If the content could not be fetched
            StorageError: If the entry could not be written
        """
        ...

    async def get_random(self) -> bytes:
        """Return the full contents of one uniformly chosen entry.

        Raises:
            EmptyCacheError: If the cache holds no entries
            StorageError: If listing or reading fails
        """
        ...

    async def trim(self, max_files: int) -> TrimResult:
        """Delete the oldest entries so at most ``max_files`` remain.

        Args:
            max_files: Retention ceiling (positive)

        Returns:
            Which entries were removed and which removals failed
        """
        ...
