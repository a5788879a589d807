"""
Shared fixtures for motd-server tests.
"""

import os
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from motd_server.entities import CacheEntryEntity, TrimResult
from motd_server.exceptions import DownloadError
from motd_server.repositories import FileCacheRepository


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Directory for the cache under test (created by the repository)."""
    return tmp_path / "cache"


@pytest.fixture
def repository(cache_dir: Path) -> FileCacheRepository:
    """Create a file repository over an empty cache directory."""
    return FileCacheRepository(cache_dir)


@pytest.fixture
def seed(repository: FileCacheRepository) -> Callable[[int], list[Path]]:
    """Return a helper writing ``count`` entries with strictly increasing mtimes.

    Entry ``i`` has payload ``b"entry-<i>"`` and mtime ``1_000_000 + i`` seconds.
    """

    def _seed(count: int) -> list[Path]:
        paths = []
        for i in range(count):
            entry = CacheEntryEntity(
                source_url=f"https://example.com/{i}.gif",
                payload=f"entry-{i}".encode(),
                created_at=1_700_000_000_000_000_000 + i,
            )
            path = repository.store(entry)
            os.utime(path, (1_000_000 + i, 1_000_000 + i))
            paths.append(path)
        return paths

    return _seed


def cache_files(directory: Path) -> set[str]:
    """Names of the regular files directly under ``directory``."""
    return {p.name for p in directory.iterdir() if p.is_file()}


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """Create an AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeCache:
    """In-memory CacheStore recording every call."""

    def __init__(self, data: bytes = b"fake", fail_urls: set[str] | None = None) -> None:
        self.data = data
        self.fail_urls = fail_urls or set()
        self.ingested: list[tuple[str, str | None]] = []
        self.trims: list[int] = []

    async def ingest(self, source_url: str, caption: str | None = None) -> None:
        if source_url in self.fail_urls:
            raise DownloadError("mock download error", {"url": source_url})
        self.ingested.append((source_url, caption))

    async def get_random(self) -> bytes:
        return self.data

    async def trim(self, max_files: int) -> TrimResult:
        self.trims.append(max_files)
        return TrimResult(total=0)


LONG_GIPHY_URL = (
    "https://media4.giphy.com/media/v1.Y2lkPTc5MGI3NjExZ2Z0b2VmN2N5bWd6d3l0c2Q4bHhrZ2E4dDR0NmRq"
    "bHd2c3c4Z2RqZCZlcD12MV9naWZzX3JhbmRvbSZjdD1n/3o7TKSjRrfIPjeiVyM/giphy.gif"
    "?cid=790b7611gftoef7cymgzwytsd8lxkga8t4t6djlwvsw8gdjd&ep=v1_gifs_random&rid=giphy.gif&ct=g"
)
