"""Repository layer for data access.

This layer hides external dependencies (the filesystem, Giphy, XKCD)
behind protocol-based interfaces. This enables:
- Swapping a provider without touching the ingestion service
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from .file_cache_repository import FileCacheRepository
from .giphy_provider import GiphyProvider
from .xkcd_provider import XkcdProvider

__all__ = [
    "FileCacheRepository",
    "GiphyProvider",
    "XkcdProvider",
]
