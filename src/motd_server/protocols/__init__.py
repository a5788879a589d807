"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the file cache or a provider without touching callers
- Unit testing with small fake implementations
- Clear separation of concerns

Usage:
    ```python
    from motd_server.protocols import CacheStore, TaggedProvider

    cache: CacheStore = CacheService.create(settings)
    giphy: TaggedProvider = GiphyProvider.from_key_file(...)
    ```
"""

from .cache_store import CacheStore
from .content_provider import TaggedProvider, UntaggedProvider

__all__ = [
    "CacheStore",
    "TaggedProvider",
    "UntaggedProvider",
]
