"""Service layer for business logic.

Services depend on protocols (interfaces) where they can, making them
testable with fakes.

Architecture:
    Worker / Handler -> Service -> Repository
    (timers / TCP)   -> (Business) -> (Filesystem, providers)

Usage:
    ```python
    from motd_server.services import CacheService, IngestionService

    cache = CacheService.create(cache_dir=settings.cache_dir)
    ingestion = IngestionService(cache, tagged_provider=giphy, untagged_provider=xkcd, tags=settings.giphy_tags)
    ```
"""

from .cache_service import CacheService
from .ingestion_service import IngestionService, IngestReport

__all__ = [
    "CacheService",
    "IngestionService",
    "IngestReport",
]
