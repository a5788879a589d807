"""motd-server - serve random cached images and comics over TCP.

This package periodically fetches content from Giphy and XKCD, keeps a
bounded number of entries in a local cache directory, and writes one
random entry to every client that connects.

Layers:
    - protocols: Interface contracts (CacheStore, TaggedProvider, UntaggedProvider)
    - repositories: Filesystem storage and provider clients
    - services: Cache operations and the ingestion sweep
    - workers: Timer-driven ingestion and retention
    - handlers / server: TCP connection handling and the listener
    - dto: Provider response schemas
    - entities: Domain models (internal)

Usage:
    ```python
    from motd_server import MotdApplication, Settings

    app = MotdApplication.create(Settings.from_env())
    await app.run()
    ```
"""

__version__ = "0.1.0"

from motd_server.app import MotdApplication
from motd_server.config import Settings
from motd_server.entities import CacheEntryEntity, MotdSource, TrimResult
from motd_server.exceptions import (
    ConfigurationError,
    DownloadError,
    EmptyCacheError,
    EncodingError,
    ListenerError,
    MotdError,
    ProviderError,
    StorageError,
)
from motd_server.handlers import ConnectionHandler
from motd_server.protocols import CacheStore, TaggedProvider, UntaggedProvider
from motd_server.repositories import FileCacheRepository, GiphyProvider, XkcdProvider
from motd_server.server import TCPServer
from motd_server.services import CacheService, IngestionService

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    # Application
    "MotdApplication",
    # Protocols (interfaces)
    "CacheStore",
    "TaggedProvider",
    "UntaggedProvider",
    # Services (business logic)
    "CacheService",
    "IngestionService",
    # Handlers / server (TCP)
    "ConnectionHandler",
    "TCPServer",
    # Repositories (data access)
    "FileCacheRepository",
    "GiphyProvider",
    "XkcdProvider",
    # Entities (domain models)
    "CacheEntryEntity",
    "MotdSource",
    "TrimResult",
    # Errors
    "MotdError",
    "ConfigurationError",
    "DownloadError",
    "EncodingError",
    "StorageError",
    "EmptyCacheError",
    "ListenerError",
    "ProviderError",
]
