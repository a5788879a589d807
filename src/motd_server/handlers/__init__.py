"""Handler layer for TCP connections.

Handlers depend on the cache protocol, not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (TCP)   -> (Business) -> (Filesystem)
"""

from .connection_handler import ConnectionHandler

__all__ = [
    "ConnectionHandler",
]
