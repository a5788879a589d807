"""TCP handler serving one cache entry per connection.

The wire protocol has no framing and no error frame: the client reads
until EOF. A failure to pick an entry closes the connection with nothing
written, and is visible only in the logs.
"""

import asyncio
import logging

from motd_server.exceptions import MotdError
from motd_server.protocols import CacheStore

logger = logging.getLogger(__name__)


class ConnectionHandler:
    """Write one random cache entry to a client, then close.

    Example:
        ```python
        handler = ConnectionHandler(cache=cache_service)
        server = await asyncio.start_server(handler.handle, "localhost", 4200)
        ```
    """

    def __init__(self, cache: CacheStore) -> None:
        """Initialize the connection handler.

        Args:
            cache: The cache to draw entries from (required).
        """
        self._cache = cache

    async def handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        """Serve a single accepted connection.

        The connection is always closed on return, whatever happened.
        """
        peer = writer.get_extra_info("peername")
        try:
            try:
                data = await self._cache.get_random()
            except MotdError as e:
                logger.error("failed to get random file for %s: %s", peer, e)
                return

            try:
                writer.write(data)
                await writer.drain()
            except (ConnectionError, OSError) as e:
                logger.error("failed to write to connection %s: %s", peer, e)
                return

            logger.debug("served %d bytes to %s", len(data), peer)
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError) as e:
                logger.debug("connection %s closed with error: %s", peer, e)
