"""Connection-per-request TCP listener."""

import asyncio
import enum
import logging

from motd_server.exceptions import ListenerError
from motd_server.handlers import ConnectionHandler

logger = logging.getLogger(__name__)


class ListenerState(str, enum.Enum):
    """Lifecycle states of the listener."""

    STOPPED = "stopped"
    LISTENING = "listening"


class TCPServer:
    """TCP server that serves cached content.

    Every accepted connection runs in its own task, so a slow client never
    holds up the accept loop. Stopping closes the listening socket and then
    waits for the in-flight handlers to finish on their own; they are not
    cancelled.

    Example:
        ```python
        server = TCPServer("localhost", 4200, ConnectionHandler(cache))
        await server.start()
        ...
        await server.stop()
        ```
    """

    def __init__(self, host: str, port: int, handler: ConnectionHandler) -> None:
        self._host = host
        self._port = port
        self._handler = handler
        self._server: asyncio.Server | None = None
        self._handlers: set[asyncio.Task] = set()
        self._closed: asyncio.Event | None = None
        self._state = ListenerState.STOPPED

    async def start(self) -> None:
        """Bind the listener and begin accepting connections.

        Raises:
            ListenerError: If the address cannot be bound. The server stays
                in the STOPPED state.
        """
        if self._state is ListenerState.LISTENING:
            return

        try:
            self._server = await asyncio.start_server(self._on_connection, self._host, self._port)
        except (OSError, OverflowError) as e:
            raise ListenerError(
                "failed to start server", {"host": self._host, "port": self._port, "error": str(e)}
            ) from e

        self._closed = asyncio.Event()
        self._state = ListenerState.LISTENING
        host, port = self.address
        logger.info("server started on %s:%d", host, port)

    async def serve_forever(self) -> None:
        """Start if needed, then return only once ``stop()`` closes the listener.

        Raises:
            ListenerError: If the address cannot be bound
        """
        await self.start()
        assert self._closed is not None
        await self._closed.wait()

    async def stop(self) -> None:
        """Close the listener and wait for in-flight connections.

        Safe to call on a server that was never started.
        """
        if self._server is None:
            return

        server, self._server = self._server, None
        server.close()

        while self._handlers:
            logger.info("waiting for %d in-flight connection(s)", len(self._handlers))
            await asyncio.gather(*self._handlers, return_exceptions=True)
        await server.wait_closed()

        self._state = ListenerState.STOPPED
        if self._closed is not None:
            self._closed.set()
        logger.info("server stopped")

    def _on_connection(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        # Registered before the handler first runs, so stop() always sees it
        task = asyncio.get_running_loop().create_task(self._handler.handle(reader, writer))
        self._handlers.add(task)
        task.add_done_callback(self._handlers.discard)

    @property
    def state(self) -> ListenerState:
        """Current lifecycle state."""
        return self._state

    @property
    def address(self) -> tuple[str, int]:
        """Bound ``(host, port)``; resolves port 0 to the real port.

        Raises:
            ListenerError: If the server is not listening
        """
        if self._server is None or not self._server.sockets:
            raise ListenerError("server is not listening")
        sockname = self._server.sockets[0].getsockname()
        return sockname[0], sockname[1]
