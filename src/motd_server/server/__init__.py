"""TCP serving layer."""

from .tcp_server import ListenerState, TCPServer

__all__ = ["ListenerState", "TCPServer"]
