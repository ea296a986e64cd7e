"""Internet sockets."""

from .port import Port
from .server import Server

__all__ = ["Port", "Server"]
