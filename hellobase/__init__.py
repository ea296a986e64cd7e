"""hellobase: absolute disk paths and closeable listening sockets for a peer-to-peer client."""

from .errors import InvalidPathError, IOFailureError, NavigationBoundsError
from .file import Name, Path, PathName
from .internet import Port, Server
from .state import Close

__version__ = "0.1.0"

__all__ = [
    "Close",
    "InvalidPathError",
    "IOFailureError",
    "Name",
    "NavigationBoundsError",
    "Path",
    "PathName",
    "Port",
    "Server",
]
