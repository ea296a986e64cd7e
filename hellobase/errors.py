"""Error kinds raised by hellobase."""

from __future__ import annotations


class InvalidPathError(ValueError):
    """Raised when a path string or handle is not absolute."""


class NavigationBoundsError(IndexError):
    """Raised when navigation leaves the set of absolute paths, like going up from a root."""


class IOFailureError(OSError):
    """Raised when a disk or socket operation fails at the OS level.

    The underlying ``OSError`` is chained as ``__cause__``.
    """


__all__ = [
    "InvalidPathError",
    "NavigationBoundsError",
    "IOFailureError",
]
