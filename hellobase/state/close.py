"""Closeable-resource base with an idempotent close."""

from __future__ import annotations

import threading


class Close:
    """Base for objects that must be closed exactly once.

    Starts open. The first ``close()`` closes it; later calls do nothing.
    Subclasses override ``close()`` and begin it with::

        if self.already():
            return

    so the release that follows runs at most once, even when several threads
    close at the same time.
    """

    def __init__(self) -> None:
        self._closed = False
        self._close_lock = threading.Lock()

    def already(self) -> bool:
        """Mark this object closed, returning True if it was closed before this call."""
        with self._close_lock:
            if self._closed:
                return True
            self._closed = True
            return False

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        with self._close_lock:
            return self._closed

    def close(self) -> None:
        self.already()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
