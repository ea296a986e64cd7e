"""Object lifecycle helpers."""

from .close import Close

__all__ = ["Close"]
