"""Absolute disk paths and the names inside them."""

from .names import Name, PathName
from .path import Path

__all__ = ["Name", "PathName", "Path"]
