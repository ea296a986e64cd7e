from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Name:
    """A file or folder name at the end of a path, like "file.ext" or "folder"."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class PathName:
    """A relative path of one or more names, like "folder/folder/file.ext"."""

    text: str

    def __str__(self) -> str:
        return self.text


__all__ = ["Name", "PathName"]
