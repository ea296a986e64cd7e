"""Absolute filesystem paths.

A ``Path`` is always absolute, like ``C:\\folder\\file.ext``,
``\\\\computer\\share\\file.ext`` or ``/home/folder/file.ext``. Parsing,
``add()`` and ``up()`` are lexical and never touch the disk. Only the
``exists*`` queries and the ``ensure_folder()``, ``move()`` and ``delete()``
mutations do, one system call at a time with no caching.

Parsing is delegated to ``pathlib``, so a ``Path`` looks exactly like the
native path it wraps.
"""

from __future__ import annotations

import errno
import logging
import os
import pathlib
import stat as _stat
import string
from typing import ClassVar, Type, Union

from ..errors import InvalidPathError, IOFailureError, NavigationBoundsError
from .names import Name, PathName

logger = logging.getLogger(__name__)

Segment = Union[Name, PathName, str]


def _expand_drive(s: str, windows: bool) -> str:
    """Turn "C:" into "C:/" and "/C:" into "/C:/".

    Without the trailing slash a bare drive parses as drive-relative.
    Only single-letter drives are recognized. Windows rules also drop the
    slash in front of a drive, so "/C:/folder" reads as "C:/folder".
    """
    letters = string.ascii_letters
    if (len(s) == 2 and s[0] in letters and s[1] == ":") or (
        len(s) == 3 and s[0] == "/" and s[1] in letters and s[2] == ":"
    ):
        s = s + "/"
    if windows and len(s) >= 4 and s[0] == "/" and s[1] in letters and s[2] == ":" and s[3] in "/\\":
        s = s[1:]
    return s


class Path:
    """An immutable absolute disk path.

    Args:
        value: A path string, or an already-built native path such as a
            ``pathlib.Path`` (or another ``Path``).

    Raises:
        InvalidPathError: If ``value`` is not absolute.
    """

    __slots__ = ("_p",)

    # pathlib class that parses and renders paths; pure flavours are lexical-only
    flavour: ClassVar[Type[pathlib.PurePath]] = pathlib.Path

    def __init__(self, value: Union[str, "os.PathLike[str]"]) -> None:
        if isinstance(value, str):
            windows = isinstance(self.flavour(), pathlib.PureWindowsPath)
            parsed = self.flavour(_expand_drive(value, windows))
        elif isinstance(value, os.PathLike):
            parsed = self.flavour(os.fspath(value))
        else:
            raise TypeError(f"expected str or path-like, got {type(value).__name__}")
        self._check(parsed)
        object.__setattr__(self, "_p", parsed)

    @staticmethod
    def _check(parsed: pathlib.PurePath) -> None:
        if not parsed.is_absolute():
            raise InvalidPathError("path is not absolute")

    def _wrap(self, parsed: pathlib.PurePath) -> "Path":
        """Build a sibling Path from a native path of our flavour without re-parsing."""
        self._check(parsed)
        p = object.__new__(type(self))
        object.__setattr__(p, "_p", parsed)
        return p

    # -------- Look at this Path --------

    def to_native(self) -> pathlib.PurePath:
        """The ``pathlib`` object inside, always absolute."""
        return self._p

    @property
    def name(self) -> Name:
        """The file or folder name at the end, like "file.ext"; empty for a root."""
        return Name(self._p.name)

    def __str__(self) -> str:
        return str(self._p)

    def __fspath__(self) -> str:
        return str(self._p)

    def __repr__(self) -> str:
        return f"Path({str(self._p)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self._p == other._p
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._p)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Path is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Path is immutable: cannot delete '{name}'")

    # -------- Navigate up and down folders --------

    def add(self, segment: Segment) -> "Path":
        """Return a new Path with ``segment`` like "folder/file.ext" added to the end.

        The result always stays under this Path: a root, drive or share at the
        start of ``segment`` is dropped, so "/etc/file" adds "etc/file".

        Raises:
            NavigationBoundsError: If joining produced a path that is not absolute.
        """
        relative = self.flavour(str(segment))
        parts = relative.parts[1:] if relative.anchor else relative.parts
        try:
            return self._wrap(self._p.joinpath(*parts))
        except InvalidPathError as exc:
            raise NavigationBoundsError("joined path is not absolute") from exc

    __truediv__ = add

    def up(self) -> "Path":
        """Return a new Path with the last folder or file name chopped off.

        Raises:
            NavigationBoundsError: If this Path is a root, like "C:\\" or "/".
        """
        parent = self._p.parent
        if parent == self._p:
            raise NavigationBoundsError("no folder above a root")
        try:
            return self._wrap(parent)
        except InvalidPathError as exc:
            raise NavigationBoundsError("parent path is not absolute") from exc

    # -------- Look at files on the disk, and change them --------

    def exists(self) -> bool:
        """True if there is a file or folder on the disk at this Path."""
        return os.path.exists(self)

    def exists_file(self) -> bool:
        """True if there is something on the disk at this Path that isn't a folder."""
        try:
            st = os.stat(self)
        except (OSError, ValueError):
            return False
        return not _stat.S_ISDIR(st.st_mode)

    def exists_folder(self) -> bool:
        """True if there is a folder on the disk at this Path."""
        return os.path.isdir(self)

    def ensure_folder(self) -> None:
        """Make sure this Path is a folder on the disk, making folders as needed.

        Raises:
            IOFailureError: If the folder can't be made, like when a file is in the way.
        """
        if self.exists_folder():
            return
        try:
            self._p.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as exc:
            raise self._failure("make folder", exc) from exc

    def move(self, destination: "Path") -> None:
        """Move the file or folder at this Path to ``destination``.

        Renames in place, moves into an existing folder, and carries a folder's
        contents along. Never makes the folder ``destination`` goes into.

        Raises:
            IOFailureError: If the rename fails for any reason.
        """
        try:
            self._p.rename(destination.to_native())
        except (OSError, ValueError) as exc:
            raise self._failure("move", exc) from exc

    def delete(self) -> None:
        """Delete the file or empty folder at this Path; does nothing if it's already gone.

        Raises:
            IOFailureError: If the folder has contents, or the OS refuses.
        """
        if not self.exists():
            return
        try:
            if self._p.is_dir() and not self._p.is_symlink():
                self._p.rmdir()
            else:
                self._p.unlink()
        except (OSError, ValueError) as exc:
            raise self._failure("delete", exc) from exc

    def _failure(self, action: str, exc: Exception) -> IOFailureError:
        logger.debug("%s failed for %s: %s", action, self.name, exc)
        code = getattr(exc, "errno", None) or errno.EINVAL
        reason = getattr(exc, "strerror", None) or exc
        return IOFailureError(code, f"cannot {action}: {reason}", str(self))


__all__ = ["Path", "Segment"]
