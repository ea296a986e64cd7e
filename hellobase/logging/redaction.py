"""Keep host folder names out of log records."""

from __future__ import annotations

import os
import re
from typing import Any, Dict, Mapping

# Absolute POSIX, drive-letter and UNC paths with at least one folder; group 1 is the final name
_ABSOLUTE_PATH = re.compile(
    r'(?<![\w.])(?:[A-Za-z]:[\\/]|\\\\|/)(?:[^\\/\s"\']+[\\/])+([^\\/\s"\']*)'
)

_SEPARATORS = re.compile(r"[\\/]+")

MASK = "[REDACTED]"


class PathRedactor:
    """Replace the folders of any path in a log record with ``[REDACTED]``.

    The final name survives, so ``/home/jane/share/song.mp3`` is logged as
    ``[REDACTED]/song.mp3``. Path-like values (``hellobase.file.Path``,
    ``pathlib`` paths) and absolute paths inside strings, such as OS error
    messages, are both covered, in any of the POSIX, drive or UNC syntaxes.
    """

    def redact_path(self, path: "os.PathLike[str] | str") -> str:
        parts = [p for p in _SEPARATORS.split(os.fspath(path)) if p]
        return f"{MASK}/{parts[-1] if parts else ''}"

    def redact_string(self, text: str) -> str:
        return _ABSOLUTE_PATH.sub(MASK + r"/\1", text)

    def redact_value(self, value: Any) -> Any:
        """Redact one field value, walking into dicts, lists and tuples."""
        if isinstance(value, os.PathLike):
            return self.redact_path(value)
        if isinstance(value, str):
            return self.redact_string(value)
        if isinstance(value, Mapping):
            return self.redact_fields(value)
        if isinstance(value, (list, tuple)):
            return [self.redact_value(item) for item in value]
        return value

    def redact_fields(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        return {key: self.redact_value(value) for key, value in fields.items()}


__all__ = ["PathRedactor", "MASK"]
