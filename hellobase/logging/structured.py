"""JSON-lines event logs for long-lived resources like listening sockets."""

from __future__ import annotations

import json
import sys
import threading
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from .redaction import PathRedactor


class LogLevel(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class StructuredLogger:
    """Write one JSON object per event to a file, stdout, or both.

    Every record carries ``time`` (UTC, ISO 8601), ``level``, ``component``,
    ``session_id`` and ``message``, followed by the caller's fields after
    they pass through a ``PathRedactor``.

    Args:
        component: What is logging, like "server".
        session_id: Which instance of the component, like "port-6346".
            A short random id is used when omitted.
        output_file: File path to append to, or an open text stream.
        enable_console: Also print each record to stdout.
        max_log_size_mb: Rotate a file output once it grows past this size.
        max_log_files: How many rotated files (``name.1.jsonl`` and up) to keep.

    Raises:
        OSError: If the log folder or file can't be opened.
    """

    def __init__(
        self,
        component: str,
        session_id: Optional[str] = None,
        output_file: Optional[Union[str, Path, TextIO]] = None,
        enable_console: bool = False,
        redactor: Optional[PathRedactor] = None,
        max_log_size_mb: Optional[int] = None,
        max_log_files: int = 5,
    ) -> None:
        self.component = component
        self.session_id = session_id or uuid.uuid4().hex[:8]
        self.redactor = redactor or PathRedactor()
        self.console_enabled = enable_console
        self.max_log_size_bytes = max_log_size_mb * 1024 * 1024 if max_log_size_mb else None
        self.max_log_files = max(1, max_log_files)
        self.log_file_path: Optional[Path] = None
        self.log_file: Optional[TextIO] = None
        self._lock = threading.Lock()

        if isinstance(output_file, (str, Path)):
            self.log_file_path = Path(output_file)
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_file_path.open("a", encoding="utf-8")
        elif output_file is not None:
            self.log_file = output_file

    def log(self, level: LogLevel, message: str, **fields: Any) -> None:
        record: Dict[str, Any] = {
            "time": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "level": level.value,
            "component": self.component,
            "session_id": self.session_id,
            "message": message,
        }
        record.update(self.redactor.redact_fields(fields))
        line = json.dumps(record, default=str, separators=(",", ":"))

        with self._lock:
            if self.console_enabled:
                print(line, file=sys.stdout, flush=True)
            if self.log_file is not None:
                self._rotate_if_full()
                self.log_file.write(line + "\n")
                self.log_file.flush()

    def debug(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.WARNING, message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.ERROR, message, **fields)

    def _rotated(self, n: int) -> Path:
        assert self.log_file_path is not None
        return self.log_file_path.with_suffix(f".{n}{self.log_file_path.suffix}")

    def _rotate_if_full(self) -> None:
        """Shift server.jsonl to server.1.jsonl, server.1 to server.2, dropping the oldest."""
        path = self.log_file_path
        if path is None or self.max_log_size_bytes is None or self.log_file is None:
            return
        if self.log_file.tell() <= self.max_log_size_bytes:
            return

        self.log_file.close()
        try:
            self._rotated(self.max_log_files).unlink(missing_ok=True)
            for n in range(self.max_log_files - 1, 0, -1):
                if self._rotated(n).exists():
                    self._rotated(n).replace(self._rotated(n + 1))
            path.replace(self._rotated(1))
        finally:
            # keep logging into the current file even if a rename failed
            self.log_file = path.open("a", encoding="utf-8")

    def close(self) -> None:
        """Close the file output; an open stream handed in by the caller is closed too."""
        with self._lock:
            if self.log_file is not None:
                self.log_file.close()
                self.log_file = None


def create_logger(
    component: str,
    session_id: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    **kwargs: Any,
) -> StructuredLogger:
    """Build a StructuredLogger from ``hellobase.config.settings``.

    Records go to ``<log_dir>/<component>_<session_id>.jsonl`` when a log
    folder is configured (``HB_LOG_DIR``), otherwise only to stdout if
    ``HB_LOG_CONSOLE`` is on. Keyword arguments override the settings.
    """
    from .. import config

    settings = config.settings
    log_dir = log_dir if log_dir is not None else settings.log_dir
    kwargs.setdefault("enable_console", settings.log_console)
    kwargs.setdefault("max_log_size_mb", settings.log_max_size_mb)
    kwargs.setdefault("max_log_files", settings.log_max_files)

    output_file = None
    if log_dir:
        output_file = Path(log_dir) / f"{component}_{session_id or 'default'}.jsonl"

    return StructuredLogger(component, session_id=session_id, output_file=output_file, **kwargs)
