"""hellobase centralized configuration for runtime settings.

All settings are backed by environment variables following the HB_* naming convention.

Example:
    >>> from hellobase.config import settings
    >>> settings.listen_backlog
    50

Environment Variables:
    HB_LISTEN_HOST: Interface a Server binds to (default: "" for all interfaces)
    HB_LISTEN_BACKLOG: Pending connection queue length for listening sockets (default: 50)
    HB_REUSE_ADDRESS: Set SO_REUSEADDR before binding (default: on, except on Windows)
    HB_LOG_DIR: Directory for structured JSONL logs (default: unset, no file output)
    HB_LOG_CONSOLE: Echo structured logs to stdout (default: off)
    HB_LOG_MAX_SIZE_MB: Rotate a log file once it grows past this many MB (default: unset, no rotation)
    HB_LOG_MAX_FILES: Rotated log files to keep (default: 5)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env(name: str, default: str) -> str:
    """Get environment variable with HB_* prefix validation."""
    if not name.startswith("HB_"):
        raise ValueError(f"Only HB_* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, str(default))
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Get environment variable as integer."""
    raw = _env(name, str(default))
    try:
        return int(raw)
    except Exception:
        return default


def _env_optional(name: str) -> Optional[str]:
    raw = _env(name, "")
    return raw or None


def _env_optional_int(name: str) -> Optional[int]:
    raw = _env(name, "")
    try:
        return int(raw) if raw else None
    except ValueError:
        return None


@dataclass(frozen=True)
class Settings:
    """Centralized runtime settings for hellobase.

    This dataclass is frozen to prevent accidental mutation at runtime.
    For testing, override environment variables and reload this module,
    or use monkeypatch to replace the module-level `settings` instance.
    """

    # Listening sockets
    listen_host: str = _env("HB_LISTEN_HOST", "")
    listen_backlog: int = _env_int("HB_LISTEN_BACKLOG", 50)
    # Windows lets a second socket steal a port bound with SO_REUSEADDR
    reuse_address: bool = _env_bool("HB_REUSE_ADDRESS", os.name != "nt")

    # Structured logging
    log_dir: Optional[str] = _env_optional("HB_LOG_DIR")
    log_console: bool = _env_bool("HB_LOG_CONSOLE", False)
    log_max_size_mb: Optional[int] = _env_optional_int("HB_LOG_MAX_SIZE_MB")
    log_max_files: int = _env_int("HB_LOG_MAX_FILES", 5)


# Module-level instance for convenient access
settings = Settings()

__all__ = [
    "settings",
    "Settings",
]
