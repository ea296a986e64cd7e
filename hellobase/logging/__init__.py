"""Structured logging for hellobase."""

from .structured import StructuredLogger, LogLevel, create_logger
from .redaction import PathRedactor

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "create_logger",
    "PathRedactor",
]
