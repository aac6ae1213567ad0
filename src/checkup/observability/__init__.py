"""Observability infrastructure for logging."""

from .logging import LogFormat, LogLevel, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogFormat",
]
