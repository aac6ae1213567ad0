"""Structured logging configuration and utilities."""

from .config import (
    LogFormat,
    LogLevel,
    ServiceNameProcessor,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)
from .formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "setup_logging",
    "setup_logging_from_settings",
    "LogLevel",
    "LogFormat",
    "ServiceNameProcessor",
    "get_logger",
    "JSONFormatter",
    "ConsoleFormatter",
]
