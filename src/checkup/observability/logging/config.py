"""Logging configuration and setup."""

import logging
import sys
from enum import Enum
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

from .formatters import ConsoleFormatter, JSONFormatter


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging formats."""

    JSON = "json"
    CONSOLE = "console"


class ServiceNameProcessor:
    """Stamp every event with the name of the service being checked."""

    def __init__(self, service_name: str):
        self.service_name = service_name

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("service", self.service_name)
        return event_dict


def _renderer(format_type: LogFormat, enable_colors: bool) -> Any:
    if format_type == LogFormat.CONSOLE:
        return ConsoleFormatter(colors=enable_colors)
    return JSONFormatter()


def setup_logging(
    level: LogLevel = LogLevel.INFO,
    format_type: LogFormat = LogFormat.JSON,
    log_file: str | None = None,
    enable_colors: bool = True,
    include_timestamps: bool = True,
    service_name: str | None = None,
) -> None:
    """Route structlog events through stdlib logging.

    Libraries embedding checkup usually own their logging setup; this is for
    the standalone server and for scripts.
    """
    handler: logging.Handler = (
        logging.FileHandler(log_file) if log_file else logging.StreamHandler(sys.stdout)
    )
    logging.basicConfig(
        level=getattr(logging, level.value),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if service_name:
        processors.append(ServiceNameProcessor(service_name))
    if include_timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="ISO"))
    processors.append(_renderer(format_type, enable_colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_settings(settings: Any) -> None:
    """Apply the ``log_*`` and ``service_name`` fields of ``CheckupSettings``."""
    setup_logging(
        level=LogLevel(settings.log_level),
        format_type=LogFormat(settings.log_format),
        service_name=settings.service_name,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
