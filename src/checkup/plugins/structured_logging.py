"""Route checker failures to a structlog logger."""

from typing import Any

from ..domain.models import ErrorLogger
from ..observability.logging import get_logger
from .base import Plugin, define_plugin


def structlog_error_logger(logger: Any = None) -> ErrorLogger:
    """Build an error logger writing to ``logger`` (a structlog logger)."""
    log = logger if logger is not None else get_logger("checkup.checkers")

    def error_logger(error: BaseException, checker_name: str) -> None:
        log.error(
            f"Health check failed for {checker_name}",
            checker=checker_name,
            exc_info=error,
        )

    return error_logger


@define_plugin
def logging_plugin(logger: Any = None) -> Plugin:
    """Use a structlog logger as the Checkup error logger."""

    def configure(options: Any) -> None:
        options.error_logger = structlog_error_logger(logger)

    return Plugin(configure=configure)
