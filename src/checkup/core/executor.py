"""Safe execution of a single health checker."""

import asyncio
import functools
import inspect
import time
from collections.abc import Awaitable, Mapping
from typing import Any

from ..domain.exceptions import CheckerExecutionError, CheckerTimeoutError
from ..domain.models import (
    Checker,
    CheckerReturn,
    CheckOutcome,
    ErrorLogger,
    HealthStatus,
    timeout_outcome,
)
from ..observability.logging import get_logger
from .interceptors import InterceptorChain

logger = get_logger(__name__)


def normalize_outcome(value: CheckerReturn) -> CheckOutcome:
    """Convert whatever a checker returned into a CheckOutcome.

    ``None`` means healthy, a status (or its string value) becomes a bare
    outcome, booleans map to healthy/unhealthy and mappings must carry a
    ``status`` key with an optional ``debug`` mapping.
    """
    if value is None:
        return CheckOutcome(status=HealthStatus.HEALTHY)
    if isinstance(value, CheckOutcome):
        return value.copy()
    if isinstance(value, bool):
        return CheckOutcome(
            status=HealthStatus.HEALTHY if value else HealthStatus.UNHEALTHY
        )
    if isinstance(value, str):
        return CheckOutcome(status=HealthStatus(value))
    if isinstance(value, Mapping):
        if "status" not in value:
            raise ValueError("Checker result mapping has no 'status' key")
        debug = value.get("debug")
        return CheckOutcome(
            status=HealthStatus(value["status"]),
            debug=dict(debug) if debug is not None else None,
        )
    raise TypeError(f"Unsupported checker return value: {type(value).__name__}")


def format_error(error: BaseException) -> str:
    """Render an exception the way it appears in an outcome's debug payload."""
    message = str(error)
    if not message:
        return type(error).__name__
    return f"{type(error).__name__}: {message}"


class CheckerExecutor:
    """Runs one checker and always returns a well-formed outcome.

    Raised errors become an UNHEALTHY outcome carrying the error text, and
    async checkers exceeding the timeout are cancelled and replaced by the
    fixed timeout outcome. Synchronous checkers run inline on the event loop
    and cannot be interrupted.
    """

    def __init__(
        self,
        error_logger: ErrorLogger | None = None,
        timeout_ms: float | None = 5000,
        interceptors: InterceptorChain | None = None,
    ):
        self.error_logger = error_logger
        self.timeout_ms = timeout_ms if timeout_ms and timeout_ms > 0 else None
        self.interceptors = (
            interceptors if interceptors is not None else InterceptorChain()
        )

    async def execute(
        self, checker_name: str, checker: Checker, context: Any
    ) -> CheckOutcome:
        """Execute a checker. Never raises, apart from caller cancellation."""
        return await self.interceptors.execute(
            checker_name,
            functools.partial(self._run, checker_name, checker, context),
        )

    async def _run(
        self, checker_name: str, checker: Checker, context: Any
    ) -> CheckOutcome:
        start_time = time.perf_counter()

        try:
            value = checker(context)
            if inspect.isawaitable(value):
                value = await self._await_with_timeout(checker_name, value)
            outcome = normalize_outcome(value)

        except CheckerTimeoutError as e:
            logger.warning(
                "Health checker timed out",
                checker=checker_name,
                timeout_ms=e.timeout_ms,
            )
            return timeout_outcome()

        except Exception as e:
            self.report(CheckerExecutionError(checker_name, e), checker_name)
            return CheckOutcome(
                status=HealthStatus.UNHEALTHY, debug={"error": format_error(e)}
            )

        logger.debug(
            "Health checker finished",
            checker=checker_name,
            status=outcome.status.value,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )
        return outcome

    async def _await_with_timeout(
        self, checker_name: str, awaitable: Awaitable[CheckerReturn]
    ) -> CheckerReturn:
        if self.timeout_ms is None:
            return await awaitable

        try:
            async with asyncio.timeout(self.timeout_ms / 1000) as deadline:
                return await awaitable
        except TimeoutError as e:
            # A TimeoutError raised by the checker itself is a plain failure
            if deadline.expired():
                raise CheckerTimeoutError(checker_name, self.timeout_ms) from e
            raise

    def report(self, error: BaseException, checker_name: str) -> None:
        """Route an error to structlog and the configured error logger."""
        logger.warning(
            "Health checker failed",
            checker=checker_name,
            error=str(error.__cause__ or error),
        )
        if self.error_logger is None:
            return
        try:
            self.error_logger(error, checker_name)
        except Exception:
            logger.exception("Error logger failed", checker=checker_name)
