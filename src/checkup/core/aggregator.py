"""Runs every registered checker and folds the outcomes into one result."""

import asyncio
import threading
from typing import Any

from ..domain.models import (
    CheckOutcome,
    HealthCheckResult,
    HealthStatus,
    UnhealthyLogger,
)
from ..observability.logging import get_logger
from .executor import CheckerExecutor
from .interceptors import InterceptorChain
from .registry import CheckerRegistry

logger = get_logger(__name__)


def fold_status(outcomes: list[CheckOutcome]) -> HealthStatus:
    """Aggregate status: UNHEALTHY if any outcome is, HEALTHY otherwise.

    DEGRADED outcomes are reported per service but never change the
    aggregate.
    """
    if any(outcome.status is HealthStatus.UNHEALTHY for outcome in outcomes):
        return HealthStatus.UNHEALTHY
    return HealthStatus.HEALTHY


class HealthAggregator:
    """Concurrent fan-out over all checkers with a cached last result."""

    def __init__(
        self,
        registry: CheckerRegistry,
        executor: CheckerExecutor,
        context: Any = None,
        unhealthy_logger: UnhealthyLogger | None = None,
        interceptors: InterceptorChain | None = None,
    ):
        self.registry = registry
        self.executor = executor
        self.context = context
        self.unhealthy_logger = unhealthy_logger
        self.interceptors = (
            interceptors if interceptors is not None else InterceptorChain()
        )
        self._last_result: HealthCheckResult | None = None
        self._lock = threading.Lock()

    async def perform_check(self, debug: bool = False) -> HealthCheckResult:
        """Run all checkers and return the (debug filtered) result.

        The full result is cached regardless of ``debug``. Never raises
        because of a misbehaving checker.
        """
        result = await self.interceptors.perform(debug, self._run_checks)
        return result.view(debug)

    async def _run_checks(self) -> HealthCheckResult:
        entries = self.registry.entries()
        context = self.context

        # Outcomes come back in submission order, so services keep
        # registration order whatever order the checkers finish in
        outcomes = await asyncio.gather(
            *(
                self.executor.execute(name, checker, context)
                for name, checker in entries
            )
        )

        result = HealthCheckResult(
            status=fold_status(outcomes),
            services={name: outcome for (name, _), outcome in zip(entries, outcomes)},
        )

        with self._lock:
            self._last_result = result

        if result.status is HealthStatus.UNHEALTHY:
            self._log_unhealthy(result)

        return result

    def _log_unhealthy(self, result: HealthCheckResult) -> None:
        logger.info(
            "Health check is unhealthy",
            failing=[
                name
                for name, outcome in result.services.items()
                if outcome.status is HealthStatus.UNHEALTHY
            ],
        )
        if self.unhealthy_logger is None:
            return
        try:
            self.unhealthy_logger(result.view(True))
        except Exception:
            logger.exception("Unhealthy logger failed")

    def get_last_check(self, debug: bool = False) -> HealthCheckResult | None:
        """Return the cached result without running any checker."""
        with self._lock:
            last_result = self._last_result
        if last_result is None:
            return None
        return last_result.view(debug)
