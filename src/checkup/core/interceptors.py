"""Around-call interceptors for checker execution and check runs.

Instrumentation (tracing, metrics, ...) wraps the core operations by adding an
``Interceptor`` instead of replacing methods on the instance. Interceptors
added first sit outermost.
"""

import functools
from collections.abc import Awaitable, Callable

from ..domain.models import CheckOutcome, HealthCheckResult

ExecuteCall = Callable[[], Awaitable[CheckOutcome]]
PerformCall = Callable[[], Awaitable[HealthCheckResult]]
BackgroundCall = Callable[[], Awaitable[None]]


class Interceptor:
    """Base interceptor; every hook passes straight through by default."""

    async def around_execute(
        self, checker_name: str, call_next: ExecuteCall
    ) -> CheckOutcome:
        """Wrap the execution of one checker. Must not raise."""
        return await call_next()

    async def around_perform(
        self, debug: bool, call_next: PerformCall
    ) -> HealthCheckResult:
        """Wrap one aggregation pass."""
        return await call_next()

    async def around_background(self, call_next: BackgroundCall) -> None:
        """Wrap one background tick, observer call included."""
        await call_next()


class InterceptorChain:
    """Ordered interceptors composed around the core calls."""

    def __init__(self, interceptors: list[Interceptor] | None = None) -> None:
        self._interceptors: list[Interceptor] = list(interceptors or [])

    def add(self, interceptor: Interceptor) -> None:
        self._interceptors.append(interceptor)

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(tuple(self._interceptors))

    async def execute(self, checker_name: str, call: ExecuteCall) -> CheckOutcome:
        for interceptor in reversed(tuple(self._interceptors)):
            call = functools.partial(interceptor.around_execute, checker_name, call)
        return await call()

    async def perform(self, debug: bool, call: PerformCall) -> HealthCheckResult:
        for interceptor in reversed(tuple(self._interceptors)):
            call = functools.partial(interceptor.around_perform, debug, call)
        return await call()

    async def background(self, call: BackgroundCall) -> None:
        for interceptor in reversed(tuple(self._interceptors)):
            call = functools.partial(interceptor.around_background, call)
        await call()
