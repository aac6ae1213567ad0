"""The Checkup facade: checker registry, aggregation and background checks."""

from collections.abc import Mapping
from dataclasses import replace
from types import TracebackType
from typing import Any, Self

from ..domain.models import Checker, HealthCheckResult
from ..observability.logging import get_logger
from .aggregator import HealthAggregator
from .executor import CheckerExecutor
from .interceptors import Interceptor, InterceptorChain
from .options import CheckupOptions
from .registry import CheckerRegistry
from .scheduler import BackgroundScheduler

logger = get_logger(__name__)


class Checkup:
    """Performs health checks on a system.

    Options can be given as a ``CheckupOptions`` instance or as keyword
    arguments::

        checkup = Checkup(checkers={"db": check_db}, checker_timeout_ms=2000)
        result = await checkup.perform_check(debug=True)

    Background checking needs a running event loop. When the instance is
    built outside of one, the configured background check starts on
    ``async with checkup`` or ``checkup.start_background_check()``.
    """

    def __init__(self, options: CheckupOptions | None = None, **kwargs: Any):
        if options is not None and kwargs:
            raise TypeError("Pass either a CheckupOptions instance or keyword options")

        options = options if options is not None else CheckupOptions(**kwargs)
        # Plugins mutate options; keep the caller's object untouched
        options = replace(
            options,
            checkers=dict(options.checkers),
            plugins=list(options.plugins),
            interceptors=list(options.interceptors),
        )

        for plugin in options.plugins:
            if plugin.configure is not None:
                plugin.configure(options)

        self.options = options
        self._interceptors = InterceptorChain(options.interceptors)
        self._registry = CheckerRegistry()
        self._executor = CheckerExecutor(
            error_logger=options.error_logger,
            timeout_ms=options.checker_timeout_ms,
            interceptors=self._interceptors,
        )
        self._aggregator = HealthAggregator(
            self._registry,
            self._executor,
            context=options.context,
            unhealthy_logger=options.unhealthy_logger,
            interceptors=self._interceptors,
        )
        self._scheduler = BackgroundScheduler(
            self._aggregator,
            on_background_check=options.on_background_check,
            error_reporter=self._executor.report,
            eager=options.eager_background_check,
            interceptors=self._interceptors,
        )

        for plugin in options.plugins:
            if plugin.checkers:
                self.add_checker(plugin.checkers)

        if options.checkers:
            self.add_checker(options.checkers)

        if options.background_check_interval_ms:
            self.start_background_check()

        for plugin in options.plugins:
            if plugin.created is not None:
                plugin.created(self)

        logger.debug(
            "Checkup created",
            checkers=list(self._registry.names()),
            plugins=[plugin.name for plugin in options.plugins],
        )

    @property
    def context(self) -> Any:
        """Value handed to every checker call."""
        return self._aggregator.context

    @context.setter
    def context(self, value: Any) -> None:
        self._aggregator.context = value

    def add_interceptor(self, interceptor: Interceptor) -> None:
        """Wrap checker execution, check runs and background ticks."""
        self._interceptors.add(interceptor)

    # Registry

    def add_checker(self, checkers: Mapping[str, Checker]) -> None:
        """Add checkers to be executed on every health check.

        Raises DuplicateCheckerError when a name is already registered; the
        entries before it in ``checkers`` are kept.
        """
        self._registry.add(checkers)

    def remove_checker(self, *checkers_or_names: str | Checker) -> bool:
        """Remove checkers; True only if all of them were registered."""
        return self._registry.remove(*checkers_or_names)

    def list_checkers(self) -> tuple[Checker, ...]:
        return self._registry.checkers()

    def list_checkers_entries(self) -> tuple[tuple[str, Checker], ...]:
        return self._registry.entries()

    def count_checkers(self) -> int:
        return len(self._registry)

    # Aggregation

    async def perform_check(self, debug: bool = False) -> HealthCheckResult:
        """Run every checker and return the aggregated result.

        Per-service details are only included when ``debug`` is set; the
        cached result always keeps them. This method never raises because of
        a failing checker.
        """
        return await self._aggregator.perform_check(debug)

    def get_last_check(self, debug: bool = False) -> HealthCheckResult | None:
        """Return the last result, or None if no check has run yet."""
        return self._aggregator.get_last_check(debug)

    # Background checks

    @property
    def is_background_check_running(self) -> bool:
        return self._scheduler.is_running

    def start_background_check(self, interval_ms: float | None = None) -> bool:
        """Start background checking, defaulting to the configured interval.

        A no-op when already running or when the interval is invalid.
        Call it, and ``stop_background_check``, on the event loop thread.
        """
        if interval_ms is None:
            interval_ms = self.options.background_check_interval_ms
        return self._scheduler.start(interval_ms)  # type: ignore[arg-type]

    def stop_background_check(self) -> None:
        self._scheduler.stop()

    # Lifecycle

    def close(self) -> None:
        """Stop background checking without draining in-flight checkers."""
        self._scheduler.stop()

    async def aclose(self) -> None:
        """Stop background checking and wait for the task to wind down."""
        await self._scheduler.stop_and_wait()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> Self:
        if (
            self.options.background_check_interval_ms
            and not self.is_background_check_running
        ):
            self.start_background_check()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
