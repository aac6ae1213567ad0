"""Recurring background health checks."""

import asyncio
import inspect
import math
from collections.abc import Callable

from ..domain.exceptions import BackgroundObserverError
from ..domain.models import BackgroundObserver
from ..observability.logging import get_logger
from .aggregator import HealthAggregator
from .interceptors import InterceptorChain

logger = get_logger(__name__)

OBSERVER_CHECKER_NAME = "onBackgroundCheck"


def is_valid_interval(interval_ms: object) -> bool:
    """Background intervals must be finite numbers of at least 1ms."""
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, int | float):
        return False
    return math.isfinite(interval_ms) and interval_ms >= 1


class BackgroundScheduler:
    """Runs the aggregator on a fixed interval in an asyncio task.

    Each tick performs a full (debug) check, hands the result to the observer
    and only then waits for the next interval, so ticks never overlap. The
    task lives on the running event loop and ends with it; it never keeps a
    process alive on its own.
    """

    def __init__(
        self,
        aggregator: HealthAggregator,
        on_background_check: BackgroundObserver | None = None,
        error_reporter: Callable[[BaseException, str], None] | None = None,
        eager: bool = True,
        interceptors: InterceptorChain | None = None,
    ):
        self.aggregator = aggregator
        self.on_background_check = on_background_check
        self.error_reporter = error_reporter
        self.eager = eager
        self.interceptors = (
            interceptors if interceptors is not None else InterceptorChain()
        )
        self.interval_ms: float | None = None
        self._task: asyncio.Task[None] | None = None
        self._stop_event: asyncio.Event | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval_ms: float) -> bool:
        """Start background checking.

        Must be called from the event loop thread, as must ``stop``.

        A no-op returning False when already running, when the interval is
        invalid or when no event loop is running.
        """
        if self.is_running:
            logger.debug("Background check already running")
            return False

        if not is_valid_interval(interval_ms):
            logger.warning("Invalid background check interval", interval_ms=interval_ms)
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "No running event loop, background check not started",
                interval_ms=interval_ms,
            )
            return False

        self.interval_ms = interval_ms
        self._stop_event = asyncio.Event()
        self._task = loop.create_task(
            self._loop(interval_ms / 1000, self._stop_event),
            name="checkup-background-check",
        )
        logger.info(
            "Started background health check", interval_ms=interval_ms, eager=self.eager
        )
        return True

    def stop(self) -> None:
        """Stop background checking. In-flight checkers are abandoned.

        Not thread-safe: call it from the thread running the event loop.
        """
        if self._task is None:
            return

        if self._stop_event is not None:
            self._stop_event.set()
        self._task.cancel()
        self._task = None
        self._stop_event = None
        logger.info("Stopped background health check")

    async def stop_and_wait(self) -> None:
        """Stop background checking and wait for the task to finish."""
        task = self._task
        self.stop()
        if task is None:
            return

        # The task's own cancellation stays inside; the caller's propagates
        await asyncio.wait([task])

    async def _loop(self, interval: float, stop_event: asyncio.Event) -> None:
        if not self.eager and await self._wait(stop_event, interval):
            return

        while not stop_event.is_set():
            try:
                await self.interceptors.background(self._tick)
            except Exception:
                logger.exception("Error in background health check")

            if await self._wait(stop_event, interval):
                return

    @staticmethod
    async def _wait(stop_event: asyncio.Event, interval: float) -> bool:
        """Sleep for one interval; True when stopped in the meantime."""
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
            return True
        except TimeoutError:
            return False

    async def _tick(self) -> None:
        result = await self.aggregator.perform_check(debug=True)

        if self.on_background_check is None:
            return

        try:
            returned = self.on_background_check(result)
            if inspect.isawaitable(returned):
                await returned
        except Exception as e:
            error = BackgroundObserverError(e)
            if self.error_reporter is not None:
                self.error_reporter(error, OBSERVER_CHECKER_NAME)
            else:
                logger.error("Background check observer failed", error=str(e))
