"""OpenTelemetry tracing for health checks."""

import time
from enum import Enum
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import (
    Span,
    SpanKind,
    Status,
    StatusCode,
    Tracer,
    TracerProvider,
)

from .._version import __version__
from ..core.interceptors import BackgroundCall, ExecuteCall, Interceptor, PerformCall
from ..domain.models import CheckOutcome, HealthCheckResult, HealthStatus
from .base import Plugin, define_plugin

TRACER_NAME = "checkup"


class CheckupAttributes(str, Enum):
    """Span attribute names."""

    # Whether per-service details were requested
    DEBUG = "checkup.debug"
    CHECKER_NAME = "checkup.checker_name"
    CHECKER_STATUS = "checkup.checker_status"
    STATUS = "checkup.status"


def _debug_attributes(outcome: CheckOutcome) -> dict[str, Any]:
    if not outcome.debug:
        return {}
    return {
        f"checkup.debug.{key}": value
        for key, value in outcome.debug.items()
        if isinstance(value, bool | int | float | str)
    }


class TracingInterceptor(Interceptor):
    """Creates spans around check runs, checker executions and background ticks.

    With ``only_trace_errors`` healthy runs and checkers produce no span; the
    spans of unhealthy ones are created afterwards with their real start time.
    """

    def __init__(self, tracer: Tracer, only_trace_errors: bool = True):
        self.tracer = tracer
        self.only_trace_errors = only_trace_errors

    async def around_perform(
        self, debug: bool, call_next: PerformCall
    ) -> HealthCheckResult:
        attributes = {CheckupAttributes.DEBUG.value: debug}

        if not self.only_trace_errors:
            with self.tracer.start_as_current_span(
                "checkup.perform_check", attributes=attributes
            ) as span:
                result = await call_next()
                self._finish_perform_span(span, result)
                return result

        start_time = time.time_ns()
        try:
            result = await call_next()
        except Exception as e:
            span = self.tracer.start_span(
                "checkup.perform_check", attributes=attributes, start_time=start_time
            )
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            span.end()
            raise

        if result.status is not HealthStatus.HEALTHY:
            span = self.tracer.start_span(
                "checkup.perform_check", attributes=attributes, start_time=start_time
            )
            self._finish_perform_span(span, result)
            span.end()
        return result

    def _finish_perform_span(self, span: Span, result: HealthCheckResult) -> None:
        span.set_attribute(CheckupAttributes.STATUS.value, result.status.value)
        if result.status is HealthStatus.UNHEALTHY:
            span.set_status(Status(StatusCode.ERROR))

    async def around_execute(
        self, checker_name: str, call_next: ExecuteCall
    ) -> CheckOutcome:
        start_time = time.time_ns()
        outcome = await call_next()

        if outcome.status is HealthStatus.HEALTHY and self.only_trace_errors:
            return outcome

        span = self.tracer.start_span(
            f"checkup.checker:{checker_name}",
            kind=SpanKind.INTERNAL,
            attributes={CheckupAttributes.CHECKER_NAME.value: checker_name},
            start_time=start_time,
        )
        span.set_attribute(CheckupAttributes.CHECKER_STATUS.value, outcome.status.value)
        span.set_attributes(_debug_attributes(outcome))

        if outcome.status is not HealthStatus.HEALTHY:
            span.set_status(Status(StatusCode.ERROR))

        error = (outcome.debug or {}).get("error")
        if isinstance(error, str):
            span.add_event("exception", {"exception.message": error})

        span.end()
        return outcome

    async def around_background(self, call_next: BackgroundCall) -> None:
        with self.tracer.start_as_current_span("checkup.background_check"):
            await call_next()


@define_plugin
def tracing_plugin(
    only_trace_errors: bool = True, tracer_provider: TracerProvider | None = None
) -> Plugin:
    """Trace health checks with OpenTelemetry.

    Uses the global tracer provider unless ``tracer_provider`` is given.
    """

    def created(checkup: Any) -> None:
        tracer = trace.get_tracer(
            TRACER_NAME, __version__, tracer_provider=tracer_provider
        )
        checkup.add_interceptor(TracingInterceptor(tracer, only_trace_errors))

    return Plugin(created=created)
