"""HTTP helpers shared by web integrations."""

from typing import TYPE_CHECKING

from ..domain.models import HealthCheckResult, HealthStatus

if TYPE_CHECKING:
    from ..core.checkup import Checkup

HTTP_OK = 200
HTTP_SERVICE_UNAVAILABLE = 503

# Every status code a health route can answer with
HTTP_STATUSES = (HTTP_OK, HTTP_SERVICE_UNAVAILABLE)


def health_status_to_http_status(status: HealthStatus) -> int:
    """Degraded systems still serve requests, so only UNHEALTHY maps to 503."""
    if status is HealthStatus.UNHEALTHY:
        return HTTP_SERVICE_UNAVAILABLE
    return HTTP_OK


def parse_health_status(value: str | None) -> HealthStatus | None:
    """Parse the ``simulate`` query parameter."""
    return HealthStatus.parse(value)


async def perform_http_check(
    checkup: "Checkup",
    debug: bool = False,
    last: bool = False,
    simulate: HealthStatus | None = None,
) -> tuple[HealthCheckResult, int]:
    """Resolve a health request into a result and an HTTP status code.

    ``last`` serves the cached result when one exists, and ``simulate``
    overrides the returned status without touching the cached one. Never
    raises.
    """
    result = checkup.get_last_check(debug) if last else None

    if result is None:
        result = await checkup.perform_check(debug)

    if simulate is not None:
        # The result is a view, the cached copy is left alone
        result.status = simulate

    return result, health_status_to_http_status(result.status)
