"""HTTP surface for health checks."""

from .app import create_app
from .endpoints import DebugDetector, checkup_lifespan, create_health_router
from .http import (
    HTTP_STATUSES,
    health_status_to_http_status,
    parse_health_status,
    perform_http_check,
)
from .schemas import CheckOutcomeResponse, HealthCheckResponse

__all__ = [
    "CheckOutcomeResponse",
    "DebugDetector",
    "HTTP_STATUSES",
    "HealthCheckResponse",
    "checkup_lifespan",
    "create_app",
    "create_health_router",
    "health_status_to_http_status",
    "parse_health_status",
    "perform_http_check",
]
