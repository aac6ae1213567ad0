"""Health check endpoints for FastAPI."""

import inspect
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeAlias

from fastapi import APIRouter, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from ..core.checkup import Checkup
from ..domain.models import HealthStatus
from ..observability.logging import get_logger
from .http import parse_health_status, perform_http_check
from .schemas import HealthCheckResponse

logger = get_logger(__name__)

# Decides whether a request may see per-service details
DebugDetector: TypeAlias = bool | Callable[[Request], bool | Awaitable[bool]]


async def _resolve_debug(detector: DebugDetector, request: Request) -> bool:
    if isinstance(detector, bool):
        return detector
    decision = detector(request)
    if inspect.isawaitable(decision):
        decision = await decision
    return bool(decision)


def create_health_router(
    checkup: Checkup,
    path: str = "/health",
    debug: DebugDetector = False,
    tags: list[str] | None = None,
) -> APIRouter:
    """Create the health check route for FastAPI.

    Args:
        checkup: Checkup instance answering the requests
        path: Route path
        debug: Always show details (bool) or decide per request (callable);
            the ``debug`` query parameter also enables them
        tags: OpenAPI tags

    Returns:
        FastAPI router with the health endpoint
    """
    router = APIRouter(tags=tags or ["health"])

    @router.get(
        path,
        response_model=HealthCheckResponse,
        response_model_exclude_none=True,
        responses={
            status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthCheckResponse},
        },
        summary="Performs a health check on the system",
    )
    async def health_check(
        request: Request,
        debug_query: bool = Query(
            default=False, alias="debug", description="Include per-service details"
        ),
        last: bool = Query(
            default=False, description="Return the last cached result when available"
        ),
        simulate: str | None = Query(
            default=None,
            description="Override the returned status (healthy, degraded, unhealthy)",
        ),
    ) -> JSONResponse:
        try:
            is_debug = debug_query or await _resolve_debug(debug, request)
            result, status_code = await perform_http_check(
                checkup,
                debug=is_debug,
                last=last,
                simulate=parse_health_status(simulate),
            )
            body = HealthCheckResponse.from_result(result)

        except Exception as e:
            logger.error("Health check request failed", error=str(e))
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": HealthStatus.UNHEALTHY.value, "services": {}},
            )

        return JSONResponse(
            status_code=status_code,
            content=body.model_dump(mode="json", exclude_none=True),
        )

    return router


def checkup_lifespan(
    checkup: Checkup,
) -> Callable[[FastAPI], Any]:
    """FastAPI lifespan running background checks while the app is up.

    The instance is exposed as ``app.state.checkup`` and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.checkup = checkup
        async with checkup:
            yield

    return lifespan
