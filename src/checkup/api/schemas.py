"""Response and query models for the health route."""

from pydantic import BaseModel, ConfigDict, Field

from ..domain.models import HealthCheckResult, HealthStatus


class CheckOutcomeResponse(BaseModel):
    """Outcome of a single checker."""

    model_config = ConfigDict(extra="forbid")

    status: HealthStatus = Field(description="Checker status")
    debug: dict[str, bool | int | float | str] | None = Field(
        default=None, description="Diagnostic details, only in debug mode"
    )


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    model_config = ConfigDict(extra="forbid")

    status: HealthStatus = Field(description="Overall health status")
    services: dict[str, CheckOutcomeResponse] = Field(
        default_factory=dict,
        description="Per-service breakdown, empty unless debug is requested",
    )

    @classmethod
    def from_result(cls, result: HealthCheckResult) -> "HealthCheckResponse":
        return cls(
            status=result.status,
            services={
                name: CheckOutcomeResponse(status=outcome.status, debug=outcome.debug)
                for name, outcome in result.services.items()
            },
        )
