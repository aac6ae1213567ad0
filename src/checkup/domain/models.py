"""Domain models for health check results."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias


class HealthStatus(str, Enum):
    """Health status of a checker or of the whole system."""

    # Service is healthy, no problems detected
    HEALTHY = "healthy"
    # Service still processes requests, but some problems were detected
    DEGRADED = "degraded"
    # Service might not be able to process any request at all
    UNHEALTHY = "unhealthy"

    @classmethod
    def parse(cls, value: str | None) -> "HealthStatus | None":
        """Parse a status string, returning None for unknown values."""
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class ErrorCode(str, Enum):
    """Standardized error codes."""

    DUPLICATE_CHECKER = "duplicate_checker"
    CHECKER_EXECUTION_ERROR = "checker_execution_error"
    CHECKER_TIMEOUT = "checker_timeout"
    BACKGROUND_OBSERVER_ERROR = "background_observer_error"
    INTERNAL_ERROR = "internal_error"


DebugValue: TypeAlias = int | float | bool | str


@dataclass(frozen=True)
class CheckOutcome:
    """Result of a single checker execution."""

    status: HealthStatus
    debug: dict[str, DebugValue] | None = None

    def copy(self) -> "CheckOutcome":
        """Copy with its own debug mapping."""
        return CheckOutcome(
            status=self.status,
            debug=dict(self.debug) if self.debug is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"status": self.status.value}
        if self.debug is not None:
            data["debug"] = dict(self.debug)
        return data


@dataclass
class HealthCheckResult:
    """Aggregated result of one evaluation pass over every checker."""

    status: HealthStatus
    services: dict[str, CheckOutcome] = field(default_factory=dict)

    def view(self, debug: bool) -> "HealthCheckResult":
        """Return a copy with per-service detail only when ``debug`` is set.

        The status-only view keeps the aggregate status, which is enough to
        derive an HTTP status code.
        """
        if debug:
            return HealthCheckResult(
                status=self.status,
                services={
                    name: outcome.copy() for name, outcome in self.services.items()
                },
            )
        return HealthCheckResult(status=self.status, services={})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "services": {
                name: outcome.to_dict() for name, outcome in self.services.items()
            },
        }


# Checkers may return nothing, a status, a full outcome, an outcome-shaped
# mapping or a boolean; sync and async variants are both accepted.
CheckerReturn: TypeAlias = (
    None | HealthStatus | CheckOutcome | Mapping[str, Any] | bool
)
Checker: TypeAlias = Callable[[Any], CheckerReturn | Awaitable[CheckerReturn]]

ErrorLogger: TypeAlias = Callable[[BaseException, str], None]
UnhealthyLogger: TypeAlias = Callable[[HealthCheckResult], None]
BackgroundObserver: TypeAlias = Callable[
    [HealthCheckResult], None | Awaitable[None]
]

TIMEOUT_ERROR = "Health check timed out"


def timeout_outcome() -> CheckOutcome:
    """Outcome reported for a checker that missed its deadline."""
    return CheckOutcome(
        status=HealthStatus.UNHEALTHY,
        debug={"timeout": True, "error": TIMEOUT_ERROR},
    )
