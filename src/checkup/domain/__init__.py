"""Domain layer: status values, result shapes and exceptions."""

from .exceptions import (
    BackgroundObserverError,
    CheckerExecutionError,
    CheckerTimeoutError,
    CheckupException,
    DuplicateCheckerError,
)
from .models import (
    TIMEOUT_ERROR,
    BackgroundObserver,
    Checker,
    CheckerReturn,
    CheckOutcome,
    ErrorCode,
    ErrorLogger,
    HealthCheckResult,
    HealthStatus,
    UnhealthyLogger,
    timeout_outcome,
)

__all__ = [
    "BackgroundObserver",
    "BackgroundObserverError",
    "Checker",
    "CheckerExecutionError",
    "CheckerReturn",
    "CheckerTimeoutError",
    "CheckOutcome",
    "CheckupException",
    "DuplicateCheckerError",
    "ErrorCode",
    "ErrorLogger",
    "HealthCheckResult",
    "HealthStatus",
    "TIMEOUT_ERROR",
    "UnhealthyLogger",
    "timeout_outcome",
]
