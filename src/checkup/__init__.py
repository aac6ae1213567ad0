"""
checkup: health check orchestration.

A registry of named checker functions executed on demand or in the
background, folded into a single system status and cached.
"""

from ._version import __version__
from .core import Checkup, CheckupOptions, Interceptor
from .domain import (
    BackgroundObserverError,
    Checker,
    CheckerExecutionError,
    CheckerTimeoutError,
    CheckOutcome,
    CheckupException,
    DuplicateCheckerError,
    HealthCheckResult,
    HealthStatus,
)
from .plugins import Plugin, define_plugin

__description__ = "Health check orchestration: registry, aggregation, scheduling"

__all__ = [
    "__version__",
    "BackgroundObserverError",
    "Checker",
    "CheckerExecutionError",
    "CheckerTimeoutError",
    "CheckOutcome",
    "Checkup",
    "CheckupException",
    "CheckupOptions",
    "DuplicateCheckerError",
    "HealthCheckResult",
    "HealthStatus",
    "Interceptor",
    "Plugin",
    "define_plugin",
]
