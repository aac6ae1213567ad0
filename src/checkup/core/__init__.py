"""Core health check engine."""

from .aggregator import HealthAggregator, fold_status
from .checkup import Checkup
from .executor import CheckerExecutor, format_error, normalize_outcome
from .interceptors import Interceptor, InterceptorChain
from .options import CheckupOptions
from .registry import CheckerRegistry
from .scheduler import BackgroundScheduler

__all__ = [
    "BackgroundScheduler",
    "CheckerExecutor",
    "CheckerRegistry",
    "Checkup",
    "CheckupOptions",
    "HealthAggregator",
    "Interceptor",
    "InterceptorChain",
    "fold_status",
    "format_error",
    "normalize_outcome",
]
