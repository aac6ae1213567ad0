"""Construction options for a Checkup instance."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..config.settings import CheckupSettings, get_settings
from ..domain.models import BackgroundObserver, Checker, ErrorLogger, UnhealthyLogger
from .interceptors import Interceptor

if TYPE_CHECKING:
    from ..plugins.base import Plugin


@dataclass
class CheckupOptions:
    """Options used to build a Checkup.

    Plugins receive this object in their ``configure`` hook and may rewrite
    any field before the instance is assembled.
    """

    # Checkers registered at construction, after plugin checkers
    checkers: dict[str, Checker] = field(default_factory=dict)
    # Shared by reference with every checker call
    context: Any = None
    error_logger: ErrorLogger | None = None
    unhealthy_logger: UnhealthyLogger | None = None
    background_check_interval_ms: float | None = None
    eager_background_check: bool = True
    checker_timeout_ms: float | None = 5000
    on_background_check: BackgroundObserver | None = None
    plugins: list["Plugin"] = field(default_factory=list)
    interceptors: list[Interceptor] = field(default_factory=list)

    @classmethod
    def from_settings(
        cls, settings: CheckupSettings | None = None, **overrides: Any
    ) -> "CheckupOptions":
        """Build options from settings; keyword overrides win."""
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "background_check_interval_ms": settings.background_check_interval_ms,
            "eager_background_check": settings.eager_background_check,
            "checker_timeout_ms": settings.checker_timeout_ms,
        }
        values.update(overrides)
        return cls(**values)
