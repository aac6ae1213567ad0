"""
Configuration management for checkup.

Scalar options can be supplied through environment variables prefixed with
``CHECKUP_`` (or a ``.env`` file) and turned into construction options with
``CheckupOptions.from_settings``.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..observability.logging import LogFormat, LogLevel


class CheckupSettings(BaseSettings):
    """Health check configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CHECKUP_", env_file=".env", extra="ignore"
    )

    # Background checking is disabled unless an interval is set
    background_check_interval_ms: int | None = None
    eager_background_check: bool = True
    checker_timeout_ms: int | None = 5000

    # HTTP route
    http_path: str = "/health"
    http_debug: bool = False

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat = LogFormat.JSON

    service_name: str = Field(default="checkup", min_length=1)

    @field_validator("background_check_interval_ms", "checker_timeout_ms")
    @classmethod
    def validate_non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Durations must not be negative")
        return v

    @field_validator("http_path")
    @classmethod
    def validate_http_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("HTTP path must start with '/'")
        return v


@lru_cache
def get_settings() -> CheckupSettings:
    """Get cached settings built from the environment."""
    return CheckupSettings()
