"""Configuration for checkup."""

from .settings import CheckupSettings, get_settings

__all__ = ["CheckupSettings", "get_settings"]
