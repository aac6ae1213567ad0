"""Plugins extending a Checkup at construction time."""

from .base import Plugin, define_plugin
from .structured_logging import logging_plugin, structlog_error_logger
from .system import collect_system_info, system_plugin
from .tracing import CheckupAttributes, TracingInterceptor, tracing_plugin

__all__ = [
    "CheckupAttributes",
    "Plugin",
    "TracingInterceptor",
    "collect_system_info",
    "define_plugin",
    "logging_plugin",
    "structlog_error_logger",
    "system_plugin",
    "tracing_plugin",
]
