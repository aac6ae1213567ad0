"""Test configuration and fixtures."""

import logging
import os

import pytest
import structlog

# Keep settings independent from the developer's environment
for _key in list(os.environ):
    if _key.startswith("CHECKUP_"):
        del os.environ[_key]

from checkup import Checkup  # noqa: E402
from checkup.config import get_settings  # noqa: E402


class ErrorLog:
    """Collects error logger calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException, str]] = []

    def __call__(self, error: BaseException, checker_name: str) -> None:
        self.calls.append((error, checker_name))

    @property
    def names(self) -> list[str]:
        return [name for _, name in self.calls]


@pytest.fixture
def error_log():
    """Create a recording error logger."""
    return ErrorLog()


@pytest.fixture
def checkup():
    """Create an empty Checkup closed after the test."""
    instance = Checkup()
    yield instance
    instance.close()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging setup done by a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
