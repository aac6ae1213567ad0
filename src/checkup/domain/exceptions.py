"""Exception hierarchy for the health check system."""

from typing import Any

from .models import ErrorCode


class CheckupException(Exception):
    """Base exception for the health check system."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class DuplicateCheckerError(CheckupException):
    """A checker with the same name is already registered."""

    def __init__(self, checker_name: str):
        super().__init__(
            f'A checker with the name "{checker_name}" is already registered',
            ErrorCode.DUPLICATE_CHECKER,
            {"checker_name": checker_name},
        )
        self.checker_name = checker_name


class CheckerExecutionError(CheckupException):
    """A checker raised while it was executed."""

    def __init__(self, checker_name: str, cause: BaseException):
        super().__init__(
            f'Health checker "{checker_name}" failed: {cause}',
            ErrorCode.CHECKER_EXECUTION_ERROR,
            {"checker_name": checker_name, "error": str(cause)},
        )
        self.checker_name = checker_name
        self.__cause__ = cause


class CheckerTimeoutError(CheckupException):
    """A checker did not finish before its deadline."""

    def __init__(self, checker_name: str, timeout_ms: float):
        super().__init__(
            f'Health checker "{checker_name}" timed out after {timeout_ms}ms',
            ErrorCode.CHECKER_TIMEOUT,
            {"checker_name": checker_name, "timeout_ms": timeout_ms},
        )
        self.checker_name = checker_name
        self.timeout_ms = timeout_ms


class BackgroundObserverError(CheckupException):
    """The background check observer callback failed."""

    def __init__(self, cause: BaseException):
        super().__init__(
            f"Background check observer failed: {cause}",
            ErrorCode.BACKGROUND_OBSERVER_ERROR,
            {"error": str(cause)},
        )
        self.__cause__ = cause
