"""Tests for status values, result shapes and exceptions."""

import pytest

from checkup.domain import (
    BackgroundObserverError,
    CheckerExecutionError,
    CheckerTimeoutError,
    CheckOutcome,
    CheckupException,
    DuplicateCheckerError,
    ErrorCode,
    HealthCheckResult,
    HealthStatus,
    TIMEOUT_ERROR,
    timeout_outcome,
)


class TestHealthStatus:
    """Test health status values."""

    def test_health_status_enum(self):
        """Test health status enum values."""
        assert HealthStatus.HEALTHY.value == "healthy"
        assert HealthStatus.DEGRADED.value == "degraded"
        assert HealthStatus.UNHEALTHY.value == "unhealthy"
        assert len(HealthStatus) == 3

    def test_statuses_compare_equal_to_strings(self):
        """Statuses serialize as plain strings."""
        assert HealthStatus.HEALTHY == "healthy"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("healthy", HealthStatus.HEALTHY),
            ("DEGRADED", HealthStatus.DEGRADED),
            (" unhealthy ", HealthStatus.UNHEALTHY),
            ("broken", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, raw, expected):
        """Unknown values parse to None."""
        assert HealthStatus.parse(raw) is expected


class TestCheckOutcome:
    """Test single checker outcome."""

    def test_structural_equality(self):
        """Outcomes with the same content are equal."""
        assert CheckOutcome(HealthStatus.HEALTHY, {"x": 1}) == CheckOutcome(
            HealthStatus.HEALTHY, {"x": 1}
        )
        assert CheckOutcome(HealthStatus.HEALTHY) != CheckOutcome(
            HealthStatus.DEGRADED
        )

    def test_to_dict_omits_missing_debug(self):
        """Debug is only present when set."""
        assert CheckOutcome(HealthStatus.DEGRADED).to_dict() == {"status": "degraded"}
        assert CheckOutcome(HealthStatus.HEALTHY, {"x": 1}).to_dict() == {
            "status": "healthy",
            "debug": {"x": 1},
        }

    def test_timeout_outcome(self):
        """Timeout outcome is unhealthy and flagged as timeout."""
        outcome = timeout_outcome()
        assert outcome.status is HealthStatus.UNHEALTHY
        assert outcome.debug == {"timeout": True, "error": TIMEOUT_ERROR}
        assert TIMEOUT_ERROR == "Health check timed out"

    def test_timeout_outcome_is_fresh(self):
        """Each timeout outcome owns its debug mapping."""
        first = timeout_outcome()
        first.debug["error"] = "tampered"

        assert timeout_outcome().debug["error"] == TIMEOUT_ERROR
        assert timeout_outcome().debug is not timeout_outcome().debug

    def test_copy(self):
        """Copies are equal but do not share debug."""
        outcome = CheckOutcome(HealthStatus.HEALTHY, {"x": 1})
        copied = outcome.copy()

        assert copied == outcome
        assert copied.debug is not outcome.debug
        assert CheckOutcome(HealthStatus.HEALTHY).copy().debug is None


class TestHealthCheckResult:
    """Test aggregate result."""

    @pytest.fixture
    def result(self):
        return HealthCheckResult(
            status=HealthStatus.UNHEALTHY,
            services={
                "a": CheckOutcome(HealthStatus.HEALTHY),
                "b": CheckOutcome(HealthStatus.UNHEALTHY, {"error": "boom"}),
            },
        )

    def test_debug_view_keeps_services(self, result):
        """Debug view carries every service."""
        view = result.view(True)
        assert view == result
        assert view is not result
        assert view.services is not result.services
        assert view.services["b"].debug is not result.services["b"].debug

    def test_status_only_view(self, result):
        """Non debug view drops services but keeps the status."""
        view = result.view(False)
        assert view.status is HealthStatus.UNHEALTHY
        assert view.services == {}
        assert len(result.services) == 2

    def test_to_dict(self, result):
        """Result converts to plain JSON data."""
        assert result.to_dict() == {
            "status": "unhealthy",
            "services": {
                "a": {"status": "healthy"},
                "b": {"status": "unhealthy", "debug": {"error": "boom"}},
            },
        }


class TestExceptions:
    """Test exception hierarchy."""

    def test_duplicate_checker_error(self):
        """Duplicate error names the checker."""
        error = DuplicateCheckerError("db")
        assert isinstance(error, CheckupException)
        assert error.error_code is ErrorCode.DUPLICATE_CHECKER
        assert error.checker_name == "db"
        assert '"db"' in str(error)

    def test_execution_error_keeps_cause(self):
        """Execution error chains the original exception."""
        cause = RuntimeError("boom")
        error = CheckerExecutionError("db", cause)
        assert error.__cause__ is cause
        assert error.details == {"checker_name": "db", "error": "boom"}

    def test_timeout_error(self):
        """Timeout error carries the deadline."""
        error = CheckerTimeoutError("db", 250)
        assert error.timeout_ms == 250
        assert error.error_code is ErrorCode.CHECKER_TIMEOUT

    def test_background_observer_error(self):
        """Observer error chains the original exception."""
        cause = ValueError("nope")
        error = BackgroundObserverError(cause)
        assert error.__cause__ is cause
        assert error.error_code is ErrorCode.BACKGROUND_OBSERVER_ERROR
