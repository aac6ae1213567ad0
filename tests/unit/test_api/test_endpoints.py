"""Tests for the FastAPI health route."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from checkup import Checkup
from checkup.api import checkup_lifespan, create_app, create_health_router
from checkup.config import CheckupSettings


def build_client(checkup, **router_kwargs):
    app = FastAPI()
    app.include_router(create_health_router(checkup, **router_kwargs))
    return TestClient(app)


@pytest.fixture
def healthy_checkup():
    """Checkup with one healthy checker carrying details."""
    with Checkup(
        checkers={"db": lambda _ctx: {"status": "healthy", "debug": {"pool": 5}}}
    ) as checkup:
        yield checkup


@pytest.fixture
def unhealthy_checkup():
    """Checkup with a failing checker."""
    with Checkup(
        checkers={"up": lambda _ctx: True, "down": lambda _ctx: False}
    ) as checkup:
        yield checkup


class TestHealthRoute:
    """Test the health endpoint."""

    def test_healthy(self, healthy_checkup):
        response = build_client(healthy_checkup).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "services": {}}

    def test_debug_query(self, healthy_checkup):
        response = build_client(healthy_checkup).get("/health?debug=true")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "services": {"db": {"status": "healthy", "debug": {"pool": 5}}},
        }

    def test_unhealthy(self, unhealthy_checkup):
        response = build_client(unhealthy_checkup).get("/health", params={"debug": 1})

        assert response.status_code == 503
        assert response.json() == {
            "status": "unhealthy",
            "services": {"up": {"status": "healthy"}, "down": {"status": "unhealthy"}},
        }

    def test_degraded_is_ok(self):
        with Checkup(checkers={"cache": lambda _ctx: "degraded"}) as checkup:
            response = build_client(checkup).get("/health", params={"debug": True})

        assert response.status_code == 200
        assert response.json()["services"]["cache"] == {"status": "degraded"}

    def test_simulate(self, healthy_checkup):
        client = build_client(healthy_checkup)

        response = client.get("/health", params={"simulate": "unhealthy"})
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

        assert healthy_checkup.get_last_check().status.value == "healthy"

    def test_unknown_simulate_value_is_ignored(self, healthy_checkup):
        response = build_client(healthy_checkup).get(
            "/health", params={"simulate": "sideways"}
        )
        assert response.status_code == 200

    def test_last(self, unhealthy_checkup):
        client = build_client(unhealthy_checkup)
        client.get("/health")
        unhealthy_checkup.remove_checker("down")

        cached = client.get("/health", params={"last": True})
        fresh = client.get("/health")

        assert cached.status_code == 503
        assert fresh.status_code == 200

    def test_custom_path(self, healthy_checkup):
        client = build_client(healthy_checkup, path="/status")

        assert client.get("/status").status_code == 200
        assert client.get("/health").status_code == 404

    def test_always_debug(self, healthy_checkup):
        response = build_client(healthy_checkup, debug=True).get("/health")
        assert "db" in response.json()["services"]

    def test_debug_detector(self, healthy_checkup):
        """A callable decides per request."""
        client = build_client(
            healthy_checkup,
            debug=lambda request: request.headers.get("x-debug") == "yes",
        )

        assert client.get("/health").json()["services"] == {}
        response = client.get("/health", headers={"x-debug": "yes"})
        assert "db" in response.json()["services"]

    def test_async_debug_detector(self, healthy_checkup):
        async def detector(request):
            return True

        response = build_client(healthy_checkup, debug=detector).get("/health")
        assert "db" in response.json()["services"]

    def test_internal_error(self, healthy_checkup):
        """Unexpected failures answer 503."""
        with patch(
            "checkup.api.endpoints.perform_http_check",
            AsyncMock(side_effect=RuntimeError("boom")),
        ):
            response = build_client(healthy_checkup).get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy", "services": {}}


class TestLifespan:
    """Test application lifecycle integration."""

    def test_background_check_runs_while_app_is_up(self):
        checkup = Checkup(
            checkers={"db": lambda _ctx: True}, background_check_interval_ms=1000
        )
        app = FastAPI(lifespan=checkup_lifespan(checkup))
        app.include_router(create_health_router(checkup))

        with TestClient(app) as client:
            assert app.state.checkup is checkup
            assert checkup.is_background_check_running
            assert client.get("/health").status_code == 200

        assert not checkup.is_background_check_running


class TestCreateApp:
    """Test the standalone application."""

    def test_uses_settings(self):
        settings = CheckupSettings(
            http_path="/status", http_debug=True, service_name="inventory"
        )
        with Checkup(checkers={"db": lambda _ctx: True}) as checkup:
            app = create_app(checkup, settings)

            with TestClient(app) as client:
                response = client.get("/status")

        assert app.title == "inventory"
        assert response.status_code == 200
        assert response.json()["services"] == {"db": {"status": "healthy"}}

    def test_default_checkup_has_system_checker(self):
        settings = CheckupSettings(http_debug=True)
        app = create_app(settings=settings)

        with TestClient(app) as client:
            body = client.get("/health").json()

        assert body["services"]["system"]["status"] == "healthy"
