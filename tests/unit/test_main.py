"""
Tests for main application startup, health checks, and error handlers.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError

from kinderportal.core.validation import ValidationError
from kinderportal.main import create_app


class TestHealthEndpoints:
    """Test all health check endpoints."""

    async def test_root_endpoint(self, client: AsyncClient) -> None:
        """Test root endpoint returns service info."""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "KinderPortal"
        assert data["status"] == "operational"
        assert data["version"] == "0.1.0"
        assert "environment" in data

    async def test_health_check_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"] == {"status": "healthy"}
        assert data["checks"]["access_log"]["pending_writes"] == 0

    async def test_health_check_database_down(self, app, client: AsyncClient, monkeypatch) -> None:
        monkeypatch.setattr(
            app.state.database, "ping", AsyncMock(side_effect=ConnectionError("refused"))
        )

        response = await client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["checks"]["database"]["status"] == "unhealthy"

    async def test_readiness_check_ready(self, client: AsyncClient) -> None:
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    async def test_readiness_check_not_ready(self, app, client: AsyncClient, monkeypatch) -> None:
        monkeypatch.setattr(app.state.database, "ping", AsyncMock(side_effect=OSError))

        response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "not_ready"}

    async def test_liveness_check(self, client: AsyncClient) -> None:
        """Test /health/live endpoint always returns alive."""
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}


class TestLifespan:
    """Startup verifies the database; shutdown drains audits then closes it."""

    @staticmethod
    def _fake_database() -> MagicMock:
        database = MagicMock()
        database.ping = AsyncMock()
        database.close = AsyncMock()
        return database

    async def test_startup_and_shutdown(self) -> None:
        database = self._fake_database()
        app = create_app(database=database)
        app.state.auditor = MagicMock(drain=AsyncMock())

        async with app.router.lifespan_context(app):
            database.ping.assert_awaited_once()
            database.close.assert_not_awaited()

        app.state.auditor.drain.assert_awaited_once()
        database.close.assert_awaited_once()

    async def test_startup_fails_when_database_unreachable(self) -> None:
        database = self._fake_database()
        database.ping.side_effect = ConnectionError("refused")
        app = create_app(database=database)

        with pytest.raises(ConnectionError):
            async with app.router.lifespan_context(app):
                pass


class TestExceptionHandlers:
    """Domain and unexpected errors become JSON responses."""

    @pytest.fixture
    async def raising_client(self, app):
        async def validation_failure():
            raise ValidationError("Invalid date: expected YYYY-MM-DD")

        async def conflict():
            raise IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))

        async def crash():
            raise RuntimeError("secret internals")

        app.add_api_route("/_test/validation", validation_failure)
        app.add_api_route("/_test/conflict", conflict)
        app.add_api_route("/_test/crash", crash)

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

    async def test_validation_error_is_400(self, raising_client: AsyncClient) -> None:
        response = await raising_client.get("/_test/validation")

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid date: expected YYYY-MM-DD"}

    async def test_integrity_error_is_409(self, raising_client: AsyncClient) -> None:
        response = await raising_client.get("/_test/conflict")

        assert response.status_code == 409

    async def test_unhandled_error_is_generic_500(
        self, raising_client: AsyncClient, caplog
    ) -> None:
        response = await raising_client.get("/_test/crash")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "secret internals" not in response.text
        assert "Unhandled error on GET /_test/crash" in caplog.text
