"""
Unit Tests for Health Check Endpoints.

Tests the health check functionality including:
- Liveness check (/health)
- Readiness check (/health/ready)
- Database connectivity check
"""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException


def _session_factory(session):
    """Build a stand-in for get_session_factory() yielding session."""
    @asynccontextmanager
    async def factory():
        yield session

    return lambda: factory


class TestHealthCheck:
    """Tests for the liveness health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self):
        from threadnote.backend.api.health import health_check

        assert await health_check() == {"status": "healthy"}


class TestCheckDatabase:
    """Tests for the database health check function."""

    @pytest.mark.asyncio
    async def test_returns_healthy_on_successful_query(self):
        from threadnote.backend.api.health import check_database

        session = AsyncMock()
        with patch(
            "threadnote.backend.core.database.get_session_factory",
            new=_session_factory(session),
        ):
            result = await check_database()

        assert result["status"] == "healthy"
        assert result["latency_ms"] >= 0
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_returns_unhealthy_on_error(self):
        from threadnote.backend.api.health import check_database

        session = AsyncMock()
        session.execute.side_effect = OSError("connection refused")
        with patch(
            "threadnote.backend.core.database.get_session_factory",
            new=_session_factory(session),
        ):
            result = await check_database()

        assert result == {"status": "unhealthy", "error": "connection refused"}


class TestReadinessCheck:
    """Tests for the readiness endpoint."""

    @pytest.mark.asyncio
    async def test_ready_when_database_healthy(self):
        from threadnote.backend.api.health import readiness_check

        with patch(
            "threadnote.backend.api.health.check_database",
            return_value={"status": "healthy", "latency_ms": 1},
        ):
            result = await readiness_check()

        assert result["status"] == "healthy"
        assert result["checks"]["database"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_returns_503_when_database_unhealthy(self):
        from threadnote.backend.api.health import readiness_check

        with patch(
            "threadnote.backend.api.health.check_database",
            return_value={"status": "unhealthy", "error": "down"},
        ):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check()

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["checks"]["database"]["error"] == "down"

    @pytest.mark.asyncio
    async def test_returns_503_on_timeout(self):
        from threadnote.backend.api.health import readiness_check

        async def hang():
            await asyncio.sleep(10)

        app_config = MagicMock()
        app_config.application.timeouts.health_ready = 0.01

        with patch("threadnote.backend.api.health.check_database", new=hang), \
             patch("threadnote.backend.core.config.get_app_config", return_value=app_config):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check()

        assert exc_info.value.status_code == 503
        assert "timed out" in exc_info.value.detail["checks"]["database"]["error"]
