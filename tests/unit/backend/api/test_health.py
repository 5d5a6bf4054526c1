"""
Unit Tests for Health Check Endpoints.

Tests the health check functionality including:
- Liveness check (/health)
- Database connectivity check used by /health/ready
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from scribe.backend.api.health import check_database, health_check


def _request(database):
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(database=database)))


def _database(session):
    database = MagicMock()
    database.is_connected = True
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    database.session.return_value = context
    return database


class TestHealthCheck:
    """Tests for the liveness health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_ok(self):
        result = await health_check()

        assert result.model_dump() == {"ok": True}


class TestCheckDatabase:
    """Tests for the database health check function."""

    @pytest.mark.asyncio
    async def test_not_configured_without_database(self):
        assert await check_database(_request(None)) == {"status": "not_configured"}

    @pytest.mark.asyncio
    async def test_not_configured_before_connect(self):
        database = MagicMock()
        database.is_connected = False

        assert await check_database(_request(database)) == {"status": "not_configured"}

    @pytest.mark.asyncio
    async def test_healthy_when_query_succeeds(self):
        session = AsyncMock()

        result = await check_database(_request(_database(session)))

        assert result["status"] == "healthy"
        assert "latency_ms" in result
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unhealthy_when_query_fails(self):
        session = AsyncMock()
        session.execute.side_effect = Exception("Connection refused")

        result = await check_database(_request(_database(session)))

        assert result == {"status": "unhealthy", "error": "Connection refused"}
