"""
Tests for health check endpoints and helpers.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from shared.utils.health import (
    HealthStatus,
    aggregate_health_checks,
    health_check_with_timeout,
)


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "restaurant-api"

    def test_server_header_removed(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert "server" not in response.headers
        assert response.headers["x-content-type-options"] == "nosniff"

    def test_detailed_health_all_up(self, client, monkeypatch):
        redis_client = AsyncMock()
        monkeypatch.setattr(
            "rest_api.routers.public.health.get_redis_client",
            AsyncMock(return_value=redis_client),
        )

        response = client.get("/api/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert set(data["dependencies"]) == {"database", "redis"}

    def test_detailed_health_redis_down(self, client, monkeypatch):
        redis_client = AsyncMock()
        redis_client.ping.side_effect = ConnectionError("refused")
        monkeypatch.setattr(
            "rest_api.routers.public.health.get_redis_client",
            AsyncMock(return_value=redis_client),
        )

        response = client.get("/api/health/detailed")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["database"]["status"] == "healthy"
        assert data["dependencies"]["redis"]["error"] == "refused"


class TestHealthHelpers:
    @pytest.mark.asyncio
    async def test_slow_check_times_out(self):
        @health_check_with_timeout(timeout=0.01, component="slow")
        async def check_slow():
            await asyncio.sleep(1)

        result = await check_slow()

        assert result.status == HealthStatus.UNHEALTHY
        assert result.error == "timeout after 0.01s"

    @pytest.mark.asyncio
    async def test_component_name_from_function(self):
        @health_check_with_timeout()
        async def check_storage_health():
            return {"bucket": "media"}

        result = await check_storage_health()

        assert result.component == "storage"
        assert result.to_dict()["details"] == {"bucket": "media"}

    @pytest.mark.asyncio
    async def test_aggregate(self):
        @health_check_with_timeout(component="ok")
        async def check_ok():
            return None

        @health_check_with_timeout(component="broken")
        async def check_broken():
            raise RuntimeError("boom")

        results = await aggregate_health_checks([check_ok(), check_broken()])

        assert results["status"] == "degraded"
        assert results["components"]["ok"]["status"] == "healthy"
        assert results["components"]["broken"]["error"] == "boom"
