"""
School Survey — Health Endpoint Tests
=======================================
"""

import pytest


class TestHealthCheck:
    """GET /health"""

    @pytest.mark.asyncio
    async def test_healthy_with_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == "1.0.0"
        assert body["uptime_seconds"] >= 0
        assert body["checked_at"]

    @pytest.mark.asyncio
    async def test_unhealthy_without_engine(self, make_client):
        async with make_client(with_db=False) as client:
            response = await client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
        assert "not configured" in body["error"]

    @pytest.mark.asyncio
    async def test_production_hides_probe_error(self, make_client):
        async with make_client(with_db=False, environment="production") as client:
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["error"] == "Database connection failed"
