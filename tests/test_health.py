"""Tests for health endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_api_health_reports_dependencies(client: AsyncClient):
    """Without init_db/init_redis both stores report unavailable."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "SuperMall API"
    assert data["database"] is False
    assert data["cache"] is False
    assert data["ok"] is False
    assert "timestamp" in data
