"""Category listing cache: hits skip the database, writes invalidate."""

import pytest
from httpx import AsyncClient
from redis.exceptions import RedisError

from conftest import ADMIN_HEADERS
from supermall.services import categories as category_service


@pytest.mark.asyncio
async def test_listing_served_from_cache(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    cached = {
        "categories": [
            {
                "id": 42,
                "name": "Cached",
                "description": None,
                "image": "",
                "is_active": True,
                "created_at": "2026-06-01T00:00:00Z",
                "updated_at": "2026-06-01T00:00:00Z",
            }
        ],
        "pagination": {"current": 1, "pages": 1, "total": 1},
    }

    async def fake_get(page: int, limit: int):
        assert (page, limit) == (1, 20)
        return cached

    monkeypatch.setattr(category_service, "get_categories_cache", fake_get)

    response = await client.get("/api/categories")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()["categories"]] == ["Cached"]


@pytest.mark.asyncio
async def test_listing_populates_cache_and_writes_invalidate(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    stored: dict[tuple[int, int], dict] = {}
    invalidations: list[bool] = []

    async def fake_get(page: int, limit: int):
        return stored.get((page, limit))

    async def fake_set(page: int, limit: int, payload: dict):
        stored[(page, limit)] = payload

    async def fake_invalidate():
        invalidations.append(True)
        stored.clear()
        return 1

    monkeypatch.setattr(category_service, "get_categories_cache", fake_get)
    monkeypatch.setattr(category_service, "set_categories_cache", fake_set)
    monkeypatch.setattr(category_service, "invalidate_categories_cache", fake_invalidate)

    await client.get("/api/categories")
    assert stored[(1, 20)]["categories"] == []

    await client.post("/api/categories", json={"name": "Fashion"}, headers=ADMIN_HEADERS)
    assert invalidations == [True]

    response = await client.get("/api/categories")
    assert [c["name"] for c in response.json()["categories"]] == ["Fashion"]


@pytest.mark.asyncio
async def test_listing_survives_redis_errors(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    async def broken(*args, **kwargs):
        raise RedisError("connection refused")

    monkeypatch.setattr(category_service, "get_categories_cache", broken)
    monkeypatch.setattr(category_service, "set_categories_cache", broken)

    response = await client.get("/api/categories")
    assert response.status_code == 200
    assert response.json()["categories"] == []
