"""Redis store for caching.

Handles:
- Caching with TTL policies
- Prefix invalidation after admin writes

TTL policies:
- Public category listing: settings.categories_cache_ttl (default 60 seconds)

Counters (impressions, clicks, usage) never live here: they are persisted with
atomic UPDATEs in PostgreSQL.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from supermall.settings import get_settings

# Key prefixes
PREFIX_CATEGORIES = "ui:categories:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


async def ping_redis() -> bool:
    """Check the Redis connection is alive."""
    return bool(await _get_redis().ping())


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found.
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_delete_prefix(prefix: str) -> int:
    """Delete every key starting with `prefix`.

    Returns:
        Number of keys removed.
    """
    client = _get_redis()
    removed = 0
    async for key in client.scan_iter(match=f"{prefix}*"):
        removed += await client.delete(key)
    return removed


async def cache_get_json(key: str) -> dict[str, Any] | None:
    """Get JSON value from cache."""
    value = await cache_get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: dict[str, Any], ttl: int) -> None:
    """Set JSON value in cache."""
    await cache_set(key, json.dumps(value, default=str), ttl)


# ============================================================
# Category listing cache
# ============================================================


def categories_key(page: int, limit: int) -> str:
    return f"{PREFIX_CATEGORIES}{page}:{limit}"


async def get_categories_cache(page: int, limit: int) -> dict[str, Any] | None:
    """Get a cached page of the public category listing."""
    return await cache_get_json(categories_key(page, limit))


async def set_categories_cache(page: int, limit: int, payload: dict[str, Any]) -> None:
    """Cache a page of the public category listing."""
    ttl = get_settings().categories_cache_ttl
    if ttl <= 0:
        return
    await cache_set_json(categories_key(page, limit), payload, ttl)


async def invalidate_categories_cache() -> int:
    """Drop every cached category page (after admin writes)."""
    return await cache_delete_prefix(PREFIX_CATEGORIES)
