"""Readiness check: database and cache reachability."""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from supermall.settings import get_settings
from supermall.stores.postgres import ping_db
from supermall.stores.redis import ping_redis

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


@router.get("")
async def health() -> dict[str, object]:
    settings = get_settings()

    try:
        database = await ping_db()
    except (RuntimeError, SQLAlchemyError, OSError) as e:
        logger.warning(f"[health] database unavailable: {e}")
        database = False

    try:
        cache = await ping_redis()
    except (RuntimeError, RedisError, OSError) as e:
        logger.warning(f"[health] redis unavailable: {e}")
        cache = False

    return {
        "ok": database,
        "service": settings.app_name,
        "version": settings.app_version,
        "database": database,
        "cache": cache,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
