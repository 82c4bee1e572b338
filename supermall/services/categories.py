"""Category management.

The public listing is cached in Redis for a short TTL and invalidated on every
admin write. When Redis is unavailable the listing is served from the database.
"""

import logging
from typing import Any

from redis.exceptions import RedisError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.models import Category
from supermall.schemas.category import CategoryListResponse, CategoryResponse
from supermall.services.errors import DuplicateError
from supermall.services.queries import PageRequest, build_pagination, get_or_404, paginate
from supermall.stores.redis import (
    get_categories_cache,
    invalidate_categories_cache,
    set_categories_cache,
)

logger = logging.getLogger("uvicorn.error")


async def list_categories(session: AsyncSession, page: PageRequest) -> CategoryListResponse:
    """Active categories, newest first."""
    cached = await _try_get_cached(page)
    if cached is not None:
        return cached

    query = (
        select(Category)
        .where(Category.is_active.is_(True))
        .order_by(Category.created_at.desc(), Category.id.desc())
    )
    rows, total = await paginate(session, query, page)
    response = CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in rows],
        pagination=build_pagination(page, total),
    )

    await _try_set_cached(page, response)
    return response


async def get_category(session: AsyncSession, category_id: int) -> Category:
    return await get_or_404(session, Category, category_id, active_only=True)


async def create_category(session: AsyncSession, data: dict[str, Any]) -> Category:
    await _ensure_unique_name(session, data["name"])

    category = Category(**data)
    session.add(category)
    await session.commit()
    logger.info(f"[categories] created id={category.id} name={category.name!r}")

    await _try_invalidate()
    return await get_or_404(session, Category, category.id)


async def update_category(session: AsyncSession, category_id: int, data: dict[str, Any]) -> Category:
    category = await get_or_404(session, Category, category_id)

    new_name = data.get("name")
    if new_name and new_name != category.name:
        await _ensure_unique_name(session, new_name, exclude_id=category_id)

    for key, value in data.items():
        setattr(category, key, value)
    await session.commit()
    logger.info(f"[categories] updated id={category_id} fields={sorted(data)}")

    await _try_invalidate()
    return await get_or_404(session, Category, category_id)


async def delete_category(session: AsyncSession, category_id: int) -> None:
    """Soft delete: the row stays, flagged inactive."""
    category = await get_or_404(session, Category, category_id)
    category.is_active = False
    await session.commit()
    logger.info(f"[categories] deleted id={category_id}")

    await _try_invalidate()


async def _ensure_unique_name(session: AsyncSession, name: str, exclude_id: int | None = None) -> None:
    query = select(Category.id).where(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    if (await session.execute(query.limit(1))).scalar_one_or_none() is not None:
        raise DuplicateError("Category with this name already exists", detail={"name": name})


async def _try_get_cached(page: PageRequest) -> CategoryListResponse | None:
    try:
        payload = await get_categories_cache(page.page, page.limit)
    except (RuntimeError, RedisError):
        return None
    if not payload:
        return None
    return CategoryListResponse.model_validate(payload)


async def _try_set_cached(page: PageRequest, response: CategoryListResponse) -> None:
    try:
        await set_categories_cache(page.page, page.limit, response.model_dump(mode="json"))
    except RuntimeError:
        # Redis may be unavailable in tests/local minimal env.
        return
    except RedisError as e:
        logger.warning(f"[categories] cache write failed: {e}")


async def _try_invalidate() -> None:
    try:
        await invalidate_categories_cache()
    except RuntimeError:
        return
    except RedisError as e:
        logger.warning(f"[categories] cache invalidation failed: {e}")
