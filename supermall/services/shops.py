"""Shop directory: filtering, search and admin writes."""

import logging
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.models import Category, Shop
from supermall.services.queries import PageRequest, ensure_reference, get_or_404, paginate

logger = logging.getLogger("uvicorn.error")


def _newest_first(query):
    return query.order_by(Shop.created_at.desc(), Shop.id.desc())


async def list_shops(
    session: AsyncSession,
    page: PageRequest,
    *,
    category_id: int | None = None,
    floor: int | None = None,
    search: str | None = None,
) -> tuple[list[Shop], int]:
    """Active shops matching the filters.

    Args:
        category_id: Only shops in this category.
        floor: Only shops on this floor.
        search: Case-insensitive substring of name, description or location.

    Returns:
        (shops for the page, total matching)
    """
    query = select(Shop).where(Shop.is_active.is_(True))
    if category_id is not None:
        query = query.where(Shop.category_id == category_id)
    if floor is not None:
        query = query.where(Shop.floor == floor)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                Shop.name.ilike(pattern),
                Shop.description.ilike(pattern),
                Shop.location.ilike(pattern),
            )
        )
    return await paginate(session, _newest_first(query), page)


async def list_shops_by_category(session: AsyncSession, category_id: int) -> list[Shop]:
    query = select(Shop).where(Shop.is_active.is_(True), Shop.category_id == category_id)
    result = await session.execute(_newest_first(query))
    return list(result.scalars().all())


async def list_shops_by_floor(session: AsyncSession, floor: int) -> list[Shop]:
    query = select(Shop).where(Shop.is_active.is_(True), Shop.floor == floor)
    result = await session.execute(_newest_first(query))
    return list(result.scalars().all())


async def get_shop(session: AsyncSession, shop_id: int) -> Shop:
    return await get_or_404(session, Shop, shop_id, active_only=True)


async def create_shop(session: AsyncSession, data: dict[str, Any]) -> Shop:
    await ensure_reference(session, Category, data["category_id"])

    shop = Shop(**data)
    session.add(shop)
    await session.commit()
    logger.info(f"[shops] created id={shop.id} name={shop.name!r} floor={shop.floor}")
    return await get_or_404(session, Shop, shop.id)


async def update_shop(session: AsyncSession, shop_id: int, data: dict[str, Any]) -> Shop:
    shop = await get_or_404(session, Shop, shop_id)
    if data.get("category_id") is not None:
        await ensure_reference(session, Category, data["category_id"])

    for key, value in data.items():
        setattr(shop, key, value)
    await session.commit()
    logger.info(f"[shops] updated id={shop_id} fields={sorted(data)}")
    return await get_or_404(session, Shop, shop_id)


async def delete_shop(session: AsyncSession, shop_id: int) -> None:
    """Soft delete. Offers, products and banners of the shop are left untouched."""
    shop = await get_or_404(session, Shop, shop_id)
    shop.is_active = False
    await session.commit()
    logger.info(f"[shops] deleted id={shop_id}")
