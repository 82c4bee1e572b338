"""Product catalog: filtering, search, comparison and admin writes."""

import logging
from typing import Any

from sqlalchemy import String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.models import Category, Product, Shop
from supermall.services.errors import ComparisonError, NotFoundError
from supermall.services.queries import PageRequest, ensure_reference, get_or_404, paginate

logger = logging.getLogger("uvicorn.error")

# Comparison bounds
MIN_COMPARE = 2
MAX_COMPARE = 4


def _newest_first(query):
    return query.order_by(Product.created_at.desc(), Product.id.desc())


async def list_products(
    session: AsyncSession,
    page: PageRequest,
    *,
    shop_id: int | None = None,
    category_id: int | None = None,
    search: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    on_offer: bool | None = None,
) -> tuple[list[Product], int]:
    """Active products matching the filters.

    Args:
        search: Case-insensitive substring of name, description or any tag.
        min_price / max_price: Inclusive bounds on the current price.
        on_offer: When True, only products flagged as on offer.

    Returns:
        (products for the page, total matching)
    """
    query = select(Product).where(Product.is_active.is_(True))
    if shop_id is not None:
        query = query.where(Product.shop_id == shop_id)
    if category_id is not None:
        query = query.where(Product.category_id == category_id)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                Product.name.ilike(pattern),
                Product.description.ilike(pattern),
                cast(Product.tags, String).ilike(pattern),
            )
        )
    if min_price is not None:
        query = query.where(Product.price >= min_price)
    if max_price is not None:
        query = query.where(Product.price <= max_price)
    if on_offer:
        query = query.where(Product.is_on_offer.is_(True))
    return await paginate(session, _newest_first(query), page)


async def list_products_by_shop(session: AsyncSession, shop_id: int) -> list[Product]:
    query = select(Product).where(Product.is_active.is_(True), Product.shop_id == shop_id)
    result = await session.execute(_newest_first(query))
    return list(result.scalars().all())


async def list_products_by_category(session: AsyncSession, category_id: int) -> list[Product]:
    query = select(Product).where(Product.is_active.is_(True), Product.category_id == category_id)
    result = await session.execute(_newest_first(query))
    return list(result.scalars().all())


async def compare_products(session: AsyncSession, product_ids: list[int]) -> list[Product]:
    """Load 2-4 distinct active products, in the order requested.

    Raises:
        ComparisonError: fewer than 2, more than 4, or repeated ids.
        NotFoundError: any id is missing or inactive.
    """
    if len(product_ids) < MIN_COMPARE:
        raise ComparisonError(f"At least {MIN_COMPARE} product IDs are required for comparison")
    if len(product_ids) > MAX_COMPARE:
        raise ComparisonError(f"Maximum {MAX_COMPARE} products can be compared at once")
    if len(set(product_ids)) != len(product_ids):
        raise ComparisonError("Product IDs must be distinct", detail={"product_ids": product_ids})

    result = await session.execute(
        select(Product).where(Product.id.in_(product_ids), Product.is_active.is_(True))
    )
    by_id = {p.id: p for p in result.scalars().all()}

    missing = [pid for pid in product_ids if pid not in by_id]
    if missing:
        raise NotFoundError("Product", missing[0])
    return [by_id[pid] for pid in product_ids]


async def get_product(session: AsyncSession, product_id: int) -> Product:
    return await get_or_404(session, Product, product_id, active_only=True)


async def create_product(session: AsyncSession, data: dict[str, Any]) -> Product:
    await ensure_reference(session, Shop, data["shop_id"])
    await ensure_reference(session, Category, data["category_id"])

    product = Product(**data)
    session.add(product)
    await session.commit()
    logger.info(f"[products] created id={product.id} shop_id={product.shop_id} price={product.price}")
    return await get_or_404(session, Product, product.id)


async def update_product(session: AsyncSession, product_id: int, data: dict[str, Any]) -> Product:
    product = await get_or_404(session, Product, product_id)
    if data.get("shop_id") is not None:
        await ensure_reference(session, Shop, data["shop_id"])
    if data.get("category_id") is not None:
        await ensure_reference(session, Category, data["category_id"])

    for key, value in data.items():
        setattr(product, key, value)
    await session.commit()
    logger.info(f"[products] updated id={product_id} fields={sorted(data)}")
    return await get_or_404(session, Product, product_id)


async def delete_product(session: AsyncSession, product_id: int) -> None:
    """Soft delete."""
    product = await get_or_404(session, Product, product_id)
    product.is_active = False
    await session.commit()
    logger.info(f"[products] deleted id={product_id}")
