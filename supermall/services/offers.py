"""Offer management.

Write path for every create/update:
1. Validate references (shop, product) and the merged activity window
2. Validate the discount (percentage <= 100, usage cap >= current usage)
3. price_offer() re-derives offer_price from the discount fields
4. Persist

Claims go through counters.record_usage(), which checks the cap and
increments in one statement.
"""

from datetime import datetime
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.models import Offer, Product, Shop
from supermall.services.activity import active_window_filter, as_utc, is_active, is_usage_exhausted
from supermall.services.counters import record_usage
from supermall.services.errors import (
    InvalidDateRange,
    InvalidDiscountValue,
    InvalidUsageCap,
    OfferNotActive,
    SuperMallError,
    UsageCapExceeded,
)
from supermall.services.pricing import DiscountKind, price_offer
from supermall.services.queries import PageRequest, ensure_reference, get_or_404, paginate

logger = logging.getLogger("uvicorn.error")


def _newest_first(query):
    return query.order_by(Offer.created_at.desc(), Offer.id.desc())


async def list_offers(
    session: AsyncSession,
    page: PageRequest,
    *,
    now: datetime,
    shop_id: int | None = None,
    active_only: bool = False,
) -> tuple[list[Offer], int]:
    """Offers, newest first.

    Args:
        now: Reference time for the activity filter.
        shop_id: Only offers of this shop.
        active_only: Only offers for which is_active(offer, now) holds.
    """
    query = select(Offer)
    if shop_id is not None:
        query = query.where(Offer.shop_id == shop_id)
    if active_only:
        query = query.where(active_window_filter(Offer, now))
    return await paginate(session, _newest_first(query), page)


async def list_shop_offers(session: AsyncSession, shop_id: int) -> list[Offer]:
    """Enabled offers of a shop (expired ones included)."""
    query = select(Offer).where(Offer.shop_id == shop_id, Offer.enabled.is_(True))
    result = await session.execute(_newest_first(query))
    return list(result.scalars().all())


async def get_offer(session: AsyncSession, offer_id: int) -> Offer:
    return await get_or_404(session, Offer, offer_id)


async def create_offer(session: AsyncSession, data: dict[str, Any]) -> Offer:
    await ensure_reference(session, Shop, data["shop_id"])
    await ensure_reference(session, Product, data["product_id"])

    offer = Offer(current_usage=0, **data)
    _validate(offer)
    price_offer(offer)

    session.add(offer)
    await session.commit()
    logger.info(
        f"[offers] created id={offer.id} shop_id={offer.shop_id} product_id={offer.product_id} "
        f"discount={offer.discount_type.value}:{offer.discount_value} price={offer.offer_price}"
    )
    return await get_or_404(session, Offer, offer.id)


async def update_offer(session: AsyncSession, offer_id: int, data: dict[str, Any]) -> Offer:
    offer = await get_or_404(session, Offer, offer_id)
    if data.get("shop_id") is not None:
        await ensure_reference(session, Shop, data["shop_id"])
    if data.get("product_id") is not None:
        await ensure_reference(session, Product, data["product_id"])

    for key, value in data.items():
        setattr(offer, key, value)
    try:
        _validate(offer)
    except SuperMallError:
        await session.rollback()
        raise
    price_offer(offer)

    await session.commit()
    logger.info(f"[offers] updated id={offer_id} fields={sorted(data)} price={offer.offer_price}")
    return await get_or_404(session, Offer, offer_id)


async def delete_offer(session: AsyncSession, offer_id: int) -> None:
    """Soft delete: flip `enabled` off."""
    offer = await get_or_404(session, Offer, offer_id)
    offer.enabled = False
    await session.commit()
    logger.info(f"[offers] deleted id={offer_id}")


async def claim_offer(session: AsyncSession, offer_id: int, now: datetime) -> Offer:
    """Redeem one use of a currently active offer.

    Raises:
        NotFoundError: offer does not exist.
        UsageCapExceeded: offer is at its cap (also re-checked atomically).
        OfferNotActive: offer is disabled or outside its window.
    """
    offer = await get_or_404(session, Offer, offer_id)
    if is_usage_exhausted(offer.max_usage, offer.current_usage):
        raise UsageCapExceeded(offer_id)
    if not is_active(offer, now):
        raise OfferNotActive("Offer is not currently active", detail={"id": offer_id})

    usage = await record_usage(session, offer_id)
    logger.info(f"[offers] claimed id={offer_id} current_usage={usage} max_usage={offer.max_usage}")
    return await get_or_404(session, Offer, offer_id)


def _validate(offer: Offer) -> None:
    if as_utc(offer.start_time) >= as_utc(offer.end_time):
        raise InvalidDateRange(
            "End date must be after start date",
            detail={"start_time": offer.start_time.isoformat(), "end_time": offer.end_time.isoformat()},
        )
    if DiscountKind(offer.discount_type) is DiscountKind.PERCENTAGE and offer.discount_value > 100:
        raise InvalidDiscountValue(
            "Percentage discount cannot exceed 100",
            detail={"discount_value": offer.discount_value},
        )
    if offer.max_usage is not None and offer.current_usage > offer.max_usage:
        raise InvalidUsageCap(
            "max_usage cannot be lower than current usage",
            detail={"max_usage": offer.max_usage, "current_usage": offer.current_usage},
        )
