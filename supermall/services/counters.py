"""Counter updates for banners and offers.

Every increment is a single `UPDATE ... SET col = col + 1` keyed by id, so
concurrent requests never lose updates (no read-modify-write).

- Impressions: unconditional, one per displayed banner (no deduplication)
- Clicks: unconditional, not gated by the banner's activity window
- Usage: conditional on the cap in the same statement, so an offer is never
  claimed past max_usage even under concurrent claims
"""

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.models import Banner, Offer
from supermall.services.errors import NotFoundError, UsageCapExceeded

logger = logging.getLogger("uvicorn.error")


async def _current_value(session: AsyncSession, column, model, entity_id: int) -> int | None:
    result = await session.execute(select(column).where(model.id == entity_id))
    return result.scalar_one_or_none()


async def record_impressions(session: AsyncSession, banner_ids: list[int]) -> int:
    """Add one impression to each listed banner in a single statement.

    Returns:
        Number of banners updated.
    """
    if not banner_ids:
        return 0

    result = await session.execute(
        update(Banner)
        .where(Banner.id.in_(banner_ids))
        .values(impression_count=Banner.impression_count + 1)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    return result.rowcount


async def record_impression(session: AsyncSession, banner_id: int) -> int:
    """Add one impression to a banner.

    Returns:
        The new impression count.

    Raises:
        NotFoundError: banner does not exist.
    """
    result = await session.execute(
        update(Banner)
        .where(Banner.id == banner_id)
        .values(impression_count=Banner.impression_count + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await session.rollback()
        raise NotFoundError("Banner", banner_id)

    count = await _current_value(session, Banner.impression_count, Banner, banner_id)
    await session.commit()
    return count


async def record_click(session: AsyncSession, banner_id: int) -> int:
    """Add one click to a banner, whatever its activity state.

    Returns:
        The new click count.

    Raises:
        NotFoundError: banner does not exist.
    """
    result = await session.execute(
        update(Banner)
        .where(Banner.id == banner_id)
        .values(click_count=Banner.click_count + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await session.rollback()
        raise NotFoundError("Banner", banner_id)

    count = await _current_value(session, Banner.click_count, Banner, banner_id)
    await session.commit()
    return count


async def record_usage(session: AsyncSession, offer_id: int) -> int:
    """Claim one use of an offer.

    The cap check and the increment are one statement:
    UPDATE offers SET current_usage = current_usage + 1
    WHERE id = :id AND (max_usage IS NULL OR current_usage < max_usage)

    Returns:
        The new usage count.

    Raises:
        NotFoundError: offer does not exist.
        UsageCapExceeded: offer already reached max_usage.
    """
    result = await session.execute(
        update(Offer)
        .where(Offer.id == offer_id)
        .where(or_(Offer.max_usage.is_(None), Offer.current_usage < Offer.max_usage))
        .values(current_usage=Offer.current_usage + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await session.rollback()
        exists = await _current_value(session, Offer.id, Offer, offer_id)
        if exists is None:
            raise NotFoundError("Offer", offer_id)
        logger.warning(f"[offers] usage cap reached offer_id={offer_id}")
        raise UsageCapExceeded(offer_id)

    count = await _current_value(session, Offer.current_usage, Offer, offer_id)
    await session.commit()
    return count
