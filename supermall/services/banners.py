"""Banner management and landing page display.

The public listing returns the banners active at `now`, ordered by priority
(highest first, ties broken by newest), and records one impression for each
banner it returns. Clicks are recorded regardless of the banner's window.
"""

from datetime import datetime
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.models import Banner, Shop
from supermall.services.activity import active_window_filter, as_utc
from supermall.services.counters import record_click, record_impressions
from supermall.services.errors import InvalidDateRange, SuperMallError
from supermall.services.queries import PageRequest, ensure_reference, get_or_404, paginate

logger = logging.getLogger("uvicorn.error")


async def list_display_banners(session: AsyncSession, now: datetime, limit: int) -> list[Banner]:
    """Active banners for the landing page.

    Each returned banner gets one impression. The returned objects carry the
    counts as they were before this display.
    """
    query = (
        select(Banner)
        .where(active_window_filter(Banner, now))
        .order_by(Banner.priority.desc(), Banner.created_at.desc(), Banner.id.desc())
        .limit(limit)
    )
    banners = list((await session.execute(query)).scalars().all())

    updated = await record_impressions(session, [b.id for b in banners])
    logger.debug(f"[banners] displayed count={len(banners)} impressions={updated}")
    return banners


async def list_banners_admin(session: AsyncSession, page: PageRequest) -> tuple[list[Banner], int]:
    """All banners (any state), newest first."""
    query = select(Banner).order_by(Banner.created_at.desc(), Banner.id.desc())
    return await paginate(session, query, page)


async def get_banner(session: AsyncSession, banner_id: int) -> Banner:
    return await get_or_404(session, Banner, banner_id)


async def create_banner(session: AsyncSession, data: dict[str, Any], now: datetime) -> Banner:
    """Create a banner. A missing start_time means "starts now".

    Raises:
        InvalidReferenceError: shop does not exist.
        InvalidDateRange: end_time is not in the future or not after start_time.
    """
    await ensure_reference(session, Shop, data["shop_id"])

    data = dict(data)
    if data.get("start_time") is None:
        data["start_time"] = now

    banner = Banner(impression_count=0, click_count=0, **data)
    _validate(banner, now)

    session.add(banner)
    await session.commit()
    logger.info(
        f"[banners] created id={banner.id} shop_id={banner.shop_id} priority={banner.priority} "
        f"window={banner.start_time.isoformat()}..{banner.end_time.isoformat()}"
    )
    return await get_or_404(session, Banner, banner.id)


async def update_banner(session: AsyncSession, banner_id: int, data: dict[str, Any], now: datetime) -> Banner:
    """Partial update. A new end_time must be in the future."""
    banner = await get_or_404(session, Banner, banner_id)
    if data.get("shop_id") is not None:
        await ensure_reference(session, Shop, data["shop_id"])

    for key, value in data.items():
        setattr(banner, key, value)
    try:
        _validate(banner, now, check_end_in_future="end_time" in data)
    except SuperMallError:
        await session.rollback()
        raise

    await session.commit()
    logger.info(f"[banners] updated id={banner_id} fields={sorted(data)}")
    return await get_or_404(session, Banner, banner_id)


async def delete_banner(session: AsyncSession, banner_id: int) -> None:
    """Soft delete: flip `enabled` off. Counters are kept."""
    banner = await get_or_404(session, Banner, banner_id)
    banner.enabled = False
    await session.commit()
    logger.info(f"[banners] deleted id={banner_id}")


async def click_banner(session: AsyncSession, banner_id: int) -> int:
    """Record a click and return the new click count."""
    count = await record_click(session, banner_id)
    logger.info(f"[banners] click id={banner_id} click_count={count}")
    return count


def _validate(banner: Banner, now: datetime, check_end_in_future: bool = True) -> None:
    start, end = as_utc(banner.start_time), as_utc(banner.end_time)
    if check_end_in_future and end <= as_utc(now):
        raise InvalidDateRange(
            "End date must be in the future",
            detail={"end_time": end.isoformat()},
        )
    if start >= end:
        raise InvalidDateRange(
            "End date must be after start date",
            detail={"start_time": start.isoformat(), "end_time": end.isoformat()},
        )
