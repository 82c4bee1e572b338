"""Query helpers shared by the catalog services.

- Page math for listing endpoints (page/limit -> offset, page count)
- Counting a filtered SELECT
- Loading one row by id (404 or 400 for dangling references)
"""

from dataclasses import dataclass
import math
from typing import Any, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.schemas.common import Pagination
from supermall.services.errors import InvalidReferenceError, NotFoundError

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


def build_pagination(page: PageRequest, total: int) -> Pagination:
    return Pagination(current=page.page, pages=page_count(total, page.limit), total=total)


async def paginate(session: AsyncSession, query: Select[Any], page: PageRequest) -> tuple[list[Any], int]:
    """Run `query` for one page and count all matching rows.

    Returns:
        (rows for the page, total matching rows)
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await session.execute(count_query)).scalar() or 0

    result = await session.execute(query.limit(page.limit).offset(page.offset))
    return list(result.scalars().all()), total


async def load(session: AsyncSession, model: type[T], entity_id: int) -> T | None:
    """Load a row by primary key, refreshing any copy already in the session."""
    result = await session.execute(
        select(model)
        .where(model.id == entity_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_or_404(session: AsyncSession, model: type[T], entity_id: int, *, active_only: bool = False) -> T:
    """Load a row or raise NotFoundError.

    Args:
        active_only: Also treat soft-deleted rows (is_active = false) as missing.
    """
    row = await load(session, model, entity_id)
    if row is None or (active_only and not row.is_active):
        raise NotFoundError(model.__name__, entity_id)
    return row


async def ensure_reference(session: AsyncSession, model: type[T], entity_id: int) -> T:
    """Check a referenced id exists, raising InvalidReferenceError (400) if not."""
    row = await load(session, model, entity_id)
    if row is None:
        raise InvalidReferenceError(model.__name__, entity_id)
    return row
