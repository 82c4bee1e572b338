"""Shared route dependencies: admin key check, request clock, paging."""

from datetime import datetime, timezone
import secrets

from fastapi import Depends, Header, Query

from supermall.services.errors import AuthError
from supermall.services.queries import PageRequest
from supermall.settings import Settings, get_settings


async def require_admin(
    x_admin_key: str | None = Header(default=None, alias="X-Admin-Key"),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject admin writes without the configured X-Admin-Key."""
    expected = settings.admin_api_key
    if not expected:
        raise AuthError("Admin API is disabled (ADMIN_API_KEY is not set)")
    if not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        raise AuthError("Invalid or missing X-Admin-Key")


def utcnow() -> datetime:
    """Reference time for activity checks. Overridden in tests."""
    return datetime.now(timezone.utc)


def page_params(
    page: int = Query(default=1, ge=1, description="1-based page number"),
    limit: int | None = Query(default=None, ge=1, description="Page size"),
    settings: Settings = Depends(get_settings),
) -> PageRequest:
    size = limit if limit is not None else settings.default_page_size
    return PageRequest(page=page, limit=min(size, settings.max_page_size))
