"""Banner endpoints.

GET    /api/banners             - Active banners for the landing page (records impressions)
GET    /api/banners/admin       - All banners, paginated (admin)
GET    /api/banners/{id}        - One banner
POST   /api/banners/{id}/click  - Record a click
POST/PUT/DELETE                 - Admin writes
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.routes.deps import page_params, require_admin, utcnow
from supermall.schemas import MessageResponse
from supermall.schemas.banner import (
    BannerCreate,
    BannerDisplayResponse,
    BannerListResponse,
    BannerResponse,
    BannerUpdate,
    ClickResponse,
)
from supermall.schemas.common import update_fields
from supermall.services import banners as service
from supermall.services.queries import PageRequest, build_pagination
from supermall.settings import Settings, get_settings
from supermall.stores.postgres import get_db

router = APIRouter()


@router.get("", response_model=BannerDisplayResponse)
async def list_banners(
    now: datetime = Depends(utcnow),
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(get_db),
) -> BannerDisplayResponse:
    rows = await service.list_display_banners(session, now, settings.banner_display_limit)
    return BannerDisplayResponse(
        banners=[BannerResponse.from_banner(b, now) for b in rows],
        total=len(rows),
    )


@router.get("/admin", response_model=BannerListResponse, dependencies=[Depends(require_admin)])
async def list_banners_admin(
    page: PageRequest = Depends(page_params),
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> BannerListResponse:
    rows, total = await service.list_banners_admin(session, page)
    return BannerListResponse(
        banners=[BannerResponse.from_banner(b, now) for b in rows],
        pagination=build_pagination(page, total),
    )


@router.get("/{banner_id}", response_model=BannerResponse)
async def get_banner(
    banner_id: int,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> BannerResponse:
    return BannerResponse.from_banner(await service.get_banner(session, banner_id), now)


@router.post("/{banner_id}/click", response_model=ClickResponse)
async def click_banner(banner_id: int, session: AsyncSession = Depends(get_db)) -> ClickResponse:
    count = await service.click_banner(session, banner_id)
    return ClickResponse(message="Click recorded", banner_id=banner_id, click_count=count)


@router.post("", response_model=BannerResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_banner(
    payload: BannerCreate,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> BannerResponse:
    banner = await service.create_banner(session, payload.model_dump(), now)
    return BannerResponse.from_banner(banner, now)


@router.put("/{banner_id}", response_model=BannerResponse, dependencies=[Depends(require_admin)])
async def update_banner(
    banner_id: int,
    payload: BannerUpdate,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> BannerResponse:
    data = update_fields(payload, nullable=("description", "link_url"))
    banner = await service.update_banner(session, banner_id, data, now)
    return BannerResponse.from_banner(banner, now)


@router.delete("/{banner_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_banner(banner_id: int, session: AsyncSession = Depends(get_db)) -> MessageResponse:
    await service.delete_banner(session, banner_id)
    return MessageResponse(message="Banner deleted successfully")
