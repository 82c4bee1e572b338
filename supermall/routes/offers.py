"""Offer endpoints.

GET    /api/offers              - Paginated; ?active=true keeps currently active offers
GET    /api/offers/shop/{id}    - Enabled offers of a shop
GET    /api/offers/{id}         - One offer (with is_currently_active)
POST   /api/offers/{id}/claim   - Redeem one use (atomic cap check)
POST/PUT/DELETE                 - Admin writes; offer_price is always derived
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.routes.deps import page_params, require_admin, utcnow
from supermall.schemas import MessageResponse
from supermall.schemas.common import update_fields
from supermall.schemas.offer import (
    ClaimResponse,
    OfferCreate,
    OfferListResponse,
    OfferResponse,
    OfferUpdate,
    ShopOffersResponse,
)
from supermall.services import offers as service
from supermall.services.queries import PageRequest, build_pagination
from supermall.stores.postgres import get_db

router = APIRouter()


@router.get("", response_model=OfferListResponse)
async def list_offers(
    shop: int | None = Query(default=None, description="Shop ID"),
    active: bool = Query(default=False, description="Only offers active right now"),
    page: PageRequest = Depends(page_params),
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> OfferListResponse:
    rows, total = await service.list_offers(session, page, now=now, shop_id=shop, active_only=active)
    return OfferListResponse(
        offers=[OfferResponse.from_offer(o, now) for o in rows],
        pagination=build_pagination(page, total),
    )


@router.get("/shop/{shop_id}", response_model=ShopOffersResponse)
async def list_shop_offers(
    shop_id: int,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> ShopOffersResponse:
    rows = await service.list_shop_offers(session, shop_id)
    return ShopOffersResponse(offers=[OfferResponse.from_offer(o, now) for o in rows])


@router.get("/{offer_id}", response_model=OfferResponse)
async def get_offer(
    offer_id: int,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> OfferResponse:
    return OfferResponse.from_offer(await service.get_offer(session, offer_id), now)


@router.post("/{offer_id}/claim", response_model=ClaimResponse)
async def claim_offer(
    offer_id: int,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> ClaimResponse:
    offer = await service.claim_offer(session, offer_id, now)
    return ClaimResponse(
        message="Offer claimed successfully",
        offer_id=offer.id,
        current_usage=offer.current_usage,
        max_usage=offer.max_usage,
    )


@router.post("", response_model=OfferResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_offer(
    payload: OfferCreate,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> OfferResponse:
    offer = await service.create_offer(session, payload.model_dump())
    return OfferResponse.from_offer(offer, now)


@router.put("/{offer_id}", response_model=OfferResponse, dependencies=[Depends(require_admin)])
async def update_offer(
    offer_id: int,
    payload: OfferUpdate,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> OfferResponse:
    data = update_fields(payload, nullable=("description", "terms", "max_usage"))
    offer = await service.update_offer(session, offer_id, data)
    return OfferResponse.from_offer(offer, now)


@router.delete("/{offer_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_offer(offer_id: int, session: AsyncSession = Depends(get_db)) -> MessageResponse:
    await service.delete_offer(session, offer_id)
    return MessageResponse(message="Offer deleted successfully")
