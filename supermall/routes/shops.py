"""Shop endpoints.

GET    /api/shops                      - Paginated, filter by category/floor/search
GET    /api/shops/category/{id}        - All active shops of a category
GET    /api/shops/floor/{floor}        - All active shops on a floor
GET    /api/shops/{id}                 - One shop
GET    /api/shops/{id}/products        - Active products of a shop
GET    /api/shops/{id}/offers          - Enabled offers of a shop
POST/PUT/DELETE                        - Admin writes
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.routes.deps import page_params, require_admin, utcnow
from supermall.schemas import MessageResponse
from supermall.schemas.common import update_fields
from supermall.schemas.offer import OfferResponse, ShopOffersResponse
from supermall.schemas.product import ProductCollectionResponse, ProductResponse
from supermall.schemas.shop import (
    ShopCollectionResponse,
    ShopCreate,
    ShopListResponse,
    ShopResponse,
    ShopUpdate,
)
from supermall.services import offers as offer_service
from supermall.services import products as product_service
from supermall.services import shops as service
from supermall.services.queries import PageRequest, build_pagination
from supermall.stores.postgres import get_db

router = APIRouter()


@router.get("", response_model=ShopListResponse)
async def list_shops(
    category: int | None = Query(default=None, description="Category ID"),
    floor: int | None = Query(default=None, ge=1),
    search: str | None = Query(default=None, max_length=100),
    page: PageRequest = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> ShopListResponse:
    rows, total = await service.list_shops(
        session, page, category_id=category, floor=floor, search=search
    )
    return ShopListResponse(
        shops=[ShopResponse.model_validate(s) for s in rows],
        pagination=build_pagination(page, total),
    )


@router.get("/category/{category_id}", response_model=ShopCollectionResponse)
async def list_shops_by_category(category_id: int, session: AsyncSession = Depends(get_db)) -> ShopCollectionResponse:
    rows = await service.list_shops_by_category(session, category_id)
    return ShopCollectionResponse(shops=[ShopResponse.model_validate(s) for s in rows])


@router.get("/floor/{floor}", response_model=ShopCollectionResponse)
async def list_shops_by_floor(floor: int, session: AsyncSession = Depends(get_db)) -> ShopCollectionResponse:
    rows = await service.list_shops_by_floor(session, floor)
    return ShopCollectionResponse(shops=[ShopResponse.model_validate(s) for s in rows])


@router.get("/{shop_id}", response_model=ShopResponse)
async def get_shop(shop_id: int, session: AsyncSession = Depends(get_db)) -> ShopResponse:
    return ShopResponse.model_validate(await service.get_shop(session, shop_id))


@router.get("/{shop_id}/products", response_model=ProductCollectionResponse)
async def list_shop_products(shop_id: int, session: AsyncSession = Depends(get_db)) -> ProductCollectionResponse:
    await service.get_shop(session, shop_id)
    rows = await product_service.list_products_by_shop(session, shop_id)
    return ProductCollectionResponse(products=[ProductResponse.model_validate(p) for p in rows])


@router.get("/{shop_id}/offers", response_model=ShopOffersResponse)
async def list_shop_offers(
    shop_id: int,
    now: datetime = Depends(utcnow),
    session: AsyncSession = Depends(get_db),
) -> ShopOffersResponse:
    await service.get_shop(session, shop_id)
    rows = await offer_service.list_shop_offers(session, shop_id)
    return ShopOffersResponse(offers=[OfferResponse.from_offer(o, now) for o in rows])


@router.post("", response_model=ShopResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_shop(payload: ShopCreate, session: AsyncSession = Depends(get_db)) -> ShopResponse:
    shop = await service.create_shop(session, payload.model_dump())
    return ShopResponse.model_validate(shop)


@router.put("/{shop_id}", response_model=ShopResponse, dependencies=[Depends(require_admin)])
async def update_shop(
    shop_id: int,
    payload: ShopUpdate,
    session: AsyncSession = Depends(get_db),
) -> ShopResponse:
    data = update_fields(payload, nullable=("description", "contact_number", "email"))
    return ShopResponse.model_validate(await service.update_shop(session, shop_id, data))


@router.delete("/{shop_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_shop(shop_id: int, session: AsyncSession = Depends(get_db)) -> MessageResponse:
    await service.delete_shop(session, shop_id)
    return MessageResponse(message="Shop deleted successfully")
