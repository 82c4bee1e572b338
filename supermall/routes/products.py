"""Product endpoints.

GET    /api/products                   - Paginated, filterable catalog
GET    /api/products/shop/{id}         - Active products of a shop
GET    /api/products/category/{id}     - Active products of a category
POST   /api/products/compare           - Side-by-side comparison of 2-4 products
GET    /api/products/{id}              - One product
POST/PUT/DELETE                        - Admin writes
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.routes.deps import page_params, require_admin
from supermall.schemas import MessageResponse
from supermall.schemas.common import update_fields
from supermall.schemas.product import (
    CompareRequest,
    ProductCollectionResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from supermall.services import products as service
from supermall.services.queries import PageRequest, build_pagination
from supermall.stores.postgres import get_db

router = APIRouter()


def _collection(rows) -> ProductCollectionResponse:
    return ProductCollectionResponse(products=[ProductResponse.model_validate(p) for p in rows])


@router.get("", response_model=ProductListResponse)
async def list_products(
    shop: int | None = Query(default=None, description="Shop ID"),
    category: int | None = Query(default=None, description="Category ID"),
    search: str | None = Query(default=None, max_length=100),
    min_price: float | None = Query(default=None, ge=0),
    max_price: float | None = Query(default=None, ge=0),
    on_offer: bool | None = Query(default=None),
    page: PageRequest = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> ProductListResponse:
    rows, total = await service.list_products(
        session,
        page,
        shop_id=shop,
        category_id=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        on_offer=on_offer,
    )
    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in rows],
        pagination=build_pagination(page, total),
    )


@router.get("/shop/{shop_id}", response_model=ProductCollectionResponse)
async def list_products_by_shop(shop_id: int, session: AsyncSession = Depends(get_db)) -> ProductCollectionResponse:
    return _collection(await service.list_products_by_shop(session, shop_id))


@router.get("/category/{category_id}", response_model=ProductCollectionResponse)
async def list_products_by_category(
    category_id: int,
    session: AsyncSession = Depends(get_db),
) -> ProductCollectionResponse:
    return _collection(await service.list_products_by_category(session, category_id))


@router.post("/compare", response_model=ProductCollectionResponse)
async def compare_products(payload: CompareRequest, session: AsyncSession = Depends(get_db)) -> ProductCollectionResponse:
    return _collection(await service.compare_products(session, payload.product_ids))


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, session: AsyncSession = Depends(get_db)) -> ProductResponse:
    return ProductResponse.model_validate(await service.get_product(session, product_id))


@router.post("", response_model=ProductResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_product(payload: ProductCreate, session: AsyncSession = Depends(get_db)) -> ProductResponse:
    product = await service.create_product(session, payload.model_dump())
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: AsyncSession = Depends(get_db),
) -> ProductResponse:
    data = update_fields(payload, nullable=("description", "original_price"))
    return ProductResponse.model_validate(await service.update_product(session, product_id, data))


@router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: int, session: AsyncSession = Depends(get_db)) -> MessageResponse:
    await service.delete_product(session, product_id)
    return MessageResponse(message="Product deleted successfully")
