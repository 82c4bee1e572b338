"""Category endpoints.

GET    /api/categories       - Paginated active categories (cached)
GET    /api/categories/{id}  - One category
POST   /api/categories       - Create (admin)
PUT    /api/categories/{id}  - Partial update (admin)
DELETE /api/categories/{id}  - Soft delete (admin)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from supermall.routes.deps import page_params, require_admin
from supermall.schemas import MessageResponse
from supermall.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from supermall.schemas.common import update_fields
from supermall.services import categories as service
from supermall.services.queries import PageRequest
from supermall.stores.postgres import get_db

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    page: PageRequest = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> CategoryListResponse:
    return await service.list_categories(session, page)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, session: AsyncSession = Depends(get_db)) -> CategoryResponse:
    category = await service.get_category(session, category_id)
    return CategoryResponse.model_validate(category)


@router.post("", response_model=CategoryResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create_category(payload: CategoryCreate, session: AsyncSession = Depends(get_db)) -> CategoryResponse:
    category = await service.create_category(session, payload.model_dump())
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse, dependencies=[Depends(require_admin)])
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    session: AsyncSession = Depends(get_db),
) -> CategoryResponse:
    data = update_fields(payload, nullable=("description",))
    category = await service.update_category(session, category_id, data)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_category(category_id: int, session: AsyncSession = Depends(get_db)) -> MessageResponse:
    await service.delete_category(session, category_id)
    return MessageResponse(message="Category deleted successfully")
