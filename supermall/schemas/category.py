"""Schemas for /api/categories."""

from datetime import datetime

from pydantic import BaseModel, Field

from supermall.schemas.common import Pagination


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    image: str = ""

    model_config = {"str_strip_whitespace": True}


class CategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    image: str | None = None

    model_config = {"str_strip_whitespace": True}


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    image: str = ""
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    pagination: Pagination
