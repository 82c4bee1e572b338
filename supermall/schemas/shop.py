"""Schemas for /api/shops."""

from datetime import datetime

from pydantic import BaseModel, Field

from supermall.schemas.common import CategorySummary, Pagination

_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class ShopCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    category_id: int
    location: str = Field(min_length=1, max_length=200)
    floor: int = Field(ge=1)
    contact_number: str | None = None
    email: str | None = None
    image: str = ""
    opens_at: str = Field(default="09:00", pattern=_HHMM)
    closes_at: str = Field(default="21:00", pattern=_HHMM)

    model_config = {"str_strip_whitespace": True}


class ShopUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    category_id: int | None = None
    location: str | None = Field(default=None, min_length=1, max_length=200)
    floor: int | None = Field(default=None, ge=1)
    contact_number: str | None = None
    email: str | None = None
    image: str | None = None
    opens_at: str | None = Field(default=None, pattern=_HHMM)
    closes_at: str | None = Field(default=None, pattern=_HHMM)

    model_config = {"str_strip_whitespace": True}


class ShopResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    category: CategorySummary
    location: str
    floor: int
    contact_number: str | None = None
    email: str | None = None
    image: str = ""
    opens_at: str
    closes_at: str
    rating: float
    total_ratings: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ShopListResponse(BaseModel):
    shops: list[ShopResponse]
    pagination: Pagination


class ShopCollectionResponse(BaseModel):
    """Unpaginated listing (by category or floor)."""

    shops: list[ShopResponse]
