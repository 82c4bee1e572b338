"""Schemas for /api/products."""

from datetime import datetime

from pydantic import BaseModel, Field

from supermall.schemas.common import CategorySummary, Pagination, ShopSummary


class Feature(BaseModel):
    name: str
    value: str


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: float = Field(ge=0)
    original_price: float | None = Field(default=None, ge=0)
    shop_id: int
    category_id: int
    images: list[str] = Field(default_factory=list)
    features: list[Feature] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)
    stock: int = Field(default=0, ge=0)
    is_on_offer: bool = False
    tags: list[str] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True}


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    shop_id: int | None = None
    category_id: int | None = None
    images: list[str] | None = None
    features: list[Feature] | None = None
    specifications: dict[str, str] | None = None
    stock: int | None = Field(default=None, ge=0)
    is_on_offer: bool | None = None
    tags: list[str] | None = None

    model_config = {"str_strip_whitespace": True}


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: float
    original_price: float | None = None
    discount_percentage: int
    shop: ShopSummary
    category: CategorySummary
    images: list[str]
    features: list[Feature]
    specifications: dict[str, str]
    stock: int
    is_on_offer: bool
    tags: list[str]
    rating: float
    total_ratings: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: Pagination


class ProductCollectionResponse(BaseModel):
    """Unpaginated product list (per shop, per category, comparison)."""

    products: list[ProductResponse]


class CompareRequest(BaseModel):
    product_ids: list[int]
