"""Schemas for /api/offers."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from supermall.schemas.common import Pagination, ProductSummary, ShopSummary
from supermall.services.activity import as_utc, is_active
from supermall.services.pricing import DiscountKind


class OfferCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    terms: str | None = None
    image: str = ""
    shop_id: int
    product_id: int
    discount_type: DiscountKind
    discount_value: float = Field(ge=0)
    original_price: float = Field(ge=0)
    start_time: datetime
    end_time: datetime
    enabled: bool = True
    max_usage: int | None = Field(default=None, ge=0)

    model_config = {"str_strip_whitespace": True}

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class OfferUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    terms: str | None = None
    image: str | None = None
    shop_id: int | None = None
    product_id: int | None = None
    discount_type: DiscountKind | None = None
    discount_value: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    start_time: datetime | None = None
    end_time: datetime | None = None
    enabled: bool | None = None
    max_usage: int | None = Field(default=None, ge=0)

    model_config = {"str_strip_whitespace": True}

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None


class OfferResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    terms: str | None = None
    image: str = ""
    shop: ShopSummary
    product: ProductSummary
    discount_type: DiscountKind
    discount_value: float
    original_price: float
    offer_price: float
    start_time: datetime
    end_time: datetime
    enabled: bool
    max_usage: int | None = None
    current_usage: int
    is_currently_active: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_offer(cls, offer: object, now: datetime) -> "OfferResponse":
        response = cls.model_validate(offer)
        response.is_currently_active = is_active(offer, now)
        return response


class OfferListResponse(BaseModel):
    offers: list[OfferResponse]
    pagination: Pagination


class ShopOffersResponse(BaseModel):
    offers: list[OfferResponse]


class ClaimResponse(BaseModel):
    message: str
    offer_id: int
    current_usage: int
    max_usage: int | None = None
