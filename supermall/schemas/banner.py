"""Schemas for /api/banners."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from supermall.schemas.common import Pagination, ShopSummary
from supermall.services.activity import as_utc, is_active


class BannerCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    image_url: str = Field(min_length=1)
    link_url: str | None = None
    shop_id: int
    priority: int = Field(default=0, ge=0, le=10)
    start_time: datetime | None = None  # defaults to now
    end_time: datetime
    enabled: bool = True

    model_config = {"str_strip_whitespace": True}

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None


class BannerUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    image_url: str | None = Field(default=None, min_length=1)
    link_url: str | None = None
    shop_id: int | None = None
    priority: int | None = Field(default=None, ge=0, le=10)
    start_time: datetime | None = None
    end_time: datetime | None = None
    enabled: bool | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None


class BannerResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    image_url: str
    link_url: str | None = None
    shop: ShopSummary
    priority: int
    start_time: datetime
    end_time: datetime
    enabled: bool
    impression_count: int
    click_count: int
    is_currently_active: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_banner(cls, banner: object, now: datetime) -> "BannerResponse":
        response = cls.model_validate(banner)
        response.is_currently_active = is_active(banner, now)
        return response


class BannerDisplayResponse(BaseModel):
    """Public landing page listing."""

    banners: list[BannerResponse]
    total: int


class BannerListResponse(BaseModel):
    banners: list[BannerResponse]
    pagination: Pagination


class ClickResponse(BaseModel):
    message: str
    banner_id: int
    click_count: int
