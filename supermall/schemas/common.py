"""Common schemas used across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail


class Pagination(BaseModel):
    """Page position returned by every paginated listing."""

    current: int
    pages: int
    total: int


class MessageResponse(BaseModel):
    message: str


class CategorySummary(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class ShopSummary(BaseModel):
    id: int
    name: str
    location: str
    floor: int

    model_config = {"from_attributes": True}


class ProductSummary(BaseModel):
    id: int
    name: str
    images: list[str] = []

    model_config = {"from_attributes": True}


def update_fields(payload: BaseModel, nullable: tuple[str, ...] = ()) -> dict[str, Any]:
    """Fields explicitly sent in a partial update.

    An explicit null only clears fields listed in `nullable`; elsewhere it is ignored.
    """
    data = payload.model_dump(exclude_unset=True)
    return {k: v for k, v in data.items() if v is not None or k in nullable}
