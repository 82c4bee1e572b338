"""Pydantic schemas for API request/response validation."""

from supermall.schemas.common import (
    CategorySummary,
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    Pagination,
    ProductSummary,
    ShopSummary,
)

__all__ = [
    "CategorySummary",
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
    "Pagination",
    "ProductSummary",
    "ShopSummary",
]
