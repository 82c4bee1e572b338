"""Domain errors raised by services.

Each error carries a stable code and the HTTP status the API renders it with.
The application maps them to the structured error format:
{ "error": { "code": str, "message": str, "detail": object } }
"""

from typing import Any


class SuperMallError(Exception):
    """Base class for expected, client-facing failures."""

    code = "ERROR"
    status_code = 400

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(SuperMallError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} not found", detail={"id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class InvalidReferenceError(SuperMallError):
    """A referenced shop/product/category id does not exist."""

    code = "INVALID_REFERENCE"

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"Invalid {entity.lower()} ID", detail={"field": entity.lower(), "id": entity_id})


class InvalidDiscountKind(SuperMallError):
    code = "INVALID_DISCOUNT_KIND"


class NegativeValue(SuperMallError):
    code = "NEGATIVE_VALUE"


class InvalidDateRange(SuperMallError):
    code = "INVALID_DATE_RANGE"


class InvalidUsageCap(SuperMallError):
    code = "INVALID_USAGE_CAP"


class DuplicateError(SuperMallError):
    code = "DUPLICATE"


class ComparisonError(SuperMallError):
    code = "INVALID_COMPARISON"


class OfferNotActive(SuperMallError):
    code = "OFFER_NOT_ACTIVE"
    status_code = 409


class UsageCapExceeded(SuperMallError):
    """Claim rejected: the offer already reached max_usage."""

    code = "USAGE_CAP_EXCEEDED"
    status_code = 409

    def __init__(self, offer_id: int) -> None:
        super().__init__("Offer usage limit reached", detail={"id": offer_id})
        self.offer_id = offer_id


class InvalidDiscountValue(SuperMallError):
    code = "INVALID_DISCOUNT_VALUE"


class AuthError(SuperMallError):
    code = "UNAUTHORIZED"
    status_code = 401
