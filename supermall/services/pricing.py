"""Offer pricing rules.

An offer's sale price is derived from its discount rule and original price:
- Percentage(v): original - original * v / 100 (no clamp, see below)
- Fixed(v): max(0, original - v)

The write path calls price_offer() before every persist, so offer_price is
never stored independently of discount_type / discount_value / original_price.

Percentages above 100 would yield a negative price. They are rejected when
requests are validated; the evaluator itself does not clamp them.
"""

from dataclasses import dataclass
from enum import Enum
import math
from typing import Protocol

from supermall.services.errors import InvalidDiscountKind, NegativeValue


class DiscountKind(str, Enum):
    """Persisted discount type values."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class Percentage:
    """Percentage off the original price."""

    value: float


@dataclass(frozen=True)
class Fixed:
    """Fixed amount off the original price."""

    value: float


Discount = Percentage | Fixed


class PricedOffer(Protocol):
    discount_type: str
    discount_value: float
    original_price: float
    offer_price: float


def compute_offer_price(discount: Discount, original_price: float) -> float:
    """Compute the effective sale price.

    Args:
        discount: Percentage(v) or Fixed(v), v >= 0.
        original_price: Price before discount, >= 0.

    Returns:
        Sale price. Fixed discounts clamp at zero; percentages do not.
    """
    if isinstance(discount, Percentage):
        return original_price - original_price * discount.value / 100
    if isinstance(discount, Fixed):
        return max(0.0, original_price - discount.value)
    raise InvalidDiscountKind(f"Unsupported discount: {discount!r}")


def discount_from_fields(kind: str | DiscountKind, value: float) -> Discount:
    """Build a Discount from its persisted (discount_type, discount_value) pair.

    Raises:
        InvalidDiscountKind: kind is neither "percentage" nor "fixed".
        NegativeValue: value < 0.
    """
    try:
        kind = DiscountKind(kind)
    except ValueError:
        raise InvalidDiscountKind(
            "Discount type must be percentage or fixed",
            detail={"discount_type": str(kind)},
        )
    if value < 0:
        raise NegativeValue("Discount value cannot be negative", detail={"discount_value": value})

    if kind is DiscountKind.PERCENTAGE:
        return Percentage(float(value))
    return Fixed(float(value))


def price_offer(offer: PricedOffer) -> float:
    """Re-derive offer.offer_price from its discount fields and original price.

    Returns:
        The new offer price (also written onto the offer).
    """
    if offer.original_price < 0:
        raise NegativeValue("Original price cannot be negative", detail={"original_price": offer.original_price})

    discount = discount_from_fields(offer.discount_type, offer.discount_value)
    offer.offer_price = compute_offer_price(discount, offer.original_price)
    return offer.offer_price


def product_discount_percentage(price: float, original_price: float | None) -> int:
    """Whole-number markdown of a product against its original price (0 if none)."""
    if original_price and original_price > price:
        # Halves round up
        return math.floor((original_price - price) / original_price * 100 + 0.5)
    return 0
