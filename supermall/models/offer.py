"""Offer model.

A time-bounded discount on a specific product at a specific shop.
`offer_price` is always re-derived by services.pricing.price_offer() on write.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from supermall.models.product import Product
from supermall.models.shop import Shop
from supermall.services.pricing import DiscountKind
from supermall.stores.postgres import Base


class Offer(Base):
    """Promotional offer on a product."""

    __tablename__ = "offers"
    __table_args__ = (
        CheckConstraint("discount_value >= 0", name="ck_offers_discount_value_non_negative"),
        CheckConstraint("original_price >= 0", name="ck_offers_original_price_non_negative"),
        CheckConstraint("offer_price >= 0", name="ck_offers_offer_price_non_negative"),
        CheckConstraint("current_usage >= 0", name="ck_offers_current_usage_non_negative"),
        CheckConstraint(
            "max_usage IS NULL OR current_usage <= max_usage",
            name="ck_offers_usage_within_cap",
        ),
        CheckConstraint("end_time > start_time", name="ck_offers_window"),
        Index("ix_offers_window", "enabled", "start_time", "end_time"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    terms: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str] = mapped_column(Text, default="")

    # Relations (weak references; deleting a shop does not cascade)
    shop_id: Mapped[int] = mapped_column(ForeignKey("shops.id"), index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), index=True)

    # Pricing
    discount_type: Mapped[DiscountKind] = mapped_column(
        Enum(
            DiscountKind,
            name="discount_kind",
            values_callable=lambda kinds: [k.value for k in kinds],
        )
    )
    discount_value: Mapped[float] = mapped_column()
    original_price: Mapped[float] = mapped_column()
    offer_price: Mapped[float] = mapped_column()

    # Activity window
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    enabled: Mapped[bool] = mapped_column(default=True)

    # Usage cap (None = unlimited)
    max_usage: Mapped[int | None] = mapped_column()
    current_usage: Mapped[int] = mapped_column(default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    shop: Mapped[Shop] = relationship(lazy="selectin")
    product: Mapped[Product] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Offer {self.id} {self.title!r} {self.offer_price:.2f}>"
