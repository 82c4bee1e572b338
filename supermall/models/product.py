"""Product model.

Products are listed by a shop under a category. `original_price` is the
pre-markdown price used to advertise a discount percentage.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from supermall.models.category import Category
from supermall.models.shop import Shop
from supermall.services.pricing import product_discount_percentage
from supermall.stores.postgres import Base


class Product(Base):
    """Product sold by a shop."""

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint(
            "original_price IS NULL OR original_price >= 0",
            name="ck_products_original_price_non_negative",
        ),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str | None] = mapped_column(Text)

    # Pricing
    price: Mapped[float] = mapped_column(index=True)
    original_price: Mapped[float | None] = mapped_column()

    # Relations
    shop_id: Mapped[int] = mapped_column(ForeignKey("shops.id"), index=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), index=True)

    # Content (JSON arrays/objects)
    images: Mapped[list[str]] = mapped_column(JSON, default=list)
    features: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)  # [{"name", "value"}]
    specifications: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)

    stock: Mapped[int] = mapped_column(default=0)
    is_on_offer: Mapped[bool] = mapped_column(default=False, index=True)

    rating: Mapped[float] = mapped_column(default=0)
    total_ratings: Mapped[int] = mapped_column(default=0)

    is_active: Mapped[bool] = mapped_column(default=True, index=True)

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
    category: Mapped[Category] = relationship(lazy="selectin")

    @property
    def discount_percentage(self) -> int:
        return product_discount_percentage(self.price, self.original_price)

    def __repr__(self) -> str:
        return f"<Product {self.name} {self.price:.2f}>"
