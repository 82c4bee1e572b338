"""Shop model.

A shop occupies a location on a mall floor and belongs to one category.
Offers, products and banners reference shops by id (no cascading delete).
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from supermall.models.category import Category
from supermall.stores.postgres import Base


class Shop(Base):
    """Shop in the mall directory."""

    __tablename__ = "shops"
    __table_args__ = (
        CheckConstraint("floor >= 1", name="ck_shops_floor_positive"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_shops_rating_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str | None] = mapped_column(Text)

    # Relations
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), index=True)

    # Location
    location: Mapped[str] = mapped_column(String(200))  # e.g. "Block A, Unit 12"
    floor: Mapped[int] = mapped_column(index=True)

    # Contact
    contact_number: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(200))
    image: Mapped[str] = mapped_column(Text, default="")

    # Operating hours ("HH:MM")
    opens_at: Mapped[str] = mapped_column(String(5), default="09:00")
    closes_at: Mapped[str] = mapped_column(String(5), default="21:00")

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

    category: Mapped[Category] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Shop {self.name} (floor {self.floor})>"
