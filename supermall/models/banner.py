"""Banner model.

A time-bounded promotional image/link on the landing page, ranked by priority.
Impression and click counters only ever grow (services.counters).
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from supermall.models.shop import Shop
from supermall.stores.postgres import Base


class Banner(Base):
    """Advertising banner."""

    __tablename__ = "banners"
    __table_args__ = (
        CheckConstraint("priority >= 0 AND priority <= 10", name="ck_banners_priority_range"),
        CheckConstraint("impression_count >= 0", name="ck_banners_impressions_non_negative"),
        CheckConstraint("click_count >= 0", name="ck_banners_clicks_non_negative"),
        Index("ix_banners_display", "enabled", "start_time", "end_time", "priority"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)

    # Display
    image_url: Mapped[str] = mapped_column(Text)
    link_url: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[int] = mapped_column(default=0)

    # Relations
    shop_id: Mapped[int] = mapped_column(ForeignKey("shops.id"), index=True)

    # Activity window
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    enabled: Mapped[bool] = mapped_column(default=True)

    # Counters
    impression_count: Mapped[int] = mapped_column(default=0)
    click_count: Mapped[int] = mapped_column(default=0)

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

    def __repr__(self) -> str:
        return f"<Banner {self.id} {self.title!r} p={self.priority}>"
