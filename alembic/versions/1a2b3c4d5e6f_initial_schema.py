"""initial_schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "1a2b3c4d5e6f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_categories_name"), "categories", ["name"], unique=True)
    op.create_index(op.f("ix_categories_is_active"), "categories", ["is_active"], unique=False)

    op.create_table(
        "shops",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=False),
        sa.Column("floor", sa.Integer(), nullable=False),
        sa.Column("contact_number", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=200), nullable=True),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("opens_at", sa.String(length=5), nullable=False),
        sa.Column("closes_at", sa.String(length=5), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("total_ratings", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("floor >= 1", name="ck_shops_floor_positive"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_shops_rating_range"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_shops_name"), "shops", ["name"], unique=False)
    op.create_index(op.f("ix_shops_category_id"), "shops", ["category_id"], unique=False)
    op.create_index(op.f("ix_shops_floor"), "shops", ["floor"], unique=False)
    op.create_index(op.f("ix_shops_is_active"), "shops", ["is_active"], unique=False)

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("original_price", sa.Float(), nullable=True),
        sa.Column("shop_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("features", sa.JSON(), nullable=False),
        sa.Column("specifications", sa.JSON(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.Column("is_on_offer", sa.Boolean(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("total_ratings", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        sa.CheckConstraint(
            "original_price IS NULL OR original_price >= 0",
            name="ck_products_original_price_non_negative",
        ),
        sa.CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        sa.ForeignKeyConstraint(["shop_id"], ["shops.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_products_name"), "products", ["name"], unique=False)
    op.create_index(op.f("ix_products_price"), "products", ["price"], unique=False)
    op.create_index(op.f("ix_products_shop_id"), "products", ["shop_id"], unique=False)
    op.create_index(op.f("ix_products_category_id"), "products", ["category_id"], unique=False)
    op.create_index(op.f("ix_products_is_on_offer"), "products", ["is_on_offer"], unique=False)
    op.create_index(op.f("ix_products_is_active"), "products", ["is_active"], unique=False)

    discount_kind = sa.Enum("percentage", "fixed", name="discount_kind")

    op.create_table(
        "offers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("terms", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("shop_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("discount_type", discount_kind, nullable=False),
        sa.Column("discount_value", sa.Float(), nullable=False),
        sa.Column("original_price", sa.Float(), nullable=False),
        sa.Column("offer_price", sa.Float(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("max_usage", sa.Integer(), nullable=True),
        sa.Column("current_usage", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("discount_value >= 0", name="ck_offers_discount_value_non_negative"),
        sa.CheckConstraint("original_price >= 0", name="ck_offers_original_price_non_negative"),
        sa.CheckConstraint("offer_price >= 0", name="ck_offers_offer_price_non_negative"),
        sa.CheckConstraint("current_usage >= 0", name="ck_offers_current_usage_non_negative"),
        sa.CheckConstraint(
            "max_usage IS NULL OR current_usage <= max_usage",
            name="ck_offers_usage_within_cap",
        ),
        sa.CheckConstraint("end_time > start_time", name="ck_offers_window"),
        sa.ForeignKeyConstraint(["shop_id"], ["shops.id"]),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_offers_shop_id"), "offers", ["shop_id"], unique=False)
    op.create_index(op.f("ix_offers_product_id"), "offers", ["product_id"], unique=False)
    op.create_index("ix_offers_window", "offers", ["enabled", "start_time", "end_time"], unique=False)

    op.create_table(
        "banners",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("link_url", sa.Text(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("shop_id", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("impression_count", sa.Integer(), nullable=False),
        sa.Column("click_count", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("priority >= 0 AND priority <= 10", name="ck_banners_priority_range"),
        sa.CheckConstraint("impression_count >= 0", name="ck_banners_impressions_non_negative"),
        sa.CheckConstraint("click_count >= 0", name="ck_banners_clicks_non_negative"),
        sa.ForeignKeyConstraint(["shop_id"], ["shops.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_banners_shop_id"), "banners", ["shop_id"], unique=False)
    op.create_index(
        "ix_banners_display",
        "banners",
        ["enabled", "start_time", "end_time", "priority"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_banners_display", table_name="banners")
    op.drop_index(op.f("ix_banners_shop_id"), table_name="banners")
    op.drop_table("banners")

    op.drop_index("ix_offers_window", table_name="offers")
    op.drop_index(op.f("ix_offers_product_id"), table_name="offers")
    op.drop_index(op.f("ix_offers_shop_id"), table_name="offers")
    op.drop_table("offers")
    sa.Enum(name="discount_kind").drop(op.get_bind(), checkfirst=True)

    for name in ("is_active", "is_on_offer", "category_id", "shop_id", "price", "name"):
        op.drop_index(op.f(f"ix_products_{name}"), table_name="products")
    op.drop_table("products")

    for name in ("is_active", "floor", "category_id", "name"):
        op.drop_index(op.f(f"ix_shops_{name}"), table_name="shops")
    op.drop_table("shops")

    op.drop_index(op.f("ix_categories_is_active"), table_name="categories")
    op.drop_index(op.f("ix_categories_name"), table_name="categories")
    op.drop_table("categories")
