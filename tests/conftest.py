"""Test suite configuration.

Every test gets a fresh in-memory SQLite database. API tests run the real app
over ASGITransport with the database session, clock and settings overridden.
Redis is never initialised, so the category cache falls through to the DB.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from supermall.main import app
from supermall.models import Banner, Category, Offer, Product, Shop
from supermall.routes.deps import utcnow
from supermall.services.pricing import DiscountKind, price_offer
from supermall.settings import Settings, get_settings
from supermall.stores.postgres import Base, get_db

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)
ADMIN_KEY = "test-admin-key"
ADMIN_HEADERS = {"X-Admin-Key": ADMIN_KEY}


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """In-memory database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s


@pytest.fixture
def test_settings() -> Settings:
    return Settings(ADMIN_API_KEY=ADMIN_KEY)


@pytest.fixture
async def client(session_factory, test_settings) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[utcnow] = lambda: NOW
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


# ============================================================
# Data builders
# ============================================================


async def make_category(session: AsyncSession, name: str = "Fashion", **kwargs) -> Category:
    category = Category(name=name, **kwargs)
    session.add(category)
    await session.commit()
    return category


async def make_shop(session: AsyncSession, category: Category, name: str = "Urban Threads", **kwargs) -> Shop:
    fields = {"location": "Block A, Unit 12", "floor": 1}
    fields.update(kwargs)
    shop = Shop(name=name, category_id=category.id, **fields)
    session.add(shop)
    await session.commit()
    return shop


async def make_product(session: AsyncSession, shop: Shop, name: str = "Denim Jacket", **kwargs) -> Product:
    fields = {"price": 79.0, "original_price": 99.0, "tags": ["denim"]}
    fields.update(kwargs)
    product = Product(name=name, shop_id=shop.id, category_id=shop.category_id, **fields)
    session.add(product)
    await session.commit()
    return product


async def make_offer(session: AsyncSession, product: Product, **kwargs) -> Offer:
    fields = {
        "title": "Jacket Week",
        "discount_type": DiscountKind.PERCENTAGE,
        "discount_value": 20.0,
        "original_price": 100.0,
        "start_time": NOW - timedelta(days=1),
        "end_time": NOW + timedelta(days=1),
        "enabled": True,
        "max_usage": None,
        "current_usage": 0,
    }
    fields.update(kwargs)
    offer = Offer(shop_id=product.shop_id, product_id=product.id, **fields)
    price_offer(offer)
    session.add(offer)
    await session.commit()
    return offer


async def make_banner(session: AsyncSession, shop: Shop, title: str = "Autumn Sale", **kwargs) -> Banner:
    fields = {
        "image_url": "/static/banners/autumn.jpg",
        "priority": 5,
        "start_time": NOW - timedelta(days=1),
        "end_time": NOW + timedelta(days=1),
        "enabled": True,
    }
    fields.update(kwargs)
    banner = Banner(title=title, shop_id=shop.id, **fields)
    session.add(banner)
    await session.commit()
    return banner


@pytest.fixture
async def shop(session) -> Shop:
    category = await make_category(session)
    return await make_shop(session, category)


@pytest.fixture
async def product(session, shop) -> Product:
    return await make_product(session, shop)
