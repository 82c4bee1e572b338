#!/usr/bin/env python3
"""Seed database with demo mall data.

Creates:
- Categories
- Shops on several floors
- Products (some marked down)
- Offers (percentage and fixed discounts, prices derived by services.pricing)
- Landing page banners

Seed script is idempotent: rows are looked up by name/title before insert.

Usage:
    python -m scripts.seed
"""

import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from supermall.models import Banner, Category, Offer, Product, Shop
from supermall.services.pricing import DiscountKind, price_offer
from supermall.settings import get_settings

load_dotenv()

# ============================================================
# Directory
# ============================================================

CATEGORIES = [
    {"name": "Fashion", "description": "Clothing, shoes and accessories"},
    {"name": "Electronics", "description": "Phones, laptops and gadgets"},
    {"name": "Food Court", "description": "Restaurants and cafes"},
]

SHOPS = [
    {"name": "Urban Threads", "category": "Fashion", "location": "Block A, Unit 12", "floor": 1},
    {"name": "Gadget Hub", "category": "Electronics", "location": "Block B, Unit 3", "floor": 2},
    {"name": "Bean There", "category": "Food Court", "location": "Atrium, Kiosk 4", "floor": 3},
]

PRODUCTS = [
    {
        "name": "Denim Jacket",
        "shop": "Urban Threads",
        "price": 79.0,
        "original_price": 99.0,
        "tags": ["denim", "outerwear"],
        "stock": 25,
        "is_on_offer": True,
    },
    {
        "name": "Wireless Earbuds",
        "shop": "Gadget Hub",
        "price": 149.0,
        "original_price": None,
        "tags": ["audio", "bluetooth"],
        "stock": 40,
        "is_on_offer": True,
    },
    {
        "name": "Cold Brew",
        "shop": "Bean There",
        "price": 4.5,
        "original_price": None,
        "tags": ["coffee"],
        "stock": 200,
        "is_on_offer": False,
    },
]

# ============================================================
# Promotions (windows relative to seeding time)
# ============================================================

OFFERS = [
    {
        "title": "Jacket Week",
        "product": "Denim Jacket",
        "discount_type": DiscountKind.PERCENTAGE,
        "discount_value": 20,
        "original_price": 99.0,
        "days": 7,
        "max_usage": 100,
    },
    {
        "title": "Earbuds $30 Off",
        "product": "Wireless Earbuds",
        "discount_type": DiscountKind.FIXED,
        "discount_value": 30,
        "original_price": 149.0,
        "days": 14,
        "max_usage": None,
    },
]

BANNERS = [
    {"title": "Autumn Fashion Sale", "shop": "Urban Threads", "priority": 8, "days": 30},
    {"title": "New Gadgets In Store", "shop": "Gadget Hub", "priority": 5, "days": 14},
]


async def seed_database() -> None:
    """Seed database with demo data."""
    engine = create_async_engine(get_settings().async_database_url, echo=False)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    now = datetime.now(timezone.utc)

    async with async_session() as session:
        print("Seeding database...")

        print("\nCreating categories...")
        category_map = await seed_categories(session)

        print("\nCreating shops...")
        shop_map = await seed_shops(session, category_map)

        print("\nCreating products...")
        product_map = await seed_products(session, shop_map)

        print("\nCreating offers...")
        await seed_offers(session, product_map, now)

        print("\nCreating banners...")
        await seed_banners(session, shop_map, now)

        await session.commit()
        print("\nDatabase seeded successfully!")

    await engine.dispose()


async def seed_categories(session: AsyncSession) -> dict[str, int]:
    """Seed categories and return mapping of name -> id."""
    category_map: dict[str, int] = {}

    for c in CATEGORIES:
        existing = (
            await session.execute(select(Category).where(Category.name == c["name"]))
        ).scalar_one_or_none()

        if existing:
            print(f"  - {c['name']} (exists)")
            category_map[c["name"]] = existing.id
        else:
            category = Category(name=c["name"], description=c["description"])
            session.add(category)
            await session.flush()
            category_map[c["name"]] = category.id
            print(f"  + {c['name']}")

    return category_map


async def seed_shops(session: AsyncSession, category_map: dict[str, int]) -> dict[str, Shop]:
    """Seed shops and return mapping of name -> shop."""
    shop_map: dict[str, Shop] = {}

    for s in SHOPS:
        existing = (await session.execute(select(Shop).where(Shop.name == s["name"]))).scalar_one_or_none()

        if existing:
            print(f"  - {s['name']} (exists)")
            shop_map[s["name"]] = existing
        else:
            shop = Shop(
                name=s["name"],
                category_id=category_map[s["category"]],
                location=s["location"],
                floor=s["floor"],
            )
            session.add(shop)
            await session.flush()
            shop_map[s["name"]] = shop
            print(f"  + {s['name']} (floor {s['floor']})")

    return shop_map


async def seed_products(session: AsyncSession, shop_map: dict[str, Shop]) -> dict[str, Product]:
    """Seed products and return mapping of name -> product."""
    product_map: dict[str, Product] = {}

    for p in PRODUCTS:
        existing = (
            await session.execute(select(Product).where(Product.name == p["name"]))
        ).scalar_one_or_none()

        if existing:
            print(f"  - {p['name']} (exists)")
            product_map[p["name"]] = existing
            continue

        shop = shop_map[p["shop"]]
        product = Product(
            name=p["name"],
            shop_id=shop.id,
            category_id=shop.category_id,
            price=p["price"],
            original_price=p["original_price"],
            tags=p["tags"],
            stock=p["stock"],
            is_on_offer=p["is_on_offer"],
        )
        session.add(product)
        await session.flush()
        product_map[p["name"]] = product
        print(f"  + {p['name']} ({p['price']:.2f})")

    return product_map


async def seed_offers(session: AsyncSession, product_map: dict[str, Product], now: datetime) -> None:
    """Seed offers with derived offer prices."""
    for o in OFFERS:
        existing = (await session.execute(select(Offer).where(Offer.title == o["title"]))).scalar_one_or_none()
        if existing:
            print(f"  - {o['title']} (exists)")
            continue

        product = product_map[o["product"]]
        offer = Offer(
            title=o["title"],
            shop_id=product.shop_id,
            product_id=product.id,
            discount_type=o["discount_type"],
            discount_value=o["discount_value"],
            original_price=o["original_price"],
            start_time=now,
            end_time=now + timedelta(days=o["days"]),
            max_usage=o["max_usage"],
            current_usage=0,
        )
        price_offer(offer)
        session.add(offer)
        print(f"  + {o['title']} ({offer.original_price:.2f} -> {offer.offer_price:.2f})")


async def seed_banners(session: AsyncSession, shop_map: dict[str, Shop], now: datetime) -> None:
    """Seed landing page banners."""
    for b in BANNERS:
        existing = (await session.execute(select(Banner).where(Banner.title == b["title"]))).scalar_one_or_none()
        if existing:
            print(f"  - {b['title']} (exists)")
            continue

        session.add(
            Banner(
                title=b["title"],
                image_url=f"/static/banners/{b['title'].lower().replace(' ', '-')}.jpg",
                shop_id=shop_map[b["shop"]].id,
                priority=b["priority"],
                start_time=now,
                end_time=now + timedelta(days=b["days"]),
            )
        )
        print(f"  + {b['title']} (priority {b['priority']})")


if __name__ == "__main__":
    asyncio.run(seed_database())
