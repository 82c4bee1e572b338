"""Categories, shops and products."""

import pytest
from httpx import AsyncClient

from conftest import ADMIN_HEADERS, make_category, make_product, make_shop


@pytest.mark.asyncio
async def test_create_and_list_categories(client: AsyncClient):
    for name in ("Fashion", "Electronics"):
        response = await client.post("/api/categories", json={"name": name}, headers=ADMIN_HEADERS)
        assert response.status_code == 201

    response = await client.get("/api/categories")
    assert response.status_code == 200
    data = response.json()
    assert {c["name"] for c in data["categories"]} == {"Fashion", "Electronics"}
    assert data["pagination"] == {"current": 1, "pages": 1, "total": 2}


@pytest.mark.asyncio
async def test_duplicate_category_name_is_case_insensitive(client: AsyncClient, session):
    await make_category(session, "Fashion")
    response = await client.post("/api/categories", json={"name": "fashion"}, headers=ADMIN_HEADERS)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "DUPLICATE"


@pytest.mark.asyncio
async def test_deleted_category_is_hidden(client: AsyncClient, session):
    category = await make_category(session)
    response = await client.delete(f"/api/categories/{category.id}", headers=ADMIN_HEADERS)
    assert response.json() == {"message": "Category deleted successfully"}

    response = await client.get(f"/api/categories/{category.id}")
    assert response.status_code == 404
    assert (await client.get("/api/categories")).json()["categories"] == []


@pytest.mark.asyncio
async def test_shop_filters(client: AsyncClient, session):
    fashion = await make_category(session, "Fashion")
    food = await make_category(session, "Food Court")
    threads = await make_shop(session, fashion, "Urban Threads", floor=1)
    beans = await make_shop(session, food, "Bean There", floor=3, location="Atrium, Kiosk 4")

    response = await client.get("/api/shops", params={"floor": 3})
    assert [s["id"] for s in response.json()["shops"]] == [beans.id]

    response = await client.get("/api/shops", params={"category": fashion.id})
    assert [s["id"] for s in response.json()["shops"]] == [threads.id]

    response = await client.get("/api/shops", params={"search": "atrium"})
    assert [s["id"] for s in response.json()["shops"]] == [beans.id]

    response = await client.get("/api/shops/floor/1")
    assert [s["name"] for s in response.json()["shops"]] == ["Urban Threads"]

    response = await client.get(f"/api/shops/category/{food.id}")
    assert [s["name"] for s in response.json()["shops"]] == ["Bean There"]


@pytest.mark.asyncio
async def test_create_shop_validates_category_and_floor(client: AsyncClient, session):
    category = await make_category(session)
    body = {"name": "Gadget Hub", "category_id": category.id, "location": "Block B", "floor": 2}

    response = await client.post("/api/shops", json=body, headers=ADMIN_HEADERS)
    assert response.status_code == 201
    assert response.json()["category"] == {"id": category.id, "name": category.name}
    assert response.json()["opens_at"] == "09:00"

    response = await client.post("/api/shops", json={**body, "category_id": 999}, headers=ADMIN_HEADERS)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REFERENCE"

    response = await client.post("/api/shops", json={**body, "floor": 0}, headers=ADMIN_HEADERS)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_product_filters(client: AsyncClient, session, shop):
    jacket = await make_product(session, shop, "Denim Jacket", price=79.0, tags=["denim"], is_on_offer=True)
    await make_product(session, shop, "Silk Scarf", price=25.0, original_price=None, tags=["silk"])

    response = await client.get("/api/products", params={"search": "DENIM"})
    assert [p["id"] for p in response.json()["products"]] == [jacket.id]

    response = await client.get("/api/products", params={"min_price": 50})
    assert [p["id"] for p in response.json()["products"]] == [jacket.id]

    response = await client.get("/api/products", params={"on_offer": "true"})
    products = response.json()["products"]
    assert [p["id"] for p in products] == [jacket.id]
    assert products[0]["discount_percentage"] == 20

    response = await client.get("/api/products", params={"max_price": 30})
    assert [p["name"] for p in response.json()["products"]] == ["Silk Scarf"]


@pytest.mark.asyncio
async def test_compare_products(client: AsyncClient, session, shop):
    ids = [(await make_product(session, shop, f"Product {i}")).id for i in range(5)]

    response = await client.post("/api/products/compare", json={"product_ids": [ids[2], ids[0]]})
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["products"]] == [ids[2], ids[0]]

    response = await client.post("/api/products/compare", json={"product_ids": ids[:1]})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_COMPARISON"

    response = await client.post("/api/products/compare", json={"product_ids": ids})
    assert response.status_code == 400

    response = await client.post("/api/products/compare", json={"product_ids": [ids[0], ids[0]]})
    assert response.status_code == 400

    response = await client.post("/api/products/compare", json={"product_ids": [ids[0], 999]})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_deleted_product_is_hidden(client: AsyncClient, session, shop):
    product = await make_product(session, shop)
    response = await client.delete(f"/api/products/{product.id}", headers=ADMIN_HEADERS)
    assert response.status_code == 200

    assert (await client.get(f"/api/products/{product.id}")).status_code == 404
    assert (await client.get(f"/api/shops/{shop.id}/products")).json()["products"] == []


@pytest.mark.asyncio
async def test_update_product_partial(client: AsyncClient, session, shop):
    product = await make_product(session, shop)
    response = await client.put(
        f"/api/products/{product.id}",
        json={"price": 89.0, "original_price": None},
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["price"] == 89.0
    assert data["original_price"] is None
    assert data["name"] == "Denim Jacket"
    assert data["discount_percentage"] == 0
