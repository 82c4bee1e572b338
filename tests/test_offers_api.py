"""Offer endpoints: derived pricing, activity filter and claims."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from conftest import ADMIN_HEADERS, NOW, make_offer


def _payload(product, **overrides) -> dict:
    body = {
        "title": "Jacket Week",
        "shop_id": product.shop_id,
        "product_id": product.id,
        "discount_type": "percentage",
        "discount_value": 20,
        "original_price": 100.0,
        "start_time": (NOW - timedelta(days=1)).isoformat(),
        "end_time": (NOW + timedelta(days=7)).isoformat(),
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_create_offer_derives_price(client: AsyncClient, product):
    response = await client.post("/api/offers", json=_payload(product), headers=ADMIN_HEADERS)
    assert response.status_code == 201
    data = response.json()
    assert data["offer_price"] == pytest.approx(80.0)
    assert data["current_usage"] == 0
    assert data["is_currently_active"] is True
    assert data["shop"]["id"] == product.shop_id
    assert data["product"]["id"] == product.id


@pytest.mark.asyncio
async def test_create_offer_ignores_client_offer_price(client: AsyncClient, product):
    body = _payload(product, discount_type="fixed", discount_value=30, original_price=20.0, offer_price=999)
    response = await client.post("/api/offers", json=body, headers=ADMIN_HEADERS)
    assert response.status_code == 201
    assert response.json()["offer_price"] == 0.0


@pytest.mark.asyncio
async def test_create_offer_requires_admin_key(client: AsyncClient, product):
    response = await client.post("/api/offers", json=_payload(product))
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"

    response = await client.post("/api/offers", json=_payload(product), headers={"X-Admin-Key": "wrong"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_offer_rejects_unknown_discount_type(client: AsyncClient, product):
    response = await client.post(
        "/api/offers", json=_payload(product, discount_type="bogo"), headers=ADMIN_HEADERS
    )
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert any("discount_type" in e["loc"] for e in error["detail"]["errors"])


@pytest.mark.asyncio
async def test_create_offer_rejects_percentage_over_100(client: AsyncClient, product):
    response = await client.post(
        "/api/offers", json=_payload(product, discount_value=150), headers=ADMIN_HEADERS
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DISCOUNT_VALUE"


@pytest.mark.asyncio
async def test_create_offer_rejects_negative_value(client: AsyncClient, product):
    response = await client.post(
        "/api/offers", json=_payload(product, discount_value=-5), headers=ADMIN_HEADERS
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_offer_rejects_inverted_window(client: AsyncClient, product):
    body = _payload(
        product,
        start_time=(NOW + timedelta(days=2)).isoformat(),
        end_time=(NOW + timedelta(days=1)).isoformat(),
    )
    response = await client.post("/api/offers", json=body, headers=ADMIN_HEADERS)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


@pytest.mark.asyncio
async def test_create_offer_rejects_unknown_shop(client: AsyncClient, product):
    response = await client.post(
        "/api/offers", json=_payload(product, shop_id=999), headers=ADMIN_HEADERS
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_REFERENCE"
    assert error["message"] == "Invalid shop ID"


@pytest.mark.asyncio
async def test_update_offer_rederives_price(client: AsyncClient, session, product):
    offer = await make_offer(session, product)
    assert offer.offer_price == pytest.approx(80.0)

    response = await client.put(
        f"/api/offers/{offer.id}",
        json={"discount_type": "fixed", "discount_value": 25},
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 200
    assert response.json()["offer_price"] == pytest.approx(75.0)

    response = await client.put(
        f"/api/offers/{offer.id}", json={"original_price": 40.0}, headers=ADMIN_HEADERS
    )
    assert response.json()["offer_price"] == pytest.approx(15.0)


@pytest.mark.asyncio
async def test_update_offer_rejects_cap_below_usage(client: AsyncClient, session, product):
    offer = await make_offer(session, product, max_usage=10, current_usage=4)
    response = await client.put(f"/api/offers/{offer.id}", json={"max_usage": 3}, headers=ADMIN_HEADERS)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_USAGE_CAP"


@pytest.mark.asyncio
async def test_update_offer_can_clear_cap(client: AsyncClient, session, product):
    offer = await make_offer(session, product, max_usage=1, current_usage=1)
    response = await client.put(f"/api/offers/{offer.id}", json={"max_usage": None}, headers=ADMIN_HEADERS)
    assert response.status_code == 200
    assert response.json()["max_usage"] is None
    assert response.json()["is_currently_active"] is True


@pytest.mark.asyncio
async def test_update_offer_rechecks_merged_window(client: AsyncClient, session, product):
    offer = await make_offer(session, product)
    response = await client.put(
        f"/api/offers/{offer.id}",
        json={"start_time": (NOW + timedelta(days=5)).isoformat()},
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


@pytest.mark.asyncio
async def test_list_active_offers(client: AsyncClient, session, product):
    active = await make_offer(session, product, title="Active")
    await make_offer(
        session,
        product,
        title="Expired",
        start_time=NOW - timedelta(days=10),
        end_time=NOW - timedelta(days=1),
    )
    await make_offer(session, product, title="Used up", max_usage=1, current_usage=1)
    await make_offer(session, product, title="Disabled", enabled=False)

    response = await client.get("/api/offers", params={"active": "true"})
    assert response.status_code == 200
    data = response.json()
    assert [o["id"] for o in data["offers"]] == [active.id]
    assert data["pagination"] == {"current": 1, "pages": 1, "total": 1}

    response = await client.get("/api/offers")
    offers = response.json()["offers"]
    assert len(offers) == 4
    flags = {o["title"]: o["is_currently_active"] for o in offers}
    assert flags == {"Active": True, "Expired": False, "Used up": False, "Disabled": False}


@pytest.mark.asyncio
async def test_list_offers_paginates(client: AsyncClient, session, product):
    for i in range(5):
        await make_offer(session, product, title=f"Offer {i}")

    response = await client.get("/api/offers", params={"page": 2, "limit": 2})
    data = response.json()
    assert len(data["offers"]) == 2
    assert data["pagination"] == {"current": 2, "pages": 3, "total": 5}


@pytest.mark.asyncio
async def test_claim_until_cap(client: AsyncClient, session, product):
    offer = await make_offer(session, product, max_usage=2)

    for expected in (1, 2):
        response = await client.post(f"/api/offers/{offer.id}/claim")
        assert response.status_code == 200
        assert response.json()["current_usage"] == expected
        assert response.json()["max_usage"] == 2

    response = await client.post(f"/api/offers/{offer.id}/claim")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "USAGE_CAP_EXCEEDED"

    response = await client.get(f"/api/offers/{offer.id}")
    assert response.json()["current_usage"] == 2
    assert response.json()["is_currently_active"] is False


@pytest.mark.asyncio
async def test_claim_expired_offer(client: AsyncClient, session, product):
    offer = await make_offer(
        session,
        product,
        start_time=NOW - timedelta(days=10),
        end_time=NOW - timedelta(seconds=1),
    )
    response = await client.post(f"/api/offers/{offer.id}/claim")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "OFFER_NOT_ACTIVE"


@pytest.mark.asyncio
async def test_claim_missing_offer(client: AsyncClient):
    response = await client.post("/api/offers/999/claim")
    assert response.status_code == 404
    assert response.json() == {
        "error": {"code": "NOT_FOUND", "message": "Offer not found", "detail": {"id": 999}}
    }


@pytest.mark.asyncio
async def test_delete_offer_disables_it(client: AsyncClient, session, product):
    offer = await make_offer(session, product)
    response = await client.delete(f"/api/offers/{offer.id}", headers=ADMIN_HEADERS)
    assert response.status_code == 200
    assert response.json() == {"message": "Offer deleted successfully"}

    response = await client.get(f"/api/offers/{offer.id}")
    assert response.json()["enabled"] is False
    assert response.json()["is_currently_active"] is False

    response = await client.get(f"/api/shops/{product.shop_id}/offers")
    assert response.json()["offers"] == []
