"""Package catalog endpoint tests (locations, vehicles, fixed plans)."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_hotel_locations_city_filter(client: AsyncClient):
    """Test that locations are trimmed and filtered by city."""
    response = await client.post("/api/locations/hotels", json={"name": " Gulmarg ", "city": "Kashmir"})
    assert response.status_code == 201
    assert response.json()["name"] == "Gulmarg"
    await client.post("/api/locations/hotels", json={"name": "Baga", "city": "Goa"})

    response = await client.get("/api/locations/hotels", params={"city": "Kashmir"})
    assert [loc["name"] for loc in response.json()] == ["Gulmarg"]

    response = await client.get("/api/locations/hotels", params={"city": "all"})
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_vehicle_locations_and_vehicles(client: AsyncClient):
    location = (await client.post(
        "/api/locations/vehicles",
        json={"name": "Srinagar Airport", "city": "Kashmir", "rates": {"sedan": 2500}},
    )).json()
    assert location["rates"] == {"sedan": 2500}

    response = await client.post(
        "/api/vehicles",
        json={"vehicle_type": "Innova", "rate": 3500, "ac_extra": 500, "location_id": location["id"]},
    )
    assert response.status_code == 201

    response = await client.get("/api/vehicles", params={"location_id": location["id"]})
    assert [v["vehicle_type"] for v in response.json()] == ["Innova"]

    response = await client.get("/api/vehicles", params={"location_id": 999})
    assert response.json() == []


@pytest.mark.asyncio
async def test_vehicle_requires_location(client: AsyncClient):
    response = await client.post("/api/vehicles", json={"vehicle_type": "Innova", "location_id": 999})
    assert response.status_code == 404
    assert response.json()["detail"] == "Vehicle location not found"


@pytest.mark.asyncio
async def test_fixed_plan_chain(client: AsyncClient):
    """Test days, plans and priced options of a fixed plan."""
    await client.post("/api/fixed-days", json={"city": "Kashmir", "days": 6, "label": "6D/5N"})
    await client.post("/api/fixed-days", json={"city": "Kashmir", "days": 4, "label": "4D/3N"})
    response = await client.get("/api/fixed-days", params={"city": "Kashmir"})
    assert [d["days"] for d in response.json()] == [4, 6]

    location = (await client.post("/api/locations/fixed", json={"name": "Pahalgam", "city": "Kashmir"})).json()
    plan = (await client.post(
        "/api/fixed-plans",
        json={"city": "Kashmir", "fixed_location_id": location["id"], "name": "Valley Explorer"},
    )).json()

    response = await client.post(
        "/api/fixed-plan-options",
        json={
            "city": "Kashmir",
            "fixed_location_id": location["id"],
            "fixed_plan_id": plan["id"],
            "adults": 2,
            "price_per_person": 12500,
            "rooms_vehicle": "1 room, 1 sedan",
        },
    )
    assert response.status_code == 201

    response = await client.get("/api/fixed-plans", params={"location_id": location["id"]})
    assert [p["name"] for p in response.json()] == ["Valley Explorer"]

    response = await client.get("/api/fixed-plan-options", params={"plan_id": plan["id"]})
    options = response.json()
    assert len(options) == 1
    assert options[0]["price_per_person"] == 12500


@pytest.mark.asyncio
async def test_fixed_plan_validation(client: AsyncClient):
    response = await client.post(
        "/api/fixed-plans",
        json={"city": "Kashmir", "fixed_location_id": 999, "name": "Valley Explorer"},
    )
    assert response.status_code == 404

    response = await client.post(
        "/api/fixed-plan-options",
        json={"city": "Kashmir", "fixed_location_id": 1, "fixed_plan_id": 1, "adults": 0,
              "price_per_person": 100},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_catalog_lists_are_public(client: AsyncClient, anonymous):
    for path in ("/api/locations/hotels", "/api/locations/vehicles", "/api/locations/fixed",
                 "/api/vehicles", "/api/fixed-days", "/api/fixed-plans", "/api/fixed-plan-options"):
        response = await client.get(path)
        assert response.status_code == 200, path

    response = await client.post("/api/fixed-days", json={"city": "Kashmir", "days": 3})
    assert response.status_code == 401
