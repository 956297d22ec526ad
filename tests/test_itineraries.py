"""Itinerary, day, event and quotation tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.api.deps import get_current_user
from travloger.models.itinerary import ItineraryDay, ItineraryEvent
from travloger.models.lead import Lead


async def _itinerary(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "Kashmir Honeymoon", "destinations": "Srinagar, Gulmarg", "adults": 2, **overrides}
    response = await client.post("/api/itineraries", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _day(client: AsyncClient, itinerary_id: int, **payload) -> dict:
    response = await client.post(f"/api/itineraries/{itinerary_id}/days", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _event(client: AsyncClient, day_id: int, **payload) -> dict:
    response = await client.post(f"/api/itineraries/days/{day_id}/events", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestItineraries:
    @pytest.mark.asyncio
    async def test_create_defaults(self, client: AsyncClient):
        itinerary = await _itinerary(client)
        assert itinerary["status"] == "pending"
        assert itinerary["confirmed_at"] is None
        assert itinerary["price"] == 0

    @pytest.mark.asyncio
    async def test_confirm_stamps_confirmed_at(self, client: AsyncClient):
        """Test that confirming an itinerary records when it happened."""
        itinerary = await _itinerary(client)

        response = await client.put(f"/api/itineraries/{itinerary['id']}", json={"status": "confirmed"})
        assert response.status_code == 200
        confirmed = response.json()
        assert confirmed["status"] == "confirmed"
        assert confirmed["confirmed_at"] is not None

        response = await client.put(f"/api/itineraries/{itinerary['id']}", json={"notes": "Window seats"})
        assert response.json()["confirmed_at"] == confirmed["confirmed_at"]

    @pytest.mark.asyncio
    async def test_list_filters(self, client: AsyncClient, db_session: AsyncSession):
        lead = Lead(name="Asha", email="asha@example.com", phone="1")
        db_session.add(lead)
        await db_session.commit()
        await _itinerary(client, lead_id=lead.id)
        await _itinerary(client, status="confirmed")

        response = await client.get("/api/itineraries", params={"lead_id": lead.id})
        assert response.json()["total"] == 1

        response = await client.get("/api/itineraries", params={"status_filter": "confirmed"})
        assert response.json()["total"] == 1

        response = await client.get("/api/itineraries")
        assert response.json()["total"] == 2

    @pytest.mark.asyncio
    async def test_unknown_lead(self, client: AsyncClient):
        response = await client.post(
            "/api/itineraries",
            json={"name": "X", "destinations": "Goa", "lead_id": 999},
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Lead not found"

    @pytest.mark.asyncio
    async def test_delete_cascades(self, client: AsyncClient, db_session: AsyncSession):
        """Test that deleting an itinerary removes its days and events."""
        itinerary = await _itinerary(client)
        day = await _day(client, itinerary["id"])
        await _event(client, day["id"], title="Shikara ride")

        response = await client.delete(f"/api/itineraries/{itinerary['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/itineraries/{itinerary['id']}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Itinerary not found"

        result = await db_session.execute(select(ItineraryDay))
        assert result.scalars().all() == []
        result = await db_session.execute(select(ItineraryEvent))
        assert result.scalars().all() == []


class TestDaysAndEvents:
    @pytest.mark.asyncio
    async def test_day_numbers_auto_increment(self, client: AsyncClient):
        itinerary = await _itinerary(client)
        first = await _day(client, itinerary["id"], title="Arrival")
        second = await _day(client, itinerary["id"], title="Gulmarg", date="2026-12-21")

        assert first["day_number"] == 1
        assert second["day_number"] == 2
        assert second["date"] == "2026-12-21"

        response = await client.get(f"/api/itineraries/{itinerary['id']}/days")
        assert [d["title"] for d in response.json()] == ["Arrival", "Gulmarg"]

    @pytest.mark.asyncio
    async def test_event_sort_order(self, client: AsyncClient):
        """Test that events without a sort order go to the end of the day."""
        itinerary = await _itinerary(client)
        day = await _day(client, itinerary["id"])

        first = await _event(client, day["id"], title="Pickup")
        second = await _event(client, day["id"], title="Check-in")
        pinned = await _event(client, day["id"], title="Breakfast", sort_order=-1)

        assert first["sort_order"] == 0
        assert second["sort_order"] == 1

        response = await client.get(f"/api/itineraries/days/{day['id']}/events")
        assert [e["id"] for e in response.json()] == [pinned["id"], first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client: AsyncClient):
        itinerary = await _itinerary(client)
        day = await _day(client, itinerary["id"])
        event = await _event(client, day["id"])
        assert event["title"] == "New Event"

        response = await client.put(f"/api/itineraries/days/{day['id']}", json={"location": "Srinagar"})
        assert response.json()["location"] == "Srinagar"

        response = await client.put(f"/api/itineraries/events/{event['id']}", json={"event_data": {"price": "1500"}})
        assert response.json()["price"] == 1500

        response = await client.delete(f"/api/itineraries/events/{event['id']}")
        assert response.status_code == 204
        response = await client.put(f"/api/itineraries/events/{event['id']}", json={"title": "Gone"})
        assert response.status_code == 404

        response = await client.delete(f"/api/itineraries/days/{day['id']}")
        assert response.status_code == 204
        response = await client.put(f"/api/itineraries/days/{day['id']}", json={"title": "Gone"})
        assert response.json()["detail"] == "Day not found"

    @pytest.mark.asyncio
    async def test_updates_refuse_null_required_fields(self, client: AsyncClient):
        """Test that itineraries, days and events keep their required columns."""
        itinerary = await _itinerary(client)
        day = await _day(client, itinerary["id"], title="Arrival")
        event = await _event(client, day["id"], title="Airport pickup")

        response = await client.put(f"/api/itineraries/{itinerary['id']}", json={"destinations": None})
        assert response.status_code == 422
        assert response.json()["detail"] == "destinations cannot be null"

        response = await client.put(f"/api/itineraries/days/{day['id']}", json={"day_number": None})
        assert response.status_code == 422

        response = await client.put(f"/api/itineraries/events/{event['id']}", json={"title": None})
        assert response.status_code == 422

        # Optional columns can still be cleared
        response = await client.put(f"/api/itineraries/days/{day['id']}", json={"title": None})
        assert response.status_code == 200
        assert response.json()["title"] is None

        response = await client.get(f"/api/itineraries/{itinerary['id']}/events")
        assert [e["title"] for e in response.json()] == ["Airport pickup"]

    @pytest.mark.asyncio
    async def test_itinerary_events_ordered_across_days(self, client: AsyncClient):
        itinerary = await _itinerary(client)
        day_two = await _day(client, itinerary["id"], day_number=2)
        day_one = await _day(client, itinerary["id"], day_number=1)
        late = await _event(client, day_two["id"], title="Gondola")
        early = await _event(client, day_one["id"], title="Airport pickup")

        response = await client.get(f"/api/itineraries/{itinerary['id']}/events")
        assert [e["id"] for e in response.json()] == [early["id"], late["id"]]


def test_event_price_parsing():
    assert ItineraryEvent(event_data={"price": 1200}).price == 1200
    assert ItineraryEvent(event_data={"price": "99.5"}).price == 99.5
    assert ItineraryEvent(event_data={"price": "free"}).price == 0
    assert ItineraryEvent(event_data={"price": ""}).price == 0
    assert ItineraryEvent(event_data=None).price == 0


class TestQuotation:
    @pytest.mark.asyncio
    async def test_quotation_totals_event_prices(self, client: AsyncClient, app, db_session: AsyncSession):
        """Test that the public quote sums event prices and attaches the lead."""
        lead = Lead(name="Asha Mehta", email="asha@example.com", phone="9876543210")
        db_session.add(lead)
        await db_session.commit()

        itinerary = await _itinerary(client, lead_id=lead.id)
        day = await _day(client, itinerary["id"])
        await _event(client, day["id"], title="Houseboat", event_data={"price": 8000})
        await _event(client, day["id"], title="Shikara", event_data={"price": "1499.50"})
        await _event(client, day["id"], title="Free walk")

        app.dependency_overrides.pop(get_current_user)

        response = await client.get(f"/api/quotation/{itinerary['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["total_price"] == 9499.5
        assert len(data["events"]) == 3
        assert data["lead"]["name"] == "Asha Mehta"

    @pytest.mark.asyncio
    async def test_quotation_query_id_overrides_lead(self, client: AsyncClient):
        itinerary = await _itinerary(client)

        response = await client.get(f"/api/quotation/{itinerary['id']}", params={"query_id": 999})
        assert response.status_code == 200
        data = response.json()
        assert data["lead"] is None
        assert data["total_price"] == 0

    @pytest.mark.asyncio
    async def test_quotation_falls_back_to_itinerary_price(self, client: AsyncClient):
        """Test that an itinerary without priced events is quoted at its own price."""
        itinerary = await _itinerary(client, price=45000)
        day = await _day(client, itinerary["id"])
        await _event(client, day["id"], title="Free walk")

        response = await client.get(f"/api/quotation/{itinerary['id']}")
        assert response.json()["total_price"] == 45000

        await _event(client, day["id"], title="Houseboat", event_data={"price": 8000})
        response = await client.get(f"/api/quotation/{itinerary['id']}")
        assert response.json()["total_price"] == 8000

    @pytest.mark.asyncio
    async def test_quotation_unknown_itinerary(self, client: AsyncClient):
        response = await client.get("/api/quotation/999")
        assert response.status_code == 404
