"""Lead endpoint tests, including the payment-link flow."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.models.booking import Booking
from travloger.models.employee import Employee
from travloger.models.hotel import Hotel
from travloger.models.package import Package


async def _lead(client: AsyncClient, data: dict, **overrides) -> dict:
    response = await client.post("/api/leads", json={**data, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


async def _package(db: AsyncSession, **values) -> Package:
    values = {"name": "Kashmir Itinerary", "destination": "Kashmir", "price": 24999, **values}
    package = Package(**values)
    db.add(package)
    await db.commit()
    await db.refresh(package)
    return package


class TestLeadCrud:
    @pytest.mark.asyncio
    async def test_create_lead_is_public(self, client: AsyncClient, sample_lead_data, anonymous):
        """Test that the website form can create a lead without a token."""
        lead = await _lead(client, sample_lead_data)
        assert lead["email"] == "asha@example.com"
        assert lead["status"] == "New"
        assert lead["assigned_employee_id"] is None

    @pytest.mark.asyncio
    async def test_list_with_filters_and_paging(self, client: AsyncClient, sample_lead_data):
        await _lead(client, sample_lead_data)
        await _lead(client, sample_lead_data, destination="Goa", status="Contacted")
        await _lead(client, sample_lead_data, destination="goa")

        response = await client.get("/api/leads")
        data = response.json()
        assert data["total"] == 3
        assert data["limit"] == 50
        assert data["offset"] == 0

        response = await client.get("/api/leads", params={"destination": "GOA"})
        assert response.json()["total"] == 2

        response = await client.get("/api/leads", params={"status": "Contacted"})
        assert response.json()["total"] == 1

        response = await client.get("/api/leads", params={"limit": 1, "offset": 1})
        data = response.json()
        assert data["total"] == 3
        assert len(data["items"]) == 1

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client: AsyncClient, sample_lead_data):
        lead = await _lead(client, sample_lead_data)

        response = await client.put(f"/api/leads/{lead['id']}", json={"status": "Contacted"})
        assert response.status_code == 200
        assert response.json()["status"] == "Contacted"
        assert response.json()["destination"] == "Kashmir"

        response = await client.delete(f"/api/leads/{lead['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/leads/{lead['id']}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Lead not found"

    @pytest.mark.asyncio
    async def test_update_refuses_null_contact(self, client: AsyncClient, sample_lead_data):
        lead = await _lead(client, sample_lead_data)

        response = await client.put(f"/api/leads/{lead['id']}", json={"phone": None})
        assert response.status_code == 422
        assert response.json()["detail"] == "phone cannot be null"

        response = await client.get(f"/api/leads/{lead['id']}")
        assert response.json()["phone"] == lead["phone"]


class TestAssignment:
    @pytest.mark.asyncio
    async def test_assign_emails_both_sides(
        self, client: AsyncClient, db_session: AsyncSession, sample_lead_data, email_service
    ):
        """Test that assigning a lead records the employee and sends both introductions."""
        employee = Employee(name="Ravi Kumar", email="ravi@travloger.in", phone="9123456780")
        db_session.add(employee)
        await db_session.commit()
        lead = await _lead(client, sample_lead_data)

        response = await client.post("/api/leads/assign", json={"lead_id": lead["id"], "employee_id": employee.id})
        assert response.status_code == 200
        data = response.json()
        assert data["assigned_employee_id"] == employee.id
        assert data["assigned_employee_name"] == "Ravi Kumar"
        assert data["assigned_employee_email"] == "ravi@travloger.in"
        assert data["assigned_at"] is not None

        assert email_service.kinds() == ["employee_details", "customer_details"]

    @pytest.mark.asyncio
    async def test_assign_survives_email_failure(
        self, client: AsyncClient, db_session: AsyncSession, sample_lead_data, email_service
    ):
        email_service.succeed = False
        employee = Employee(name="Ravi Kumar", email="ravi@travloger.in")
        db_session.add(employee)
        await db_session.commit()
        lead = await _lead(client, sample_lead_data)

        response = await client.post("/api/leads/assign", json={"lead_id": lead["id"], "employee_id": employee.id})
        assert response.status_code == 200
        assert response.json()["assigned_employee_id"] == employee.id

    @pytest.mark.asyncio
    async def test_assign_unknown_employee(self, client: AsyncClient, sample_lead_data):
        lead = await _lead(client, sample_lead_data)
        response = await client.post("/api/leads/assign", json={"lead_id": lead["id"], "employee_id": 999})
        assert response.status_code == 404
        assert response.json()["detail"] == "Employee not found"

    @pytest.mark.asyncio
    async def test_unassign(self, client: AsyncClient, db_session: AsyncSession, sample_lead_data):
        employee = Employee(name="Ravi Kumar", email="ravi@travloger.in")
        db_session.add(employee)
        await db_session.commit()
        lead = await _lead(client, sample_lead_data)
        await client.post("/api/leads/assign", json={"lead_id": lead["id"], "employee_id": employee.id})

        response = await client.post("/api/leads/unassign", json={"lead_id": lead["id"]})
        data = response.json()
        assert data["assigned_employee_id"] is None
        assert data["assigned_employee_name"] is None
        assert data["assigned_at"] is None

    @pytest.mark.asyncio
    async def test_assign_package(self, client: AsyncClient, db_session: AsyncSession, sample_lead_data):
        package = await _package(db_session)
        lead = await _lead(client, sample_lead_data)

        response = await client.post(f"/api/leads/{lead['id']}/assign-package", json={"package_id": package.id})
        assert response.status_code == 200
        assert response.json()["assigned_package_id"] == package.id

        response = await client.post(f"/api/leads/{lead['id']}/assign-package", json={"package_id": 999})
        assert response.status_code == 404


class TestPaymentLink:
    @pytest.mark.asyncio
    async def test_payment_link_creates_booking_and_emails(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        sample_lead_data,
        payment_service,
        email_service,
    ):
        """Test the full chain: link, pending booking, email to the customer."""
        package = await _package(db_session)
        lead = await _lead(client, sample_lead_data)

        response = await client.post(f"/api/leads/{lead['id']}/payment-link", json={"package_id": package.id})
        assert response.status_code == 201, response.text
        data = response.json()

        assert data["payment_link_id"] == "plink_1"
        assert data["payment_link"] == "https://rzp.io/i/plink_1"
        assert data["amount"] == 24999
        assert data["email_sent"] is True
        assert data["email_error"] is None

        booking = data["booking"]
        assert booking["status"] == "Pending"
        assert booking["payment_status"] == "Pending"
        assert booking["lead_id"] == lead["id"]
        assert booking["travelers"] == 2
        assert booking["assigned_agent"] == "Admin"
        assert booking["payment_link_id"] == "plink_1"
        assert booking["itinerary_details"]["name"] == "Kashmir Itinerary"

        created = payment_service.created[0]
        assert created["customer_email"] == "asha@example.com"
        assert created["reference_id"] == lead["id"]
        assert created["callback_url"].endswith("/api/payments/callback")

        kind, payload = email_service.sent[-1]
        assert kind == "payment_link"
        assert payload["payment"] == {"amount": 24999, "link": "https://rzp.io/i/plink_1"}

        # The package is now the lead's assigned package
        response = await client.get(f"/api/leads/{lead['id']}")
        assert response.json()["assigned_package_id"] == package.id

    @pytest.mark.asyncio
    async def test_email_failure_keeps_booking(
        self, client: AsyncClient, db_session: AsyncSession, sample_lead_data, email_service
    ):
        """Test that a failed email is reported while the booking and link are kept."""
        email_service.succeed = False
        package = await _package(db_session)
        lead = await _lead(client, sample_lead_data)

        response = await client.post(f"/api/leads/{lead['id']}/payment-link", json={"package_id": package.id})
        assert response.status_code == 201
        data = response.json()
        assert data["email_sent"] is False
        assert data["email_error"] == "Booking created but the payment link email could not be sent"

        result = await db_session.execute(select(Booking))
        bookings = result.scalars().all()
        assert len(bookings) == 1
        assert bookings[0].payment_link_url == "https://rzp.io/i/plink_1"

    @pytest.mark.asyncio
    async def test_uses_assigned_package(self, client: AsyncClient, db_session: AsyncSession, sample_lead_data):
        package = await _package(db_session)
        lead = await _lead(client, sample_lead_data)
        await client.post(f"/api/leads/{lead['id']}/assign-package", json={"package_id": package.id})

        response = await client.post(f"/api/leads/{lead['id']}/payment-link", json={})
        assert response.status_code == 201
        assert response.json()["booking"]["package_id"] == package.id

    @pytest.mark.asyncio
    async def test_hotel_rate_sets_amount(self, client: AsyncClient, db_session: AsyncSession, sample_lead_data):
        """Test that a selected hotel prices the package at MAP rate plus extra bed."""
        hotel = Hotel(name="Lalit Grand Palace", destination="Kashmir", map_rate=18000, eb=2500)
        db_session.add(hotel)
        await db_session.commit()
        package = await _package(db_session, selected_hotel_id=hotel.id)
        lead = await _lead(client, sample_lead_data)

        response = await client.post(f"/api/leads/{lead['id']}/payment-link", json={"package_id": package.id})
        assert response.status_code == 201
        assert response.json()["amount"] == 20500

    @pytest.mark.asyncio
    async def test_no_package(self, client: AsyncClient, sample_lead_data):
        lead = await _lead(client, sample_lead_data)
        response = await client.post(f"/api/leads/{lead['id']}/payment-link", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "No package assigned to this lead"

    @pytest.mark.asyncio
    async def test_zero_amount(
        self, client: AsyncClient, db_session: AsyncSession, sample_lead_data, payment_service
    ):
        """Test that a package without a price never reaches the provider."""
        package = await _package(db_session, price=0)
        lead = await _lead(client, sample_lead_data)

        response = await client.post(f"/api/leads/{lead['id']}/payment-link", json={"package_id": package.id})
        assert response.status_code == 400
        assert response.json()["detail"] == "Please set a valid amount for this package"
        assert payment_service.created == []

    @pytest.mark.asyncio
    async def test_provider_failure_writes_nothing(
        self, client: AsyncClient, db_session: AsyncSession, sample_lead_data, payment_service, email_service
    ):
        payment_service.fail_create = True
        package = await _package(db_session)
        lead = await _lead(client, sample_lead_data)

        response = await client.post(f"/api/leads/{lead['id']}/payment-link", json={"package_id": package.id})
        assert response.status_code == 502
        assert "Authentication failed" in response.json()["detail"]

        result = await db_session.execute(select(Booking))
        assert result.scalars().all() == []
        assert email_service.sent == []
