"""Employee endpoint tests."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.models.booking import Booking
from travloger.models.employee import Employee, EmployeeSession
from travloger.models.lead import Lead


async def _create(client: AsyncClient, data: dict) -> dict:
    response = await client.post("/api/employees", json=data)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateEmployee:
    @pytest.mark.asyncio
    async def test_create_employee(self, client: AsyncClient, sample_employee_data, auth_service, email_service):
        """Test that creating an employee provisions a login and emails credentials."""
        data = await _create(client, sample_employee_data)

        assert data["auth_user_created"] is True
        assert data["credentials_sent"] is True
        employee = data["employee"]
        assert employee["email"] == "ravi@travloger.in"
        assert employee["is_first_login"] is True
        assert employee["supabase_user_id"] == "auth-1"

        assert auth_service.created_users[0]["employee_id"] == employee["id"]
        kind, payload = email_service.sent[0]
        assert kind == "credentials"
        assert payload["password"] == "welcome1"

    @pytest.mark.asyncio
    async def test_provider_failures_keep_employee(
        self, client: AsyncClient, sample_employee_data, auth_service, email_service
    ):
        """Test that auth and email failures are reported but do not roll back."""
        auth_service.fail_create = True
        email_service.succeed = False

        data = await _create(client, sample_employee_data)
        assert data["auth_user_created"] is False
        assert data["credentials_sent"] is False

        response = await client.get(f"/api/employees/{data['employee']['id']}")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client: AsyncClient, sample_employee_data):
        await _create(client, sample_employee_data)

        response = await client.post(
            "/api/employees",
            json={**sample_employee_data, "email": "RAVI@travloger.in"},
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_validation(self, client: AsyncClient, sample_employee_data):
        response = await client.post("/api/employees", json={**sample_employee_data, "phone": "12345"})
        assert response.status_code == 422

        response = await client.post("/api/employees", json={**sample_employee_data, "password": "abc"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_requires_admin(self, client: AsyncClient, sample_employee_data, as_employee):
        response = await client.post("/api/employees", json=sample_employee_data)
        assert response.status_code == 403


class TestEmployeeCrud:
    @pytest.mark.asyncio
    async def test_list_ordered_by_name_with_destination_filter(self, client: AsyncClient, sample_employee_data):
        await _create(client, {**sample_employee_data, "name": "Zoya", "email": "zoya@travloger.in"})
        await _create(client, {**sample_employee_data, "name": "Arjun", "email": "arjun@travloger.in",
                               "destination": "Goa"})

        response = await client.get("/api/employees")
        data = response.json()
        assert data["total"] == 2
        assert [e["name"] for e in data["items"]] == ["Arjun", "Zoya"]

        response = await client.get("/api/employees", params={"destination": "kashmir"})
        assert [e["name"] for e in response.json()["items"]] == ["Zoya"]

        response = await client.get("/api/employees", params={"destination": "all"})
        assert response.json()["total"] == 2

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client: AsyncClient, sample_employee_data):
        employee = (await _create(client, sample_employee_data))["employee"]

        response = await client.put(f"/api/employees/{employee['id']}", json={"status": "Inactive"})
        assert response.status_code == 200
        assert response.json()["status"] == "Inactive"
        assert response.json()["name"] == "Ravi Kumar"

        response = await client.delete(f"/api/employees/{employee['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/employees/{employee['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_refuses_null_name(self, client: AsyncClient, sample_employee_data):
        employee = (await _create(client, sample_employee_data))["employee"]

        response = await client.put(f"/api/employees/{employee['id']}", json={"name": None, "status": None})
        assert response.status_code == 422
        assert response.json()["detail"] == "name, status cannot be null"

        response = await client.put(f"/api/employees/{employee['id']}", json={"phone": None})
        assert response.status_code == 200
        assert response.json()["phone"] is None
        assert response.json()["name"] == "Ravi Kumar"

    @pytest.mark.asyncio
    async def test_by_email(self, client: AsyncClient, sample_employee_data):
        await _create(client, sample_employee_data)

        response = await client.get("/api/employees/by-email/RAVI@travloger.in")
        assert response.status_code == 200
        assert response.json()["name"] == "Ravi Kumar"

        response = await client.get("/api/employees/by-email/ghost@travloger.in")
        assert response.status_code == 404


class TestActiveSessions:
    @pytest.mark.asyncio
    async def test_heartbeat_and_list(self, client: AsyncClient, sample_employee_data):
        """Test that a heartbeat makes the employee show up as online."""
        employee = (await _create(client, sample_employee_data))["employee"]

        response = await client.post("/api/employees/active-sessions", json={"employee_id": employee["id"]})
        assert response.status_code == 200
        assert response.json()["employee_id"] == employee["id"]

        # A second heartbeat updates the same row
        response = await client.post("/api/employees/active-sessions", json={"employee_id": employee["id"]})
        assert response.status_code == 200

        response = await client.get("/api/employees/active-sessions")
        data = response.json()
        assert data["active_employee_ids"] == [employee["id"]]
        assert len(data["sessions"]) == 1

    @pytest.mark.asyncio
    async def test_heartbeat_unknown_employee(self, client: AsyncClient):
        response = await client.post("/api/employees/active-sessions", json={"employee_id": 999})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_end_session(self, client: AsyncClient, sample_employee_data):
        employee = (await _create(client, sample_employee_data))["employee"]
        await client.post("/api/employees/active-sessions", json={"employee_id": employee["id"]})

        response = await client.delete("/api/employees/active-sessions", params={"employee_id": employee["id"]})
        assert response.json() == {"success": True, "removed": True}

        response = await client.get("/api/employees/active-sessions")
        assert response.json()["active_employee_ids"] == []

    @pytest.mark.asyncio
    async def test_cleanup_removes_stale_sessions(self, client: AsyncClient, db_session: AsyncSession):
        """Test that sessions past the timeout are hidden and purged."""
        fresh = Employee(name="Fresh", email="fresh@travloger.in")
        stale = Employee(name="Stale", email="stale@travloger.in")
        db_session.add_all([fresh, stale])
        await db_session.commit()

        now = datetime.now(timezone.utc)
        db_session.add_all([
            EmployeeSession(employee_id=fresh.id, last_activity=now),
            EmployeeSession(employee_id=stale.id, last_activity=now - timedelta(minutes=30)),
        ])
        await db_session.commit()

        response = await client.get("/api/employees/active-sessions")
        assert response.json()["active_employee_ids"] == [fresh.id]

        response = await client.post("/api/employees/cleanup-sessions")
        assert response.json() == {"success": True, "deleted": 1}


class TestEmployeeStats:
    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, db_session: AsyncSession):
        """Test the lead funnel, revenue and conversion rate of an employee."""
        employee = Employee(name="Ravi Kumar", email="ravi@travloger.in", phone="9123456780")
        db_session.add(employee)
        await db_session.commit()

        assigned_at = datetime.now(timezone.utc)
        db_session.add_all([
            Lead(name="A", email="a@x.com", phone="1", destination="Kashmir",
                 status="New", assigned_employee_id=employee.id, assigned_at=assigned_at),
            Lead(name="B", email="b@x.com", phone="2", destination="Kashmir",
                 status="Contacted", assigned_employee_id=employee.id, assigned_at=assigned_at),
            Lead(name="C", email="c@x.com", phone="3", destination="Goa",
                 status="New", assigned_employee_id=employee.id),
            Lead(name="D", email="d@x.com", phone="4", destination="Goa", status="New"),
        ])
        db_session.add_all([
            Booking(customer="A", email="a@x.com", package_name="Kashmir Itinerary",
                    destination="Kashmir", amount=30000, status="Confirmed",
                    payment_status="Paid", assigned_agent="Ravi Kumar"),
            Booking(customer="B", email="b@x.com", package_name="Kashmir Itinerary",
                    destination="Kashmir", amount=12000, assigned_agent="Ravi Kumar"),
            Booking(customer="D", email="d@x.com", package_name="Goa Itinerary",
                    destination="Goa", amount=9999, status="Confirmed",
                    payment_status="Paid", assigned_agent="Someone Else"),
        ])
        await db_session.commit()

        response = await client.get(f"/api/employees/{employee.id}/stats")
        assert response.status_code == 200
        data = response.json()

        assert data["leads"] == {"total": 3, "new": 1, "contacted": 1, "converted": 2}
        assert data["bookings"]["total"] == 2
        assert data["bookings"]["by_status"] == {"Pending": 1, "Confirmed": 1, "Cancelled": 0}
        assert data["bookings"]["by_payment_status"]["Paid"] == 1
        assert data["total_revenue"] == 30000
        assert data["conversion_rate"] == 67
        assert data["by_destination"]["Kashmir"] == {"leads": 2, "bookings": 2, "revenue": 30000}
        assert data["by_destination"]["Goa"] == {"leads": 1, "bookings": 0, "revenue": 0}
        assert len(data["recent_leads"]) == 3

    @pytest.mark.asyncio
    async def test_stats_without_leads(self, client: AsyncClient, db_session: AsyncSession):
        employee = Employee(name="New Hire", email="new@travloger.in")
        db_session.add(employee)
        await db_session.commit()

        response = await client.get(f"/api/employees/{employee.id}/stats")
        data = response.json()
        assert data["conversion_rate"] == 0
        assert data["total_revenue"] == 0
        assert data["by_destination"] == {}

    @pytest.mark.asyncio
    async def test_assigned_lead_is_not_new(self, client: AsyncClient, sample_employee_data, sample_lead_data):
        """Test that a lead handed over through assignment leaves the new count."""
        employee = (await _create(client, sample_employee_data))["employee"]
        lead = (await client.post("/api/leads", json=sample_lead_data)).json()

        response = await client.post("/api/leads/assign", json={"lead_id": lead["id"], "employee_id": employee["id"]})
        assert response.status_code == 200

        response = await client.get(f"/api/employees/{employee['id']}/stats")
        leads = response.json()["leads"]
        assert leads["total"] == 1
        assert leads["new"] == 0
