"""Schema setup endpoint tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_tables_is_idempotent(client: AsyncClient):
    """Test that creating tables twice reports every table both times."""
    first = await client.post("/api/setup/tables")
    assert first.status_code == 200
    data = first.json()
    assert data["success"] is True
    for table in ("bookings", "employees", "employee_sessions", "leads", "packages", "city_content"):
        assert table in data["tables"]

    second = await client.post("/api/setup/tables")
    assert second.json()["tables"] == data["tables"]


@pytest.mark.asyncio
async def test_requires_admin(client: AsyncClient, as_employee):
    response = await client.post("/api/setup/tables")
    assert response.status_code == 403
