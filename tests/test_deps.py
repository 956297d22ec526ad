"""Bearer token and role dependency tests."""

import time

import pytest
from httpx import AsyncClient
from jose import jwt

from travloger.api.deps import AuthUser, decode_supabase_token, user_from_claims

JWT_SECRET = "test-jwt-secret"


def make_token(sub: str = "uid-1", secret: str = JWT_SECRET, **metadata) -> str:
    claims = {
        "sub": sub,
        "email": "ravi@travloger.in",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "user_metadata": metadata,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


class TestDecodeToken:
    def test_decodes_hs256(self):
        """Test that a token signed with the project secret is accepted."""
        claims = decode_supabase_token(make_token(name="Ravi"))
        assert claims["sub"] == "uid-1"
        assert claims["user_metadata"]["name"] == "Ravi"

    def test_rejects_wrong_secret(self):
        assert decode_supabase_token(make_token(secret="other-secret")) is None

    def test_rejects_garbage(self):
        assert decode_supabase_token("not-a-token") is None


class TestUserFromClaims:
    def test_metadata_fields(self):
        user = user_from_claims({
            "sub": "uid-1",
            "email": "ravi@travloger.in",
            "user_metadata": {"name": "Ravi", "role": "Super Admin", "employee_id": "7"},
        })
        assert user.name == "Ravi"
        assert user.employee_id == 7
        assert user.is_admin

    def test_defaults(self):
        """Test that the name falls back to the email local part."""
        user = user_from_claims({"sub": "uid-1", "email": "meera@travloger.in"})
        assert user.name == "meera"
        assert user.role == "employee"
        assert user.employee_id is None
        assert not user.is_admin


def test_admin_roles():
    assert AuthUser(id="1", role="admin").is_admin
    assert not AuthUser(id="1", role="employee").is_admin


class TestProtectedEndpoints:
    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient, anonymous):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_valid_token(self, client: AsyncClient, anonymous):
        """Test that a signed token authenticates the request."""
        token = make_token(name="Ravi", role="employee", employee_id=3)
        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "uid-1"
        assert data["employee_id"] == 3

    @pytest.mark.asyncio
    async def test_employee_cannot_reach_admin_route(self, client: AsyncClient, anonymous):
        token = make_token(role="employee")
        response = await client.post(
            "/api/setup/tables",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_public_routes_need_no_token(self, client: AsyncClient, anonymous):
        response = await client.get("/api/packages")
        assert response.status_code == 200
