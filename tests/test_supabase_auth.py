"""Supabase auth service tests with a stubbed client."""

from types import SimpleNamespace

import pytest

from travloger.services.supabase_auth import AuthProviderError, SupabaseAuthService, _user_payload


class StubAuth:
    def __init__(self, user=None, session=None, error=None):
        self.user = user
        self.session = session
        self.error = error
        self.calls = []
        self.admin = self

    def _respond(self, name, payload):
        self.calls.append((name, payload))
        if self.error:
            raise self.error
        return SimpleNamespace(user=self.user, session=self.session)

    def sign_in_with_password(self, credentials):
        return self._respond("sign_in", credentials)

    def sign_up(self, payload):
        return self._respond("sign_up", payload)

    def create_user(self, payload):
        return self._respond("create_user", payload)


def make_service(auth: StubAuth) -> SupabaseAuthService:
    service = SupabaseAuthService()
    client = SimpleNamespace(auth=auth)
    service._client = client
    service._admin_client = client
    service.url = "https://project.supabase.co"
    service.anon_key = "anon"
    service.service_role_key = "service"
    return service


USER = SimpleNamespace(
    id="uid-1",
    email="ravi@travloger.in",
    user_metadata={"name": "Ravi", "role": "admin", "employee_id": 3},
)


def test_user_payload_defaults():
    payload = _user_payload(SimpleNamespace(id="uid-2", email="meera@travloger.in", user_metadata=None))
    assert payload == {
        "id": "uid-2",
        "email": "meera@travloger.in",
        "name": "meera",
        "role": "employee",
        "employee_id": None,
    }


def test_unconfigured_service():
    service = SupabaseAuthService()
    service.url = ""
    with pytest.raises(AuthProviderError, match="not configured"):
        service.sign_in("ravi@travloger.in", "secret")


def test_sign_in():
    service = make_service(StubAuth(user=USER, session=SimpleNamespace(access_token="jwt")))
    result = service.sign_in("ravi@travloger.in", "secret")
    assert result["token"] == "jwt"
    assert result["user"]["role"] == "admin"
    assert result["user"]["employee_id"] == 3


def test_sign_in_rejected():
    """Test that provider exceptions are normalised to AuthProviderError."""
    service = make_service(StubAuth(error=RuntimeError("Invalid login credentials")))
    with pytest.raises(AuthProviderError, match="Invalid login credentials"):
        service.sign_in("ravi@travloger.in", "wrong")


def test_sign_up_without_session():
    service = make_service(StubAuth(user=USER, session=None))
    result = service.sign_up("Ravi", "ravi@travloger.in", "secret", "employee")
    assert result["token"] is None


def test_create_user_metadata():
    auth = StubAuth(user=SimpleNamespace(id="uid-9"))
    service = make_service(auth)

    assert service.create_user("ravi@travloger.in", "secret", "Ravi", employee_id=3) == "uid-9"
    _, payload = auth.calls[0]
    assert payload["email_confirm"] is True
    assert payload["user_metadata"] == {"name": "Ravi", "role": "employee", "employee_id": 3}
