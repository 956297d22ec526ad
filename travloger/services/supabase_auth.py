"""
Supabase Auth service.

Wraps the hosted auth provider behind a small interface:
sign_in / sign_up / sign_out for the portal users, and create_user
(admin API, service-role key) to provision employee logins.
"""

import logging
from typing import Any, Optional

from supabase import Client, create_client

from travloger.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "employee"


class AuthProviderError(Exception):
    """Raised when the hosted auth provider rejects a call."""


def _user_payload(user: Any) -> dict:
    """Flatten a Supabase user into the shape returned to the portal."""
    metadata = getattr(user, "user_metadata", None) or {}
    email = getattr(user, "email", None) or ""
    return {
        "id": str(getattr(user, "id", "")),
        "email": email,
        "name": metadata.get("name") or email.split("@")[0],
        "role": metadata.get("role") or DEFAULT_ROLE,
        "employee_id": metadata.get("employee_id"),
    }


class SupabaseAuthService:
    """Hosted auth provider client."""

    def __init__(self):
        settings = get_settings()
        self.url = settings.supabase_url
        self.anon_key = settings.supabase_key
        self.service_role_key = settings.supabase_service_role_key
        self._client: Optional[Client] = None
        self._admin_client: Optional[Client] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def client(self) -> Client:
        """Lazy-init public client (anon key)."""
        if not self.is_configured:
            raise AuthProviderError("Supabase is not configured")
        if self._client is None:
            self._client = create_client(self.url, self.anon_key)
        return self._client

    @property
    def admin_client(self) -> Client:
        """Lazy-init admin client (service-role key)."""
        if not (self.url and self.service_role_key):
            raise AuthProviderError("Supabase service role key is not configured")
        if self._admin_client is None:
            self._admin_client = create_client(self.url, self.service_role_key)
        return self._admin_client

    def sign_in(self, email: str, password: str) -> dict:
        """
        Authenticate with email/password.

        Returns:
            {"user": {...}, "token": <access token>}
        """
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthProviderError:
            raise
        except Exception as exc:
            logger.info("Login rejected for %s: %s", email, exc)
            raise AuthProviderError(str(exc)) from exc

        if not response.user or not response.session:
            raise AuthProviderError("Invalid login credentials")

        return {
            "user": _user_payload(response.user),
            "token": response.session.access_token,
        }

    def sign_up(self, name: str, email: str, password: str, role: str = DEFAULT_ROLE) -> dict:
        """Register a portal user; token is None until the email is confirmed."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"name": name, "role": role}},
                }
            )
        except AuthProviderError:
            raise
        except Exception as exc:
            logger.warning("Signup failed for %s: %s", email, exc)
            raise AuthProviderError(str(exc)) from exc

        if not response.user:
            raise AuthProviderError("Signup failed")

        return {
            "user": _user_payload(response.user),
            "token": response.session.access_token if response.session else None,
        }

    def sign_out(self, token: str) -> None:
        """Revoke the session behind an access token."""
        try:
            self.admin_client.auth.admin.sign_out(token)
        except Exception as exc:
            raise AuthProviderError(str(exc)) from exc

    def create_user(
        self,
        email: str,
        password: str,
        name: str,
        employee_id: Optional[int] = None,
    ) -> str:
        """
        Create a confirmed employee login through the admin API.

        Returns:
            The provider's user id.
        """
        try:
            response = self.admin_client.auth.admin.create_user(
                {
                    "email": email,
                    "password": password,
                    "email_confirm": True,
                    "user_metadata": {
                        "name": name,
                        "role": DEFAULT_ROLE,
                        "employee_id": employee_id,
                    },
                }
            )
        except AuthProviderError:
            raise
        except Exception as exc:
            logger.error("Failed to create auth user for %s: %s", email, exc)
            raise AuthProviderError(str(exc)) from exc

        user_id = str(response.user.id)
        logger.info("Created auth user %s for employee %s", user_id, employee_id)
        return user_id


supabase_auth_service = SupabaseAuthService()


def get_auth_service() -> SupabaseAuthService:
    """FastAPI dependency returning the auth provider service."""
    return supabase_auth_service
