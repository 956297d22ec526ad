"""
FastAPI dependencies for authentication and database access.
Bearer tokens are access tokens issued by Supabase Auth.
"""

import base64
import json
import logging
from typing import Annotated, Optional

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwk, jwt
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.config import get_settings
from travloger.database import get_db
from travloger.services.email_service import EmailService, get_email_service
from travloger.services.razorpay_service import RazorpayService, get_payment_service
from travloger.services.supabase_auth import SupabaseAuthService, get_auth_service

logger = logging.getLogger(__name__)

settings = get_settings()
security = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}


class AuthUser(BaseModel):
    """Identity carried by a verified access token."""

    id: str
    email: str = ""
    name: str = ""
    role: str = "employee"
    employee_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role in settings.admin_roles


def get_jwks_keys(supabase_url: str) -> dict:
    """
    Fetch JWKS keys from Supabase.
    Keys are cached to avoid repeated HTTP requests.
    """
    global _jwks_cache

    if not _jwks_cache:
        try:
            response = httpx.get(f"{supabase_url}/auth/v1/.well-known/jwks.json", timeout=10.0)
            response.raise_for_status()
            _jwks_cache = response.json()
        except httpx.HTTPError as e:
            logger.error("[JWKS] Error fetching keys: %s", e)
            return {}

    return _jwks_cache


def _token_header(token: str) -> dict:
    header_segment = token.split(".")[0]
    padding = 4 - len(header_segment) % 4
    if padding != 4:
        header_segment += "=" * padding
    return json.loads(base64.urlsafe_b64decode(header_segment))


def decode_supabase_token(token: str) -> Optional[dict]:
    """
    Decode a Supabase access token.
    Supports ES256 (JWKS, current projects) and HS256 (legacy JWT secret).
    Returns the claims, or None when the token cannot be verified.
    """
    try:
        header = _token_header(token)
    except (ValueError, IndexError) as e:
        logger.debug("[JWT] Error parsing header: %s", e)
        return None

    alg = header.get("alg", "HS256")
    kid = header.get("kid")

    if alg == "ES256":
        jwks = get_jwks_keys(settings.supabase_url)
        keys = jwks.get("keys") or []
        key_data = next((k for k in keys if kid and k.get("kid") == kid), None)
        if key_data is None and keys:
            key_data = keys[0]
        if key_data:
            try:
                return jwt.decode(
                    token,
                    jwk.construct(key_data),
                    algorithms=["ES256"],
                    options={"verify_aud": False},
                )
            except JWTError as e:
                logger.debug("[JWT] ES256 decode error: %s", e)
        return None

    if settings.supabase_jwt_secret:
        try:
            return jwt.decode(
                token,
                settings.supabase_jwt_secret,
                algorithms=["HS256"],
                options={"verify_aud": False},
            )
        except JWTError as e:
            logger.debug("[JWT] HS256 decode error: %s", e)

    return None


def user_from_claims(payload: dict) -> AuthUser:
    metadata = payload.get("user_metadata") or {}
    email = payload.get("email") or ""
    employee_id = metadata.get("employee_id")
    return AuthUser(
        id=str(payload["sub"]),
        email=email,
        name=metadata.get("name") or email.split("@")[0],
        role=metadata.get("role") or "employee",
        employee_id=int(employee_id) if employee_id not in (None, "") else None,
    )


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> AuthUser:
    """
    Dependency to get the current authenticated user from the bearer token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not credentials:
        raise credentials_exception

    payload = decode_supabase_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise credentials_exception

    try:
        return user_from_claims(payload)
    except (TypeError, ValueError):
        raise credentials_exception


def require_role(*allowed_roles: str):
    """
    Dependency factory to require specific user roles.

    Usage:
        @router.delete("/{id}")
        async def delete_x(user: Annotated[AuthUser, Depends(require_role("admin"))]):
            ...
    """
    async def role_checker(
        user: Annotated[AuthUser, Depends(get_current_user)],
    ) -> AuthUser:
        if user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(allowed_roles)}",
            )
        return user

    return role_checker


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
AdminUser = Annotated[AuthUser, Depends(require_role(*settings.admin_roles))]
DbSession = Annotated[AsyncSession, Depends(get_db)]
AuthService = Annotated[SupabaseAuthService, Depends(get_auth_service)]
PaymentService = Annotated[RazorpayService, Depends(get_payment_service)]
Emails = Annotated[EmailService, Depends(get_email_service)]
