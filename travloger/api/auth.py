"""
Authentication endpoints.

Login, signup and logout are delegated to Supabase Auth. First-login and
password-change checks use the employee's own bcrypt hash stored in the
employees table.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from passlib.context import CryptContext
from pydantic import BaseModel, EmailStr
from sqlalchemy import func, select

from travloger.api.deps import AdminUser, AuthService, CurrentUser, DbSession, AuthUser, security
from travloger.models.employee import Employee
from travloger.services import session_service
from travloger.services.supabase_auth import AuthProviderError

logger = logging.getLogger(__name__)

router = APIRouter()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6


# Schemas
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SignupRequest(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: str = "employee"


class AuthResponse(BaseModel):
    user: dict
    token: Optional[str] = None


class EmailRequest(BaseModel):
    email: EmailStr


class ClearSessionRequest(BaseModel):
    employee_id: int


class ChangePasswordRequest(BaseModel):
    email: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class CreateEmployeeUserRequest(BaseModel):
    email: EmailStr
    password: str
    name: str
    employee_id: Optional[int] = None


# Helpers
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


async def get_employee_by_email(db: DbSession, email: str) -> Optional[Employee]:
    result = await db.execute(
        select(Employee).where(func.lower(Employee.email) == email.strip().lower())
    )
    return result.scalar_one_or_none()


# Endpoints
@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, auth: AuthService):
    """
    Authenticate with the hosted auth provider and return {user, token}.
    """
    try:
        return auth.sign_in(request.email.lower(), request.password)
    except AuthProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Invalid email or password",
        )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, auth: AuthService):
    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    try:
        return auth.sign_up(request.name, request.email.lower(), request.password, request.role)
    except AuthProviderError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/logout")
async def logout(
    user: CurrentUser,
    db: DbSession,
    auth: AuthService,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
):
    """
    End the caller's active session (employees) and revoke the token.
    Provider sign-out is best-effort.
    """
    employee_id = user.employee_id
    if employee_id is None and user.email:
        employee = await get_employee_by_email(db, user.email)
        employee_id = employee.id if employee else None

    if employee_id is not None:
        await session_service.end_session(db, employee_id)

    if credentials:
        try:
            auth.sign_out(credentials.credentials)
        except AuthProviderError as e:
            logger.warning("Provider sign-out failed for %s: %s", user.email, e)

    return {"success": True}


@router.post("/clear-session")
async def clear_session(request: ClearSessionRequest, db: DbSession, user: CurrentUser):
    """Remove an employee's active session without signing out."""
    removed = await session_service.end_session(db, request.employee_id)
    return {"success": True, "removed": removed}


@router.post("/check-first-login")
async def check_first_login(request: EmailRequest, db: DbSession):
    employee = await get_employee_by_email(db, request.email)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    return {"isFirstLogin": employee.is_first_login is not False}


@router.post("/change-password")
async def change_password(request: ChangePasswordRequest, db: DbSession):
    """
    Change an employee's password (first-login flow).
    """
    if not request.email or not request.current_password or not request.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email, current password and new password are required",
        )

    if len(request.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )

    employee = await get_employee_by_email(db, request.email)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )

    if not employee.password_hash or not verify_password(request.current_password, employee.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    employee.password_hash = get_password_hash(request.new_password)
    employee.is_first_login = False
    await db.commit()

    return {"success": True, "message": "Password changed successfully"}


@router.post("/create-employee-user", status_code=status.HTTP_201_CREATED)
async def create_employee_user(
    request: CreateEmployeeUserRequest,
    db: DbSession,
    auth: AuthService,
    user: AdminUser,
):
    """
    Provision a hosted-auth login for an employee and link it to the row.
    """
    try:
        user_id = auth.create_user(
            email=request.email.lower(),
            password=request.password,
            name=request.name,
            employee_id=request.employee_id,
        )
    except AuthProviderError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if request.employee_id is not None:
        employee = await db.get(Employee, request.employee_id)
        if employee:
            employee.supabase_user_id = user_id
            await db.commit()

    return {"success": True, "user_id": user_id}


@router.get("/me", response_model=AuthUser)
async def get_current_user_info(user: CurrentUser):
    """
    Get current authenticated user info.
    """
    return user
