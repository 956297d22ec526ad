"""
Employee management endpoints.

Admins create employees (with a hosted-auth login and a credentials email),
the employee portal heartbeats its active session, and the admin panel polls
who is online and reads per-employee performance stats.
"""

import logging
import re
from collections import defaultdict
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from sqlalchemy import func, select

from travloger.api.auth import get_password_hash, MIN_PASSWORD_LENGTH
from travloger.api.common import apply_update
from travloger.api.deps import AdminUser, AuthService, CurrentUser, DbSession, Emails
from travloger.config import get_settings
from travloger.models.booking import Booking
from travloger.models.employee import Employee
from travloger.models.lead import Lead
from travloger.services import session_service
from travloger.services.supabase_auth import AuthProviderError

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

PHONE_PATTERN = re.compile(r"^\d{10}$")
RECENT_LIMIT = 10


# ============================================================================
# Schemas
# ============================================================================

class EmployeeBase(BaseModel):
    name: str
    email: EmailStr
    phone: Optional[str] = None
    destination: Optional[str] = None
    role: str = "employee"
    status: str = "Active"

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v is not None and not PHONE_PATTERN.match(v.strip()):
            raise ValueError("Phone number must be exactly 10 digits")
        return v.strip() if v else v


class EmployeeCreate(EmployeeBase):
    password: str
    create_auth_user: bool = True
    send_credentials: bool = True

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return v


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    destination: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v is not None and not PHONE_PATTERN.match(v.strip()):
            raise ValueError("Phone number must be exactly 10 digits")
        return v.strip() if v else v


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str]
    destination: Optional[str]
    role: str
    status: str
    is_first_login: bool
    supabase_user_id: Optional[str]
    created_at: datetime


class EmployeeCreateResponse(BaseModel):
    employee: EmployeeResponse
    auth_user_created: bool
    credentials_sent: bool


class EmployeeListResponse(BaseModel):
    items: List[EmployeeResponse]
    total: int


class HeartbeatRequest(BaseModel):
    employee_id: int


class ActiveSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: int
    last_activity: datetime


class ActiveSessionsResponse(BaseModel):
    sessions: List[ActiveSessionResponse]
    active_employee_ids: List[int]


# ============================================================================
# Helpers
# ============================================================================

async def _get_employee_or_404(db: DbSession, employee_id: int) -> Employee:
    employee = await db.get(Employee, employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    return employee


def _round_money(value: float) -> float:
    return round(float(value or 0), 2)


# ============================================================================
# Employees
# ============================================================================

@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    db: DbSession,
    user: CurrentUser,
    destination: Optional[str] = None,
):
    """
    List employees ordered by name, optionally filtered by destination
    (case-insensitive, "all" disables the filter).
    """
    query = select(Employee)
    if destination and destination.lower() != "all":
        query = query.where(Employee.destination.ilike(destination))
    query = query.order_by(Employee.name)

    result = await db.execute(query)
    employees = result.scalars().all()

    return EmployeeListResponse(
        items=[EmployeeResponse.model_validate(e) for e in employees],
        total=len(employees),
    )


@router.post("", response_model=EmployeeCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: EmployeeCreate,
    db: DbSession,
    user: AdminUser,
    auth: AuthService,
    emails: Emails,
):
    """
    Create an employee.

    The hosted-auth login and the credentials email are best-effort:
    failures are logged and reported in the response, the employee row stays.
    """
    email = data.email.strip().lower()

    existing = await db.execute(select(Employee).where(func.lower(Employee.email) == email))
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Employee with email '{email}' already exists",
        )

    employee = Employee(
        name=data.name.strip(),
        email=email,
        phone=data.phone,
        destination=data.destination,
        role=data.role,
        status=data.status,
        password_hash=get_password_hash(data.password),
        is_first_login=True,
    )
    db.add(employee)
    await db.commit()
    await db.refresh(employee)

    auth_user_created = False
    if data.create_auth_user:
        try:
            employee.supabase_user_id = auth.create_user(
                email=email,
                password=data.password,
                name=employee.name,
                employee_id=employee.id,
            )
            await db.commit()
            await db.refresh(employee)
            auth_user_created = True
        except AuthProviderError as e:
            logger.warning("Employee %s created without auth user: %s", employee.id, e)

    credentials_sent = False
    if data.send_credentials:
        credentials_sent = emails.send_credentials(
            name=employee.name,
            email=employee.email,
            password=data.password,
        )

    return EmployeeCreateResponse(
        employee=EmployeeResponse.model_validate(employee),
        auth_user_created=auth_user_created,
        credentials_sent=credentials_sent,
    )


# ============================================================================
# Active sessions (heartbeat)
# ============================================================================

@router.get("/active-sessions", response_model=ActiveSessionsResponse)
async def get_active_sessions(db: DbSession, user: CurrentUser):
    """Employees seen within the session timeout window."""
    sessions = await session_service.list_active_sessions(db)
    return ActiveSessionsResponse(
        sessions=[ActiveSessionResponse.model_validate(s) for s in sessions],
        active_employee_ids=sorted({s.employee_id for s in sessions}),
    )


@router.post("/active-sessions", response_model=ActiveSessionResponse)
async def heartbeat(data: HeartbeatRequest, db: DbSession, user: CurrentUser):
    """Record that an employee is active now."""
    await _get_employee_or_404(db, data.employee_id)
    session = await session_service.touch_session(db, data.employee_id)
    return ActiveSessionResponse.model_validate(session)


@router.delete("/active-sessions")
async def end_active_session(
    db: DbSession,
    user: CurrentUser,
    employee_id: int = Query(...),
):
    removed = await session_service.end_session(db, employee_id)
    return {"success": True, "removed": removed}


@router.post("/cleanup-sessions")
async def cleanup_sessions(db: DbSession, user: CurrentUser):
    """Delete sessions that missed the heartbeat window."""
    deleted = await session_service.purge_stale_sessions(db)
    return {"success": True, "deleted": deleted}


@router.get("/by-email/{email}", response_model=EmployeeResponse)
async def get_employee_by_email(email: str, db: DbSession, user: CurrentUser):
    result = await db.execute(
        select(Employee).where(func.lower(Employee.email) == email.strip().lower())
    )
    employee = result.scalar_one_or_none()
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    return EmployeeResponse.model_validate(employee)


# ============================================================================
# Single employee
# ============================================================================

@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: int, db: DbSession, user: CurrentUser):
    employee = await _get_employee_or_404(db, employee_id)
    return EmployeeResponse.model_validate(employee)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    db: DbSession,
    user: AdminUser,
):
    employee = await _get_employee_or_404(db, employee_id)

    apply_update(employee, data)

    await db.commit()
    await db.refresh(employee)
    return EmployeeResponse.model_validate(employee)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(employee_id: int, db: DbSession, user: AdminUser):
    employee = await _get_employee_or_404(db, employee_id)
    await db.delete(employee)
    await db.commit()


@router.get("/{employee_id}/stats")
async def get_employee_stats(employee_id: int, db: DbSession, user: CurrentUser):
    """
    Performance summary of an employee: lead funnel, bookings by status,
    revenue, conversion rate, recent activity and a per-destination breakdown.
    Bookings are attributed by agent name.
    """
    employee = await _get_employee_or_404(db, employee_id)

    leads_result = await db.execute(
        select(Lead)
        .where(Lead.assigned_employee_id == employee.id)
        .order_by(Lead.created_at.desc(), Lead.id.desc())
    )
    leads = leads_result.scalars().all()

    bookings_result = await db.execute(
        select(Booking)
        .where(Booking.assigned_agent == employee.name)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    bookings = bookings_result.scalars().all()

    booking_status = {s: 0 for s in ("Pending", "Confirmed", "Cancelled")}
    payment_status = {s: 0 for s in ("Pending", "Paid", "Failed")}
    total_revenue = 0.0
    by_destination: dict = defaultdict(lambda: {"leads": 0, "bookings": 0, "revenue": 0.0})

    for lead in leads:
        by_destination[lead.destination or "Unknown"]["leads"] += 1

    for booking in bookings:
        if booking.status in booking_status:
            booking_status[booking.status] += 1
        if booking.payment_status in payment_status:
            payment_status[booking.payment_status] += 1
        bucket = by_destination[booking.destination or "Unknown"]
        bucket["bookings"] += 1
        if booking.payment_status == "Paid":
            total_revenue += float(booking.amount or 0)
            bucket["revenue"] += float(booking.amount or 0)

    total_leads = len(leads)
    total_bookings = len(bookings)

    return {
        "employee": EmployeeResponse.model_validate(employee),
        "leads": {
            "total": total_leads,
            "new": sum(1 for lead in leads if lead.assigned_at is None),
            "contacted": sum(1 for lead in leads if lead.status == "Contacted"),
            "converted": total_bookings,
        },
        "bookings": {
            "total": total_bookings,
            "by_status": booking_status,
            "by_payment_status": payment_status,
        },
        "total_revenue": _round_money(total_revenue),
        "conversion_rate": round(total_bookings / total_leads * 100) if total_leads else 0,
        "recent_leads": [
            {
                "id": lead.id,
                "name": lead.name,
                "destination": lead.destination,
                "status": lead.status,
                "created_at": lead.created_at,
            }
            for lead in leads[:RECENT_LIMIT]
        ],
        "recent_bookings": [
            {
                "id": b.id,
                "customer": b.customer,
                "package_name": b.package_name,
                "amount": b.amount,
                "status": b.status,
                "payment_status": b.payment_status,
                "created_at": b.created_at,
            }
            for b in bookings[:RECENT_LIMIT]
        ],
        "by_destination": {
            name: {**values, "revenue": _round_money(values["revenue"])}
            for name, values in by_destination.items()
        },
    }
