"""
Booking endpoints.
Bookings are normally created by the lead payment flow; this router also
lets billing create, correct and reconcile them by hand.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from sqlalchemy import select

from travloger.api.common import apply_update
from travloger.api.deps import CurrentUser, DbSession, PaymentService
from travloger.models.booking import Booking
from travloger.models.employee import Employee
from travloger.services.payment_status import find_booking_by_link, sync_booking_payment

router = APIRouter()

BookingStatus = Literal["Pending", "Confirmed", "Cancelled"]
PaymentStatus = Literal["Pending", "Paid", "Failed"]


# ============================================================================
# Schemas
# ============================================================================

class BookingCreate(BaseModel):
    lead_id: Optional[int] = None
    customer: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    package_id: Optional[int] = None
    package_name: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    travelers: int = Field(1, ge=1)
    amount: float = Field(..., gt=0)
    status: BookingStatus = "Pending"
    payment_status: PaymentStatus = "Pending"
    travel_date: Optional[str] = None
    assigned_agent: Optional[str] = None
    itinerary_details: Optional[dict[str, Any]] = None
    payment_link_id: Optional[str] = None
    payment_link_url: Optional[str] = None


class BookingUpdate(BaseModel):
    customer: Optional[str] = None
    phone: Optional[str] = None
    travelers: Optional[int] = Field(None, ge=1)
    amount: Optional[float] = Field(None, gt=0)
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_id: Optional[str] = None
    travel_date: Optional[str] = None
    assigned_agent: Optional[str] = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    lead_id: Optional[int]
    customer: str
    email: str
    phone: Optional[str]
    package_id: Optional[int]
    package_name: str
    destination: str
    travelers: int
    amount: float
    status: str
    payment_status: str
    travel_date: Optional[str]
    assigned_agent: Optional[str]
    itinerary_details: Optional[dict[str, Any]] = None
    payment_link_id: Optional[str]
    payment_link_url: Optional[str]
    payment_id: Optional[str]
    booking_date: datetime
    created_at: datetime

    # Enrichment from the employees table (list endpoint)
    assigned_employee_name: Optional[str] = None
    assigned_employee_mobile: Optional[str] = None


class BookingListResponse(BaseModel):
    items: List[BookingResponse]
    total: int


class CheckPaymentRequest(BaseModel):
    booking_id: Optional[int] = None
    payment_link_id: Optional[str] = None

    @model_validator(mode="after")
    def require_reference(self):
        if self.booking_id is None and not self.payment_link_id:
            raise ValueError("booking_id or payment_link_id is required")
        return self


# ============================================================================
# Helpers
# ============================================================================

async def _get_booking_or_404(db: DbSession, booking_id: int) -> Booking:
    booking = await db.get(Booking, booking_id)
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return booking


# ============================================================================
# Endpoints
# ============================================================================

@router.get("", response_model=BookingListResponse)
async def list_bookings(
    db: DbSession,
    user: CurrentUser,
    booking_status: Optional[str] = Query(None, alias="status"),
    lead_id: Optional[int] = None,
):
    """
    List bookings, newest first, with the assigned employee's name and mobile.
    """
    query = select(Booking)
    if booking_status:
        query = query.where(Booking.status == booking_status)
    if lead_id is not None:
        query = query.where(Booking.lead_id == lead_id)
    query = query.order_by(Booking.created_at.desc(), Booking.id.desc())

    result = await db.execute(query)
    bookings = result.scalars().all()

    agent_names = {b.assigned_agent for b in bookings if b.assigned_agent}
    employees_by_name = {}
    if agent_names:
        emp_result = await db.execute(select(Employee).where(Employee.name.in_(agent_names)))
        employees_by_name = {e.name: e for e in emp_result.scalars().all()}

    items = []
    for booking in bookings:
        item = BookingResponse.model_validate(booking)
        employee = employees_by_name.get(booking.assigned_agent)
        item.assigned_employee_name = employee.name if employee else "N/A"
        item.assigned_employee_mobile = (employee.phone if employee else None) or "N/A"
        items.append(item)

    return BookingListResponse(items=items, total=len(items))


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(data: BookingCreate, db: DbSession, user: CurrentUser):
    booking = Booking(**data.model_dump())
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    return BookingResponse.model_validate(booking)


@router.post("/check-payment")
async def check_payment(
    data: CheckPaymentRequest,
    db: DbSession,
    user: CurrentUser,
    payments: PaymentService,
):
    """
    Ask the payment provider whether the booking's link has been paid and
    confirm the booking if so. Provider errors come back in the body.
    """
    if data.booking_id is not None:
        booking = await _get_booking_or_404(db, data.booking_id)
    else:
        booking = await find_booking_by_link(db, data.payment_link_id)
        if not booking:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found",
            )

    return await sync_booking_payment(db, booking, payments)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: int, db: DbSession, user: CurrentUser):
    booking = await _get_booking_or_404(db, booking_id)
    return BookingResponse.model_validate(booking)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    data: BookingUpdate,
    db: DbSession,
    user: CurrentUser,
):
    booking = await _get_booking_or_404(db, booking_id)

    apply_update(booking, data)

    await db.commit()
    await db.refresh(booking)
    return BookingResponse.model_validate(booking)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(booking_id: int, db: DbSession, user: CurrentUser):
    booking = await _get_booking_or_404(db, booking_id)
    await db.delete(booking)
    await db.commit()
