"""
Lead (query) endpoints.

Leads arrive from the website form, get assigned to an employee (both sides
are introduced by email), get a package attached, and are converted into a
booking by sending a payment link.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, EmailStr
from sqlalchemy import func, select

from travloger.api.bookings import BookingResponse
from travloger.api.common import apply_update
from travloger.api.deps import CurrentUser, DbSession, Emails, PaymentService
from travloger.config import get_settings
from travloger.models.employee import Employee
from travloger.models.lead import Lead
from travloger.models.package import Package
from travloger.services.payment_flow import PaymentFlowError, send_payment_link
from travloger.services.razorpay_service import PaymentProviderError

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


# Schemas
class LeadCreate(BaseModel):
    name: str
    email: EmailStr
    phone: str
    number_of_travelers: Optional[str] = None
    travel_dates: Optional[str] = None
    source: Optional[str] = None
    destination: Optional[str] = None
    custom_notes: Optional[str] = None
    status: str = "New"


class LeadUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    number_of_travelers: Optional[str] = None
    travel_dates: Optional[str] = None
    source: Optional[str] = None
    destination: Optional[str] = None
    custom_notes: Optional[str] = None
    status: Optional[str] = None


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    number_of_travelers: Optional[str]
    travel_dates: Optional[str]
    source: Optional[str]
    destination: Optional[str]
    custom_notes: Optional[str]
    status: str
    assigned_employee_id: Optional[int]
    assigned_employee_name: Optional[str]
    assigned_employee_email: Optional[str]
    assigned_at: Optional[datetime]
    assigned_package_id: Optional[int]
    created_at: datetime
    updated_at: datetime


class LeadListResponse(BaseModel):
    items: List[LeadResponse]
    total: int
    limit: int
    offset: int


class AssignRequest(BaseModel):
    lead_id: int
    employee_id: int


class UnassignRequest(BaseModel):
    lead_id: int


class AssignPackageRequest(BaseModel):
    package_id: int


class PaymentLinkRequest(BaseModel):
    package_id: Optional[int] = None


class PaymentLinkResponse(BaseModel):
    booking: BookingResponse
    payment_link: str
    payment_link_id: str
    amount: float
    email_sent: bool
    email_error: Optional[str] = None


# Helpers
async def _get_lead_or_404(db: DbSession, lead_id: int) -> Lead:
    lead = await db.get(Lead, lead_id)
    if not lead:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lead not found",
        )
    return lead


# Endpoints
@router.get("", response_model=LeadListResponse)
async def list_leads(
    db: DbSession,
    user: CurrentUser,
    destination: Optional[str] = None,
    assigned_to: Optional[int] = Query(None, description="Employee id"),
    lead_status: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """
    List leads, newest first.
    """
    query = select(Lead)

    if destination and destination.lower() != "all":
        query = query.where(Lead.destination.ilike(destination))
    if assigned_to is not None:
        query = query.where(Lead.assigned_employee_id == assigned_to)
    if lead_status:
        query = query.where(Lead.status == lead_status)

    count_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = count_result.scalar() or 0

    query = query.order_by(Lead.created_at.desc(), Lead.id.desc()).offset(offset).limit(limit)
    result = await db.execute(query)
    leads = result.scalars().all()

    return LeadListResponse(
        items=[LeadResponse.model_validate(lead) for lead in leads],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
async def create_lead(data: LeadCreate, db: DbSession):
    """
    Create a lead. Public: used by the website enquiry form.
    """
    lead = Lead(**data.model_dump())
    lead.email = lead.email.lower()
    db.add(lead)
    await db.commit()
    await db.refresh(lead)

    logger.info("New lead %s for %s (%s)", lead.id, lead.destination, lead.source)
    return LeadResponse.model_validate(lead)


@router.post("/assign", response_model=LeadResponse)
async def assign_lead(data: AssignRequest, db: DbSession, user: CurrentUser, emails: Emails):
    """
    Assign a lead to an employee and introduce them to each other by email.
    Emails are best-effort; the assignment is kept if they fail.
    """
    lead = await _get_lead_or_404(db, data.lead_id)
    employee = await db.get(Employee, data.employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )

    lead.assigned_employee_id = employee.id
    lead.assigned_employee_name = employee.name
    lead.assigned_employee_email = employee.email
    lead.assigned_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(lead)

    if not emails.send_employee_details(customer=lead, employee=employee):
        logger.warning("Could not email employee details to customer of lead %s", lead.id)
    if not emails.send_customer_details(employee=employee, lead=lead):
        logger.warning("Could not email lead %s details to employee %s", lead.id, employee.id)

    return LeadResponse.model_validate(lead)


@router.post("/unassign", response_model=LeadResponse)
async def unassign_lead(data: UnassignRequest, db: DbSession, user: CurrentUser):
    lead = await _get_lead_or_404(db, data.lead_id)

    lead.assigned_employee_id = None
    lead.assigned_employee_name = None
    lead.assigned_employee_email = None
    lead.assigned_at = None
    await db.commit()
    await db.refresh(lead)

    return LeadResponse.model_validate(lead)


@router.get("/{lead_id}", response_model=LeadResponse)
async def get_lead(lead_id: int, db: DbSession, user: CurrentUser):
    lead = await _get_lead_or_404(db, lead_id)
    return LeadResponse.model_validate(lead)


@router.put("/{lead_id}", response_model=LeadResponse)
async def update_lead(lead_id: int, data: LeadUpdate, db: DbSession, user: CurrentUser):
    lead = await _get_lead_or_404(db, lead_id)

    apply_update(lead, data)

    await db.commit()
    await db.refresh(lead)
    return LeadResponse.model_validate(lead)


@router.delete("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lead(lead_id: int, db: DbSession, user: CurrentUser):
    lead = await _get_lead_or_404(db, lead_id)
    await db.delete(lead)
    await db.commit()


@router.post("/{lead_id}/assign-package", response_model=LeadResponse)
async def assign_package(
    lead_id: int,
    data: AssignPackageRequest,
    db: DbSession,
    user: CurrentUser,
):
    """Attach the package the agent is proposing to this lead."""
    lead = await _get_lead_or_404(db, lead_id)
    package = await db.get(Package, data.package_id)
    if not package:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Package not found",
        )

    lead.assigned_package_id = package.id
    await db.commit()
    await db.refresh(lead)
    return LeadResponse.model_validate(lead)


@router.post(
    "/{lead_id}/payment-link",
    response_model=PaymentLinkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_lead_payment_link(
    lead_id: int,
    data: PaymentLinkRequest,
    db: DbSession,
    user: CurrentUser,
    payments: PaymentService,
    emails: Emails,
):
    """
    Create a payment link for the lead's package, record the booking and
    email the link to the customer.

    If the email fails the booking and link are kept: the response carries
    email_sent=false and email_error so the agent can share the link manually.
    """
    lead = await _get_lead_or_404(db, lead_id)

    package_id = data.package_id or lead.assigned_package_id
    if not package_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No package assigned to this lead",
        )
    package = await db.get(Package, package_id)
    if not package:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Package not found",
        )

    if lead.assigned_package_id != package.id:
        lead.assigned_package_id = package.id
        await db.commit()

    try:
        result = await send_payment_link(
            db,
            lead=lead,
            package=package,
            agent_name=user.name,
            payments=payments,
            emails=emails,
            callback_url=f"{settings.api_base_url.rstrip('/')}/api/payments/callback",
        )
    except PaymentFlowError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PaymentProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to create payment link: {e}",
        )

    return PaymentLinkResponse(
        booking=BookingResponse.model_validate(result.booking),
        payment_link=result.payment_link,
        payment_link_id=result.payment_link_id,
        amount=result.amount,
        email_sent=result.email_sent,
        email_error=result.email_error,
    )
