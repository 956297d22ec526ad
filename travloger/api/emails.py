"""
Transactional email endpoints used by the admin panel.

Every endpoint answers {"success": true} when the message was handed to
SendGrid (or simulated when no key is configured) and 502 otherwise.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, EmailStr, Field

from travloger.api.deps import CurrentUser, Emails

logger = logging.getLogger(__name__)

router = APIRouter()


class EmailResult(BaseModel):
    success: bool


class Person(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    destination: Optional[str] = None


class LeadDetails(Person):
    travel_dates: Optional[str] = None
    number_of_travelers: Optional[str] = None
    custom_notes: Optional[str] = None


class CredentialsEmailRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    login_url: Optional[str] = None


class EmployeeDetailsEmailRequest(BaseModel):
    customer: Person
    employee: Person


class CustomerDetailsEmailRequest(BaseModel):
    employee: Person
    lead: LeadDetails


class PaymentDetails(BaseModel):
    amount: float = Field(..., gt=0)
    link: str = Field(..., min_length=1)


class PaymentLinkEmailRequest(BaseModel):
    member: dict[str, Any]
    itinerary: dict[str, Any]
    payment: PaymentDetails


def _result(sent: bool, what: str) -> EmailResult:
    if not sent:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to send {what} email",
        )
    return EmailResult(success=True)


@router.post("/send-credentials", response_model=EmailResult)
async def send_credentials(data: CredentialsEmailRequest, emails: Emails, user: CurrentUser):
    sent = emails.send_credentials(data.name, data.email, data.password, data.login_url)
    return _result(sent, "credentials")


@router.post("/send-employee-details", response_model=EmailResult)
async def send_employee_details(data: EmployeeDetailsEmailRequest, emails: Emails, user: CurrentUser):
    """Email the customer the contact details of their travel expert."""
    sent = emails.send_employee_details(data.customer.model_dump(), data.employee.model_dump())
    return _result(sent, "employee details")


@router.post("/send-customer-details", response_model=EmailResult)
async def send_customer_details(data: CustomerDetailsEmailRequest, emails: Emails, user: CurrentUser):
    """Email the employee the details of the lead assigned to them."""
    sent = emails.send_customer_details(data.employee.model_dump(), data.lead.model_dump())
    return _result(sent, "customer details")


@router.post("/send-payment-link", response_model=EmailResult)
async def send_payment_link(data: PaymentLinkEmailRequest, emails: Emails, user: CurrentUser):
    if not data.member.get("email"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="member.email is required",
        )
    sent = emails.send_payment_link(data.member, data.itinerary, data.payment.model_dump())
    return _result(sent, "payment link")
