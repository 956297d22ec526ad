"""
Payment-link endpoints (Razorpay).

create-link is called by the back-office; callback and webhook are called by
Razorpay (customer redirect and server-to-server notification) and carry no
bearer token.
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from travloger.api.deps import CurrentUser, DbSession, PaymentService
from travloger.config import get_settings
from travloger.services.payment_status import confirm_booking_payment, find_booking_by_link
from travloger.services.razorpay_service import PaymentProviderError

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

HANDLED_EVENTS = ("payment_link.paid", "payment.captured")


# Schemas
class CreatePaymentLinkRequest(BaseModel):
    amount: Optional[float] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    description: Optional[str] = None
    booking_id: Optional[str] = None


class CreatePaymentLinkResponse(BaseModel):
    success: bool
    payment_link: str
    payment_link_id: str
    order_id: Optional[str] = None


# Endpoints
@router.post("/create-link", response_model=CreatePaymentLinkResponse)
async def create_payment_link(
    data: CreatePaymentLinkRequest,
    payments: PaymentService,
    user: CurrentUser,
):
    """Create a standalone payment link."""
    if not data.amount or not data.customer_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Amount and customer email are required",
        )

    if not payments.is_configured:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Razorpay credentials not configured",
        )

    try:
        link = await payments.create_payment_link(
            amount=data.amount,
            customer_email=data.customer_email,
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            description=data.description,
            reference_id=data.booking_id,
            callback_url=f"{settings.api_base_url.rstrip('/')}/api/payments/callback",
        )
    except PaymentProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to create payment link: {e}",
        )

    return CreatePaymentLinkResponse(
        success=True,
        payment_link=link["short_url"],
        payment_link_id=link["id"],
        order_id=link.get("order_id"),
    )


@router.get("/callback")
async def payment_callback(
    db: DbSession,
    razorpay_payment_link_id: Optional[str] = None,
    razorpay_payment_link_status: Optional[str] = None,
    razorpay_payment_id: Optional[str] = None,
):
    """
    Customer redirect after checkout. Confirms the booking when the link is
    paid, then sends the browser to the success or failure page.
    """
    frontend = settings.frontend_url.rstrip("/")

    if razorpay_payment_link_status == "paid" and razorpay_payment_link_id:
        booking = await find_booking_by_link(db, razorpay_payment_link_id)
        if booking:
            await confirm_booking_payment(db, booking, razorpay_payment_id)
            return RedirectResponse(
                url=f"{frontend}/payment-success?bookingId={booking.id}",
                status_code=status.HTTP_302_FOUND,
            )
        logger.warning("Paid callback for unknown payment link %s", razorpay_payment_link_id)

    return RedirectResponse(
        url=f"{frontend}/payment-failed",
        status_code=status.HTTP_302_FOUND,
    )


@router.post("/webhook")
async def payment_webhook(
    request: Request,
    db: DbSession,
    payments: PaymentService,
    x_razorpay_signature: Optional[str] = Header(None),
):
    """
    Razorpay server-to-server notification.
    Handles payment_link.paid and payment.captured; other events are acknowledged.
    """
    body = await request.body()

    if not payments.verify_webhook_signature(body, x_razorpay_signature or ""):
        logger.warning("[Razorpay webhook] Invalid signature")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid webhook signature",
        )

    try:
        event = json.loads(body or b"{}")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON payload",
        )
    if not isinstance(event, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Webhook payload must be a JSON object",
        )

    event_name = event.get("event")
    logger.info("[Razorpay webhook] Received %s", event_name)

    if event_name not in HANDLED_EVENTS:
        return {"received": True, "handled": False}

    payload = event.get("payload") or {}
    link_entity = (payload.get("payment_link") or {}).get("entity") or {}
    payment_entity = (payload.get("payment") or {}).get("entity") or {}

    link_id = link_entity.get("id") or payment_entity.get("payment_link_id")
    payment_id = payment_entity.get("id")

    booking = await find_booking_by_link(db, link_id) if link_id else None
    if not booking:
        logger.warning("[Razorpay webhook] No booking for payment link %s", link_id)
        return {"received": True, "handled": False}

    await confirm_booking_payment(db, booking, payment_id)
    return {"received": True, "handled": True, "booking_id": booking.id}
