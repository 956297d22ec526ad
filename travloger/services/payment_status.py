"""
Payment status reconciliation for bookings.

Bookings are confirmed from three places: the customer redirect after
checkout, the provider webhook, and a manual "check payment" from the admin
panel which asks the provider for the link status.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.models.booking import Booking
from travloger.services.razorpay_service import PaymentProviderError, RazorpayService, to_paise

logger = logging.getLogger(__name__)

LINK_SEARCH_WINDOW_SECONDS = 3600


async def find_booking_by_link(db: AsyncSession, link_id: str) -> Optional[Booking]:
    result = await db.execute(
        select(Booking)
        .where(Booking.payment_link_id == link_id)
        .order_by(Booking.created_at.desc())
    )
    return result.scalars().first()


async def confirm_booking_payment(
    db: AsyncSession,
    booking: Booking,
    payment_id: Optional[str] = None,
) -> Booking:
    """Mark a booking Confirmed/Paid and persist it."""
    booking.confirm_payment(payment_id)
    await db.commit()
    await db.refresh(booking)
    logger.info("Booking %s confirmed (payment %s)", booking.id, payment_id)
    return booking


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _matches(link: dict, booking: Booking) -> bool:
    if booking.payment_link_url and link.get("short_url") == booking.payment_link_url:
        return True
    customer = link.get("customer") or {}
    return (
        customer.get("email") == booking.email
        and link.get("amount") == to_paise(booking.amount)
    )


async def _discover_link_id(booking: Booking, payments: RazorpayService) -> Optional[str]:
    """Search links created around the booking time for one that matches it."""
    created = _as_utc(booking.created_at).timestamp()
    links = await payments.list_payment_links(
        from_ts=int(created - LINK_SEARCH_WINDOW_SECONDS),
        to_ts=int(created + LINK_SEARCH_WINDOW_SECONDS),
    )
    for link in links:
        if _matches(link, booking):
            return link.get("id")
    return None


async def sync_booking_payment(
    db: AsyncSession,
    booking: Booking,
    payments: RazorpayService,
) -> dict:
    """
    Ask the provider whether the booking's payment link was paid.

    Provider failures are reported in the returned dict; the booking is left
    unchanged in that case.
    """
    outcome = {
        "booking_id": booking.id,
        "updated": False,
        "status": booking.status,
        "payment_status": booking.payment_status,
        "link_status": None,
        "error": None,
    }

    try:
        if not booking.payment_link_id:
            link_id = await _discover_link_id(booking, payments)
            if not link_id:
                outcome["error"] = "No payment link found for this booking"
                return outcome
            booking.payment_link_id = link_id
            await db.commit()
            await db.refresh(booking)

        link = await payments.fetch_payment_link(booking.payment_link_id)
    except PaymentProviderError as exc:
        logger.warning("Payment check failed for booking %s: %s", booking.id, exc)
        outcome["error"] = str(exc)
        return outcome

    outcome["link_status"] = link.get("status")

    if link.get("status") == "paid" and booking.payment_status != "Paid":
        link_payments = link.get("payments") or []
        payment_id = link_payments[0].get("payment_id") if link_payments else None
        await confirm_booking_payment(db, booking, payment_id)
        outcome["updated"] = True

    outcome["status"] = booking.status
    outcome["payment_status"] = booking.payment_status
    return outcome
