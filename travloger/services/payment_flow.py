"""
Booking payment flow: turn a lead's chosen package into a paid booking.

Steps run in order and are not transactional:
    1. create a payment link with the provider
    2. insert the booking (Pending / Pending) referencing the link
    3. email the link to the customer

A failure at step 1 aborts before anything is written. A failure at step 3
keeps the booking and the link; the result reports email_sent=False so the
agent can resend or share the link manually.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from travloger.models.booking import Booking
from travloger.models.hotel import Hotel
from travloger.models.lead import Lead
from travloger.models.location import Vehicle
from travloger.models.package import Package
from travloger.services.email_service import EmailService
from travloger.services.razorpay_service import RazorpayService

logger = logging.getLogger(__name__)

SNAPSHOT_FIELDS = (
    "id",
    "name",
    "destination",
    "duration",
    "price",
    "plan_type",
    "service_type",
    "selected_hotel_id",
    "selected_vehicle_id",
    "fixed_adults",
    "fixed_price_per_person",
    "fixed_rooms_vehicle",
    "nights",
    "days",
)


class PaymentFlowError(Exception):
    """The flow cannot start (e.g. the package has no price)."""


@dataclass
class PaymentFlowResult:
    booking: Booking
    payment_link: str
    payment_link_id: str
    amount: float
    email_sent: bool
    email_error: Optional[str] = None


def compute_package_amount(package: Package, hotel: Optional[Hotel] = None) -> float:
    """
    Amount charged for a package:
    - custom plan with a selected hotel: MAP rate + extra bed
    - fixed plan: price per person x adults
    - otherwise: the package price
    """
    if hotel is not None:
        return float(hotel.map_rate or 0) + float(hotel.eb or 0)
    if package.fixed_price_per_person and package.fixed_adults:
        return float(package.fixed_price_per_person) * int(package.fixed_adults)
    return float(package.price or 0)


def _travelers(lead: Lead) -> int:
    try:
        return max(int(lead.number_of_travelers or 1), 1)
    except (TypeError, ValueError):
        return 1


def _package_snapshot(package: Package) -> dict[str, Any]:
    return {field: getattr(package, field) for field in SNAPSHOT_FIELDS}


def _itinerary_summary(
    package: Package,
    hotel: Optional[Hotel],
    vehicle: Optional[Vehicle],
) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "name": package.name,
        "destination": package.destination,
        "plan_type": package.plan_type,
        "service_type": package.service_type,
    }
    if hotel is not None:
        summary["hotel"] = {
            "name": hotel.name,
            "map_rate": hotel.map_rate,
            "eb": hotel.eb,
            "category": hotel.category,
        }
    if vehicle is not None:
        summary["vehicle"] = {
            "type": vehicle.vehicle_type,
            "rate": vehicle.rate,
            "ac_extra": vehicle.ac_extra,
        }
    if package.is_fixed_plan:
        summary["fixed_plan"] = {
            "days": package.days,
            "adults": package.fixed_adults,
            "price_per_person": package.fixed_price_per_person,
        }
    return summary


async def send_payment_link(
    db: AsyncSession,
    lead: Lead,
    package: Package,
    agent_name: str,
    payments: RazorpayService,
    emails: EmailService,
    callback_url: Optional[str] = None,
) -> PaymentFlowResult:
    """
    Run the payment flow for a lead and a package.

    Raises:
        PaymentFlowError: amount is zero.
        PaymentProviderError: the payment link could not be created.
    """
    hotel = await db.get(Hotel, package.selected_hotel_id) if package.selected_hotel_id else None
    vehicle = await db.get(Vehicle, package.selected_vehicle_id) if package.selected_vehicle_id else None

    amount = compute_package_amount(package, hotel)
    if amount <= 0:
        raise PaymentFlowError("Please set a valid amount for this package")

    destination = package.destination or lead.destination or ""

    # Step 1: payment link
    link = await payments.create_payment_link(
        amount=amount,
        customer_email=lead.email,
        customer_name=lead.name,
        customer_phone=lead.phone,
        description=f"Payment for {destination} travel package",
        reference_id=lead.id,
        callback_url=callback_url,
    )

    # Step 2: booking
    booking = Booking(
        lead_id=lead.id,
        customer=lead.name,
        email=lead.email,
        phone=lead.phone,
        package_id=package.id,
        package_name=package.name,
        destination=destination,
        travelers=_travelers(lead),
        amount=amount,
        travel_date=lead.travel_dates,
        assigned_agent=agent_name or "Unassigned",
        itinerary_details=_package_snapshot(package),
        payment_link_id=link["id"],
        payment_link_url=link["short_url"],
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    logger.info(
        "Booking %s created for lead %s with payment link %s",
        booking.id,
        lead.id,
        link["id"],
    )

    # Step 3: email
    email_sent = emails.send_payment_link(
        member={
            "name": lead.name,
            "email": lead.email,
            "phone": lead.phone,
            "lead_id": lead.id,
            "destination": lead.destination,
            "travel_date": lead.travel_dates,
            "travelers": lead.number_of_travelers,
        },
        itinerary=_itinerary_summary(package, hotel, vehicle),
        payment={"amount": amount, "link": link["short_url"]},
    )
    email_error = None
    if not email_sent:
        email_error = "Booking created but the payment link email could not be sent"
        logger.warning("Payment link email failed for booking %s (%s)", booking.id, lead.email)

    return PaymentFlowResult(
        booking=booking,
        payment_link=link["short_url"],
        payment_link_id=link["id"],
        amount=amount,
        email_sent=email_sent,
        email_error=email_error,
    )
