"""
Booking model - a confirmed sale of a package to a lead, paid through a payment link.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Enum as SQLEnum, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import RecordBase

BOOKING_STATUSES = ("Pending", "Confirmed", "Cancelled")
PAYMENT_STATUSES = ("Pending", "Paid", "Failed")


class Booking(RecordBase):
    """
    A booking for a lead. The payment link id/url are the ones issued by the
    payment provider; payment_id is filled once the link is paid.
    """

    __tablename__ = "bookings"

    lead_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("leads.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Customer
    customer: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    # Package
    package_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("packages.id", ondelete="SET NULL"), nullable=True
    )
    package_name: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False)
    travelers: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    travel_date: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    itinerary_details: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    # Financials
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    status: Mapped[str] = mapped_column(
        SQLEnum(*BOOKING_STATUSES, name="booking_status"),
        default="Pending",
        nullable=False,
    )
    payment_status: Mapped[str] = mapped_column(
        SQLEnum(*PAYMENT_STATUSES, name="booking_payment_status"),
        default="Pending",
        nullable=False,
    )

    # Sales agent (employee name)
    assigned_agent: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    # Payment provider references
    payment_link_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    payment_link_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    payment_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    booking_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def confirm_payment(self, payment_id: Optional[str] = None) -> None:
        """Mark the booking as paid and confirmed."""
        self.status = "Confirmed"
        self.payment_status = "Paid"
        if payment_id:
            self.payment_id = payment_id

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, customer='{self.customer}', status='{self.status}')>"
