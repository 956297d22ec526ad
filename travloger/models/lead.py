"""
Lead model - a travel enquiry ("query") coming from the website or an agent.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import RecordBase


class Lead(RecordBase):
    """A customer enquiry, optionally assigned to an employee and a package."""

    __tablename__ = "leads"

    # Customer
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)

    # Trip request
    number_of_travelers: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    travel_dates: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    destination: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    custom_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30), default="New", nullable=False)

    # Assignment (denormalized so the lead list reads without joins)
    assigned_employee_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True
    )
    assigned_employee_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    assigned_employee_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    assigned_package_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("packages.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Lead(id={self.id}, name='{self.name}', destination='{self.destination}')>"
