"""
Itinerary models - day-by-day trip programmes built for a lead.

Itinerary
  └── ItineraryDay (day_number, location, date)
        └── ItineraryEvent (hotel, transfer, activity... priced in event_data)
"""

from datetime import date, datetime
from datetime import date as DayDate
from typing import Any, List, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travloger.models.base import RecordBase


class Itinerary(RecordBase):
    """A trip programme."""

    __tablename__ = "itineraries"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    adults: Mapped[int] = mapped_column(Integer, default=1)
    children: Mapped[int] = mapped_column(Integer, default=0)
    destinations: Mapped[str] = mapped_column(String(500), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    marketplace_shared: Mapped[bool] = mapped_column(Boolean, default=False)
    cover_photo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Free-form documents edited by the itinerary builder
    package_terms: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    pricing_data: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    status: Mapped[str] = mapped_column(String(20), default="pending")
    confirmed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    lead_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("leads.id", ondelete="SET NULL"), nullable=True, index=True
    )

    days: Mapped[List["ItineraryDay"]] = relationship(
        "ItineraryDay",
        back_populates="itinerary",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ItineraryDay.day_number",
    )

    def __repr__(self) -> str:
        return f"<Itinerary(id={self.id}, name='{self.name}')>"


class ItineraryDay(RecordBase):
    __tablename__ = "itinerary_days"

    itinerary_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[Optional[DayDate]] = mapped_column(Date, nullable=True)

    itinerary: Mapped["Itinerary"] = relationship("Itinerary", back_populates="days")
    events: Mapped[List["ItineraryEvent"]] = relationship(
        "ItineraryEvent",
        back_populates="day",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ItineraryEvent.sort_order",
    )

    def __repr__(self) -> str:
        return f"<ItineraryDay(id={self.id}, itinerary_id={self.itinerary_id}, day={self.day_number})>"


class ItineraryEvent(RecordBase):
    __tablename__ = "itinerary_events"

    day_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("itinerary_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), default="New Event")
    subtitle: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)  # "HH:MM"
    end_time: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    event_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    day: Mapped["ItineraryDay"] = relationship("ItineraryDay", back_populates="events")

    @property
    def price(self) -> float:
        """Price carried in event_data (numbers or numeric strings), 0 otherwise."""
        raw = (self.event_data or {}).get("price")
        if raw in (None, ""):
            return 0.0
        try:
            return float(raw)
        except (TypeError, ValueError):
            return 0.0

    def __repr__(self) -> str:
        return f"<ItineraryEvent(id={self.id}, day_id={self.day_id}, title='{self.title}')>"
