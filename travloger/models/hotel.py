"""
Hotel and HotelRate models (CMS).
Hotel rates are seasonal per room type and meal plan, priced per occupancy.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travloger.models.base import AuditMixin, RecordBase

Money = Numeric(12, 2, asdecimal=False)


class Hotel(RecordBase, AuditMixin):
    """A hotel usable in itineraries and custom-plan packages."""

    __tablename__ = "hotels"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    category: Mapped[int] = mapped_column(Integer, default=3)  # star rating
    price: Mapped[float] = mapped_column(Money, default=0)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    icon_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Package pricing: MAP (breakfast + dinner) rate and extra-bed supplement
    map_rate: Mapped[float] = mapped_column(Money, default=0)
    eb: Mapped[float] = mapped_column(Money, default=0)
    location_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("hotel_locations.id", ondelete="CASCADE"), nullable=True, index=True
    )

    rates: Mapped[List["HotelRate"]] = relationship(
        "HotelRate",
        back_populates="hotel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name='{self.name}', destination='{self.destination}')>"


class HotelRate(RecordBase):
    """Seasonal rate of a hotel room type."""

    __tablename__ = "hotel_rates"

    hotel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)
    room_type: Mapped[str] = mapped_column(String(100), nullable=False)
    meal_plan: Mapped[str] = mapped_column(String(20), default="APAI")

    # Per-night price by occupancy; cwb/cnb = child with/without bed
    single: Mapped[float] = mapped_column(Money, default=0)
    double: Mapped[float] = mapped_column(Money, default=0)
    triple: Mapped[float] = mapped_column(Money, default=0)
    quad: Mapped[float] = mapped_column(Money, default=0)
    cwb: Mapped[float] = mapped_column(Money, default=0)
    cnb: Mapped[float] = mapped_column(Money, default=0)

    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="rates")

    def __repr__(self) -> str:
        return f"<HotelRate(id={self.id}, hotel_id={self.hotel_id}, room_type='{self.room_type}')>"
