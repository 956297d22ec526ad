"""
Package model - sellable travel packages shown on the website and assigned to leads.

A package is either a "Custom Plan" (hotel + vehicle picked from the location
catalog) or a "Fixed Plan" (fixed days/plan/variant with a per-person price).
Both variants share one table; variant columns are nullable.
"""

from typing import Any, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import RecordBase

PLAN_CUSTOM = "Custom Plan"
PLAN_FIXED = "Fixed Plan"

DEFAULT_HIGHLIGHTS = ["Customized experience", "Professional service"]
DEFAULT_INCLUDES = ["Accommodation", "Transportation"]


class Package(RecordBase):
    """A travel package (custom or fixed plan)."""

    __tablename__ = "packages"

    # Identity
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    route: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city_slug: Mapped[Optional[str]] = mapped_column(String(120), nullable=True, index=True)

    # Duration
    duration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    nights: Mapped[int] = mapped_column(Integer, default=0)
    days: Mapped[int] = mapped_column(Integer, default=0)

    # Pricing
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    original_price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)

    # Presentation
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    highlights: Mapped[Optional[list[Any]]] = mapped_column(JSON, nullable=True)
    includes: Mapped[Optional[list[Any]]] = mapped_column(JSON, nullable=True)
    category: Mapped[str] = mapped_column(String(50), default="Adventure")
    status: Mapped[str] = mapped_column(String(20), default="Active")
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    bookings_count: Mapped[int] = mapped_column(Integer, default=0)

    trip_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # custom / group
    plan_type: Mapped[str] = mapped_column(String(20), default=PLAN_CUSTOM, nullable=False, index=True)

    # Custom plan selections
    service_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    hotel_location_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("hotel_locations.id", ondelete="SET NULL"), nullable=True
    )
    vehicle_location_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("vehicle_locations.id", ondelete="SET NULL"), nullable=True
    )
    selected_hotel_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("hotels.id", ondelete="SET NULL"), nullable=True
    )
    selected_vehicle_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True
    )

    # Fixed plan selections
    fixed_days_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("fixed_days.id", ondelete="SET NULL"), nullable=True
    )
    fixed_location_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("fixed_locations.id", ondelete="SET NULL"), nullable=True
    )
    fixed_plan_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("fixed_plans.id", ondelete="SET NULL"), nullable=True
    )
    fixed_variant_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("fixed_plan_options.id", ondelete="SET NULL"), nullable=True
    )
    fixed_adults: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    fixed_price_per_person: Mapped[Optional[float]] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )
    fixed_rooms_vehicle: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    @property
    def is_fixed_plan(self) -> bool:
        return self.plan_type == PLAN_FIXED

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, name='{self.name}', plan_type='{self.plan_type}')>"
