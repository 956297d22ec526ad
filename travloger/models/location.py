"""
Location catalog used to compose packages.

Custom plans pick a hotel from a HotelLocation and a vehicle from a
VehicleLocation. Fixed plans pick a FixedLocation, a number of days, a named
FixedPlan and one of its FixedPlanOption variants (adults x price per person).
"""

from typing import Any, Optional

from sqlalchemy import JSON, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import RecordBase


class HotelLocation(RecordBase):
    __tablename__ = "hotel_locations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<HotelLocation(id={self.id}, name='{self.name}', city='{self.city}')>"


class VehicleLocation(RecordBase):
    __tablename__ = "vehicle_locations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    rates: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<VehicleLocation(id={self.id}, name='{self.name}', city='{self.city}')>"


class Vehicle(RecordBase):
    __tablename__ = "vehicles"

    vehicle_type: Mapped[str] = mapped_column(String(100), nullable=False)
    rate: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    ac_extra: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("vehicle_locations.id", ondelete="CASCADE"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<Vehicle(id={self.id}, vehicle_type='{self.vehicle_type}')>"


class FixedLocation(RecordBase):
    __tablename__ = "fixed_locations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<FixedLocation(id={self.id}, name='{self.name}', city='{self.city}')>"


class FixedDay(RecordBase):
    """A duration option for fixed plans in a city (e.g. 5 days)."""

    __tablename__ = "fixed_days"

    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    days: Mapped[int] = mapped_column(Integer, nullable=False)
    label: Mapped[str] = mapped_column(String(100), default="")

    def __repr__(self) -> str:
        return f"<FixedDay(id={self.id}, city='{self.city}', days={self.days})>"


class FixedPlan(RecordBase):
    __tablename__ = "fixed_plans"

    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    fixed_location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("fixed_locations.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<FixedPlan(id={self.id}, name='{self.name}')>"


class FixedPlanOption(RecordBase):
    """A priced variant of a fixed plan."""

    __tablename__ = "fixed_plan_options"

    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    fixed_location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("fixed_locations.id", ondelete="CASCADE"), nullable=False
    )
    fixed_plan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("fixed_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    adults: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_person: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    rooms_vehicle: Mapped[str] = mapped_column(String(255), default="")

    def __repr__(self) -> str:
        return f"<FixedPlanOption(id={self.id}, plan={self.fixed_plan_id}, adults={self.adults})>"
