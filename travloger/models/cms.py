"""
Small CMS reference tables edited from the admin panel:
activities, meal plans, room types, package themes, query statuses and
reusable day-itinerary snippets.
"""

from typing import Optional

from sqlalchemy import Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import AuditMixin, RecordBase


class Activity(RecordBase, AuditMixin):
    __tablename__ = "activities"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)

    def __repr__(self) -> str:
        return f"<Activity(id={self.id}, name='{self.name}')>"


class MealPlan(RecordBase, AuditMixin):
    __tablename__ = "meal_plans"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    meal_type: Mapped[str] = mapped_column(String(50), nullable=False)  # Breakfast, Lunch, Dinner...
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)

    def __repr__(self) -> str:
        return f"<MealPlan(id={self.id}, name='{self.name}', meal_type='{self.meal_type}')>"


class RoomType(RecordBase, AuditMixin):
    __tablename__ = "room_types"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<RoomType(id={self.id}, name='{self.name}')>"


class PackageTheme(RecordBase, AuditMixin):
    __tablename__ = "package_themes"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<PackageTheme(id={self.id}, name='{self.name}')>"


class QueryStatus(RecordBase, AuditMixin):
    """
    A lead pipeline status.
    take_note: prompt the agent for a note when a lead moves to this status.
    lock_status: leads in this status can no longer be edited.
    dashboard: show the status as a counter on the dashboard.
    """

    __tablename__ = "query_statuses"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    color: Mapped[str] = mapped_column(String(7), default="#3B82F6")
    take_note: Mapped[bool] = mapped_column(Boolean, default=False)
    lock_status: Mapped[bool] = mapped_column(Boolean, default=False)
    dashboard: Mapped[bool] = mapped_column(Boolean, default=False)

    def __repr__(self) -> str:
        return f"<QueryStatus(id={self.id}, name='{self.name}')>"


class DayItinerary(RecordBase, AuditMixin):
    """Reusable day description pasted into itineraries."""

    __tablename__ = "day_itineraries"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    detail: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<DayItinerary(id={self.id}, title='{self.title}')>"
