"""
Base models with common fields for all entities.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

DEFAULT_STATUS = "Active"
DEFAULT_CREATED_BY = "Travloger.in"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TimestampMixin:
    """Mixin adding created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class RecordBase(Base, TimestampMixin):
    """Abstract base for every table: integer primary key plus timestamps."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class AuditMixin:
    """
    Status and authorship columns shared by the CMS reference entities.
    `date` is the creation day as shown in the admin tables (DD-MM-YYYY).
    """

    status: Mapped[str] = mapped_column(String(20), default=DEFAULT_STATUS, nullable=False)
    created_by: Mapped[str] = mapped_column(String(100), default=DEFAULT_CREATED_BY, nullable=False)

    @property
    def date(self) -> Optional[str]:
        created_at = getattr(self, "created_at", None)
        if created_at is None:
            return None
        return created_at.strftime("%d-%m-%Y")
