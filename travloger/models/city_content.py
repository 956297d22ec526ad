"""
CityContent model - editable landing-page sections of a destination page.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import Base

CITY_SECTIONS = (
    "hero",
    "header",
    "contact",
    "trip_options",
    "trip_highlights",
    "usp",
    "faq",
    "group_cta",
    "reviews",
    "brands",
)


class CityContent(Base):
    """One row per city slug; each section is a free JSON document."""

    __tablename__ = "city_content"

    slug: Mapped[str] = mapped_column(String(120), primary_key=True)

    hero: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    header: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    contact: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    trip_options: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    trip_highlights: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    usp: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    faq: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    group_cta: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    reviews: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    brands: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def sections(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in CITY_SECTIONS}

    def __repr__(self) -> str:
        return f"<CityContent(slug='{self.slug}')>"
