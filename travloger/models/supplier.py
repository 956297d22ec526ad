"""
Supplier model - hotels, transport companies and local partners the agency books with.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import AuditMixin, RecordBase


class Supplier(RecordBase, AuditMixin):
    """A supplier contact."""

    __tablename__ = "suppliers"

    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Contact person
    title: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # Mr, Ms, Dr...
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_country_code: Mapped[str] = mapped_column(String(8), default="+91")
    mobile_number: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def contact_name(self) -> str:
        parts = [self.title, self.first_name, self.last_name]
        return " ".join(p for p in parts if p)

    def __repr__(self) -> str:
        return f"<Supplier(id={self.id}, company_name='{self.company_name}')>"
