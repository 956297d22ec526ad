"""
Transfer and TransferRate models (CMS).
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travloger.models.base import AuditMixin, RecordBase

TRANSFER_TYPES = ("SIC", "PVT")  # seat-in-coach / private


class Transfer(RecordBase, AuditMixin):
    """A transfer product (airport pickup, intercity drive...)."""

    __tablename__ = "transfers"

    query_name: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    rates: Mapped[List["TransferRate"]] = relationship(
        "TransferRate",
        back_populates="transfer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Transfer(id={self.id}, query_name='{self.query_name}')>"


class TransferRate(RecordBase):
    __tablename__ = "transfer_rates"
    __table_args__ = (
        CheckConstraint("type IN ('SIC', 'PVT')", name="ck_transfer_rates_type"),
    )

    transfer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("transfers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)
    type: Mapped[str] = mapped_column(String(3), nullable=False)
    adult_count: Mapped[int] = mapped_column(Integer, default=1)
    child_count: Mapped[int] = mapped_column(Integer, default=0)
    vehicle: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    adult_price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    child_price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)

    transfer: Mapped["Transfer"] = relationship("Transfer", back_populates="rates")

    def __repr__(self) -> str:
        return f"<TransferRate(id={self.id}, transfer_id={self.transfer_id}, type='{self.type}')>"
