"""
QueryPayment model - payments received against a lead (query), recorded by billing.
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import RecordBase


class QueryPayment(RecordBase):
    """A single payment line on a lead."""

    __tablename__ = "query_payments"

    query_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True
    )
    trans_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # UPI, Card, Bank transfer...
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    payment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="Pending", nullable=False)
    convenience_fee: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)

    def __repr__(self) -> str:
        return f"<QueryPayment(id={self.id}, query_id={self.query_id}, amount={self.amount})>"
