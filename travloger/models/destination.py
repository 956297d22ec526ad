"""
Destination model - cities/regions the agency sells, keyed by a URL slug.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from travloger.models.base import AuditMixin, RecordBase


class Destination(RecordBase, AuditMixin):
    __tablename__ = "destinations"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name='{self.name}', slug='{self.slug}')>"
