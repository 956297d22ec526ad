"""
Employee model - agency staff who log into the employee portal.
EmployeeSession tracks the heartbeat of employees currently online.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travloger.models.base import Base, RecordBase


class Employee(RecordBase):
    """An agency employee (sales agent or admin)."""

    __tablename__ = "employees"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    destination: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)

    role: Mapped[str] = mapped_column(String(50), default="employee", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="Active", nullable=False)

    # Credentials (the hosted auth user is linked through supabase_user_id)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_first_login: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    supabase_user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    session: Mapped[Optional["EmployeeSession"]] = relationship(
        "EmployeeSession",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, email='{self.email}', name='{self.name}')>"


class EmployeeSession(Base):
    """Last heartbeat of an employee; one row per employee."""

    __tablename__ = "employee_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    last_activity: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    employee: Mapped["Employee"] = relationship("Employee", back_populates="session")

    def __repr__(self) -> str:
        return f"<EmployeeSession(employee_id={self.employee_id}, last_activity={self.last_activity})>"
