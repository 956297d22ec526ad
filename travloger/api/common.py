"""
Helpers shared by the reference-data (CMS) routers.
"""

from datetime import datetime
from typing import Any, Optional, Type, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class AuditResponse(BaseModel):
    """Audit columns every CMS row exposes."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    created_by: str
    date: Optional[str] = None
    created_at: datetime
    updated_at: datetime


async def get_or_404(db: AsyncSession, model: Type[ModelT], obj_id: Any, label: str) -> ModelT:
    obj = await db.get(model, obj_id)
    if not obj:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    return obj


async def ensure_unique(
    db: AsyncSession,
    model,
    column,
    value: str,
    label: str,
    exclude_id: Optional[int] = None,
) -> None:
    """Raise 409 when another row already uses `value` (case-insensitive)."""
    query = select(model).where(func.lower(column) == value.strip().lower())
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    existing = await db.execute(query.limit(1))
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{label} '{value.strip()}' already exists",
        )


def apply_update(obj: Any, data: BaseModel, exclude: Optional[set[str]] = None) -> None:
    """
    Copy the fields explicitly sent in a partial update onto a row.

    An explicit null on a NOT NULL column answers 422 and leaves the row untouched.
    """
    values = data.model_dump(exclude_unset=True, exclude=exclude)
    columns = inspect(obj).mapper.columns
    not_nullable = sorted(
        field for field, value in values.items()
        if value is None and field in columns and not columns[field].nullable
    )
    if not_nullable:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{', '.join(not_nullable)} cannot be null",
        )

    for field, value in values.items():
        setattr(obj, field, value)
