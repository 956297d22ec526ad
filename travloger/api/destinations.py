"""
Destination endpoints.

A destination's slug is derived from its name and is what the website and the
city content pages use as a key. Names are unique regardless of case, and
two names that reduce to the same slug conflict.
"""

from typing import List, Optional

from fastapi import APIRouter, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select

from travloger.api.common import AuditResponse, ensure_unique, get_or_404
from travloger.api.deps import CurrentUser, DbSession
from travloger.models.destination import Destination
from travloger.utils import slugify

router = APIRouter()


class DestinationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    status: str = "Active"

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class DestinationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class DestinationResponse(AuditResponse):
    name: str
    slug: str


class DestinationListResponse(BaseModel):
    items: List[DestinationResponse]
    total: int


@router.get("", response_model=DestinationListResponse)
async def list_destinations(db: DbSession):
    """List destinations alphabetically. Public: the website menus read it."""
    result = await db.execute(select(Destination).order_by(Destination.name))
    destinations = result.scalars().all()
    return DestinationListResponse(
        items=[DestinationResponse.model_validate(d) for d in destinations],
        total=len(destinations),
    )


@router.post("", response_model=DestinationResponse, status_code=status.HTTP_201_CREATED)
async def create_destination(data: DestinationCreate, db: DbSession, user: CurrentUser):
    slug = slugify(data.name)
    await ensure_unique(db, Destination, Destination.name, data.name, "Destination")
    await ensure_unique(db, Destination, Destination.slug, slug, "Destination slug")

    destination = Destination(name=data.name, slug=slug, status=data.status)
    db.add(destination)
    await db.commit()
    await db.refresh(destination)
    return DestinationResponse.model_validate(destination)


@router.get("/{destination_id}", response_model=DestinationResponse)
async def get_destination(destination_id: int, db: DbSession):
    destination = await get_or_404(db, Destination, destination_id, "Destination")
    return DestinationResponse.model_validate(destination)


@router.put("/{destination_id}", response_model=DestinationResponse)
async def update_destination(
    destination_id: int,
    data: DestinationUpdate,
    db: DbSession,
    user: CurrentUser,
):
    destination = await get_or_404(db, Destination, destination_id, "Destination")

    if data.name is not None and data.name != destination.name:
        await ensure_unique(
            db, Destination, Destination.name, data.name, "Destination", exclude_id=destination_id
        )
        slug = slugify(data.name)
        await ensure_unique(
            db, Destination, Destination.slug, slug, "Destination slug", exclude_id=destination_id
        )
        destination.name = data.name
        destination.slug = slug
    if data.status is not None:
        destination.status = data.status

    await db.commit()
    await db.refresh(destination)
    return DestinationResponse.model_validate(destination)


@router.delete("/{destination_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_destination(destination_id: int, db: DbSession, user: CurrentUser):
    destination = await get_or_404(db, Destination, destination_id, "Destination")
    await db.delete(destination)
    await db.commit()
