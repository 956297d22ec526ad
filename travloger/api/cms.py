"""
Reference-data endpoints for the small CMS tables:
activities, meal plans, room types, package themes, query statuses and
day-itinerary snippets.

They all share the same list/create/get/update/delete shape, so each router
is produced by `build_crud_router`. Tables with a unique name answer 409 on a
duplicate.
"""

import logging
from typing import List, Optional, Type

from fastapi import APIRouter, status
from pydantic import BaseModel, Field, create_model
from sqlalchemy import func, select

from travloger.api.common import AuditResponse, apply_update, ensure_unique, get_or_404
from travloger.api.deps import CurrentUser, DbSession
from travloger.models.cms import (
    Activity,
    DayItinerary,
    MealPlan,
    PackageTheme,
    QueryStatus,
    RoomType,
)

logger = logging.getLogger(__name__)


def build_crud_router(
    model,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[AuditResponse],
    label: str,
    unique_field: Optional[str] = None,
    order_by=None,
    filter_by_destination: bool = False,
) -> APIRouter:
    """
    Build the five CRUD endpoints for a CMS table.

    Lists are newest first unless `order_by` is given. With
    `filter_by_destination`, the list accepts `?destination=` (case-insensitive,
    "all" disables the filter).
    """
    router = APIRouter()
    list_schema = create_model(
        label.title().replace(" ", "") + "ListResponse",
        items=(List[response_schema], ...),
        total=(int, ...),
    )
    ordering = order_by if order_by is not None else (model.created_at.desc(), model.id.desc())
    unique_column = getattr(model, unique_field) if unique_field else None

    async def _list(db, destination: Optional[str] = None):
        query = select(model)
        if destination and destination.lower() != "all":
            query = query.where(func.lower(model.destination) == destination.strip().lower())
        result = await db.execute(query.order_by(*ordering))
        rows = result.scalars().all()
        return list_schema(
            items=[response_schema.model_validate(r) for r in rows],
            total=len(rows),
        )

    if filter_by_destination:
        @router.get("", response_model=list_schema)
        async def list_items(db: DbSession, destination: Optional[str] = None):
            return await _list(db, destination)
    else:
        @router.get("", response_model=list_schema)
        async def list_items(db: DbSession):
            return await _list(db)

    @router.post("", response_model=response_schema, status_code=status.HTTP_201_CREATED)
    async def create_item(data: create_schema, db: DbSession, user: CurrentUser):
        values = data.model_dump()
        if unique_column is not None:
            values[unique_field] = values[unique_field].strip()
            await ensure_unique(db, model, unique_column, values[unique_field], label)

        obj = model(**values)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
        logger.info(f"Created {label.lower()} {obj.id}")
        return response_schema.model_validate(obj)

    @router.get("/{item_id}", response_model=response_schema)
    async def get_item(item_id: int, db: DbSession):
        obj = await get_or_404(db, model, item_id, label)
        return response_schema.model_validate(obj)

    @router.put("/{item_id}", response_model=response_schema)
    async def update_item(item_id: int, data: update_schema, db: DbSession, user: CurrentUser):
        obj = await get_or_404(db, model, item_id, label)
        new_value = getattr(data, unique_field, None) if unique_field else None
        if new_value is not None:
            new_value = new_value.strip()
            setattr(data, unique_field, new_value)
            await ensure_unique(db, model, unique_column, new_value, label, exclude_id=item_id)

        apply_update(obj, data)
        await db.commit()
        await db.refresh(obj)
        return response_schema.model_validate(obj)

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_item(item_id: int, db: DbSession, user: CurrentUser):
        obj = await get_or_404(db, model, item_id, label)
        await db.delete(obj)
        await db.commit()

    return router


# ============================================================================
# Activities
# ============================================================================

class ActivityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=100)
    price: float = Field(0, ge=0)
    status: str = "Active"


class ActivityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    destination: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None


class ActivityResponse(AuditResponse):
    name: str
    destination: str
    price: float


# ============================================================================
# Meal plans
# ============================================================================

class MealPlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=100)
    meal_type: str = Field(..., min_length=1, max_length=50)
    price: float = Field(0, ge=0)
    status: str = "Active"


class MealPlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    destination: Optional[str] = Field(None, min_length=1, max_length=100)
    meal_type: Optional[str] = Field(None, min_length=1, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None


class MealPlanResponse(AuditResponse):
    name: str
    destination: str
    meal_type: str
    price: float


# ============================================================================
# Room types and package themes
# ============================================================================

class NamedCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    status: str = "Active"


class NamedUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[str] = None


class NamedResponse(AuditResponse):
    name: str


# ============================================================================
# Query statuses
# ============================================================================

class QueryStatusCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field("#3B82F6", pattern=r"^#[0-9A-Fa-f]{6}$")
    take_note: bool = False
    lock_status: bool = False
    dashboard: bool = False
    status: str = "Active"


class QueryStatusUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    take_note: Optional[bool] = None
    lock_status: Optional[bool] = None
    dashboard: Optional[bool] = None
    status: Optional[str] = None


class QueryStatusResponse(AuditResponse):
    name: str
    color: str
    take_note: bool
    lock_status: bool
    dashboard: bool


# ============================================================================
# Day itineraries
# ============================================================================

class DayItineraryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    detail: Optional[str] = None
    status: str = "Active"


class DayItineraryUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    detail: Optional[str] = None
    status: Optional[str] = None


class DayItineraryResponse(AuditResponse):
    title: str
    detail: Optional[str]


activities_router = build_crud_router(
    Activity, ActivityCreate, ActivityUpdate, ActivityResponse,
    label="Activity",
    filter_by_destination=True,
)
meal_plans_router = build_crud_router(
    MealPlan, MealPlanCreate, MealPlanUpdate, MealPlanResponse,
    label="Meal plan",
    filter_by_destination=True,
)
room_types_router = build_crud_router(
    RoomType, NamedCreate, NamedUpdate, NamedResponse,
    label="Room type",
    unique_field="name",
)
package_themes_router = build_crud_router(
    PackageTheme, NamedCreate, NamedUpdate, NamedResponse,
    label="Package theme",
    unique_field="name",
)
query_statuses_router = build_crud_router(
    QueryStatus, QueryStatusCreate, QueryStatusUpdate, QueryStatusResponse,
    label="Query status",
    unique_field="name",
)
day_itineraries_router = build_crud_router(
    DayItinerary, DayItineraryCreate, DayItineraryUpdate, DayItineraryResponse,
    label="Day itinerary",
)
