"""
Package endpoints.

Custom plans and fixed plans live in the same table and are told apart by
plan_type. Missing presentation fields get sensible defaults on create.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import func, or_, select

from travloger.api.common import apply_update
from travloger.api.deps import CurrentUser, DbSession
from travloger.models.package import (
    DEFAULT_HIGHLIGHTS,
    DEFAULT_INCLUDES,
    PLAN_CUSTOM,
    PLAN_FIXED,
    Package,
)
from travloger.utils import slugify, title_case_destination

router = APIRouter()

PlanType = Literal["Custom Plan", "Fixed Plan"]

CUSTOM_FIELDS = (
    "service_type",
    "hotel_location_id",
    "vehicle_location_id",
    "selected_hotel_id",
    "selected_vehicle_id",
)
FIXED_FIELDS = (
    "fixed_days_id",
    "fixed_location_id",
    "fixed_plan_id",
    "fixed_variant_id",
    "fixed_adults",
    "fixed_price_per_person",
    "fixed_rooms_vehicle",
)


# ============================================================================
# Schemas
# ============================================================================

class PackageFields(BaseModel):
    route: Optional[str] = None
    city_slug: Optional[str] = None
    duration: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    highlights: Optional[List[Any]] = None
    includes: Optional[List[Any]] = None
    category: Optional[str] = None
    status: Optional[str] = None
    featured: Optional[bool] = None
    image: Optional[str] = None
    nights: Optional[int] = Field(None, ge=0)
    days: Optional[int] = Field(None, ge=0)
    trip_type: Optional[str] = None

    # Custom plan
    service_type: Optional[str] = None
    hotel_location_id: Optional[int] = None
    vehicle_location_id: Optional[int] = None
    selected_hotel_id: Optional[int] = None
    selected_vehicle_id: Optional[int] = None

    # Fixed plan
    fixed_days_id: Optional[int] = None
    fixed_location_id: Optional[int] = None
    fixed_plan_id: Optional[int] = None
    fixed_variant_id: Optional[int] = None
    fixed_adults: Optional[int] = Field(None, ge=1)
    fixed_price_per_person: Optional[float] = Field(None, ge=0)
    fixed_rooms_vehicle: Optional[str] = None


class PackageCreate(PackageFields):
    name: Optional[str] = None
    destination: str = Field(..., min_length=1)
    plan_type: PlanType = PLAN_CUSTOM


class PackageUpdate(PackageFields):
    name: Optional[str] = None
    destination: Optional[str] = None
    plan_type: Optional[PlanType] = None


class PackageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    destination: str
    route: Optional[str]
    city_slug: Optional[str]
    duration: Optional[str]
    price: float
    original_price: float
    description: Optional[str]
    highlights: Optional[List[Any]]
    includes: Optional[List[Any]]
    category: str
    status: str
    featured: bool
    image: Optional[str]
    nights: int
    days: int
    trip_type: Optional[str]
    plan_type: str
    bookings_count: int

    service_type: Optional[str]
    hotel_location_id: Optional[int]
    vehicle_location_id: Optional[int]
    selected_hotel_id: Optional[int]
    selected_vehicle_id: Optional[int]

    fixed_days_id: Optional[int]
    fixed_location_id: Optional[int]
    fixed_plan_id: Optional[int]
    fixed_variant_id: Optional[int]
    fixed_adults: Optional[int]
    fixed_price_per_person: Optional[float]
    fixed_rooms_vehicle: Optional[str]

    created_at: datetime
    updated_at: datetime


class PackageListResponse(BaseModel):
    items: List[PackageResponse]
    total: int


# ============================================================================
# Helpers
# ============================================================================

def build_package(data: PackageCreate) -> Package:
    """Create a Package from a request, filling defaults and dropping the other plan's fields."""
    values = data.model_dump(exclude_none=True)
    destination = data.destination.strip()
    is_fixed = data.plan_type == PLAN_FIXED

    dropped = CUSTOM_FIELDS if is_fixed else FIXED_FIELDS
    for field in dropped:
        values.pop(field, None)

    values["destination"] = destination
    values["name"] = (data.name or "").strip() or f"{title_case_destination(destination)} Itinerary"
    values.setdefault("city_slug", slugify(destination))
    if "duration" not in values and data.days and data.nights:
        values["duration"] = f"{data.days} days / {data.nights} nights"
    if "price" not in values:
        values["price"] = data.fixed_price_per_person if is_fixed and data.fixed_price_per_person else 0
    values.setdefault(
        "description",
        f"{'Fixed Plan' if is_fixed else 'Custom Plan'} for {destination}",
    )
    values.setdefault("highlights", list(DEFAULT_HIGHLIGHTS))
    values.setdefault("includes", list(DEFAULT_INCLUDES))
    values.setdefault("trip_type", "group" if is_fixed else "custom")

    return Package(**values)


async def _get_package_or_404(db: DbSession, package_id: int) -> Package:
    package = await db.get(Package, package_id)
    if not package:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Package not found",
        )
    return package


# ============================================================================
# Endpoints
# ============================================================================

@router.get("", response_model=PackageListResponse)
async def list_packages(
    db: DbSession,
    plan_type: Optional[PlanType] = None,
    destination: Optional[str] = None,
):
    """List packages, newest first. Public: the website reads it."""
    query = select(Package)
    if plan_type:
        query = query.where(Package.plan_type == plan_type)
    if destination and destination.lower() != "all":
        query = query.where(Package.destination.ilike(destination))
    query = query.order_by(Package.created_at.desc(), Package.id.desc())

    result = await db.execute(query)
    packages = result.scalars().all()

    return PackageListResponse(
        items=[PackageResponse.model_validate(p) for p in packages],
        total=len(packages),
    )


@router.get("/city/{city}", response_model=PackageListResponse)
async def list_packages_for_city(city: str, db: DbSession):
    """
    Packages of a city page: exact route match, the city slug, or a
    destination containing the city name.
    """
    city = city.strip()
    if not city:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="city is required",
        )

    result = await db.execute(
        select(Package)
        .where(
            or_(
                Package.route == city,
                Package.city_slug == slugify(city),
                func.lower(Package.destination).contains(city.lower()),
            )
        )
        .order_by(Package.created_at.desc(), Package.id.desc())
    )
    packages = result.scalars().all()

    return PackageListResponse(
        items=[PackageResponse.model_validate(p) for p in packages],
        total=len(packages),
    )


@router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create_package(data: PackageCreate, db: DbSession, user: CurrentUser):
    package = build_package(data)
    db.add(package)
    await db.commit()
    await db.refresh(package)
    return PackageResponse.model_validate(package)


@router.get("/{package_id}", response_model=PackageResponse)
async def get_package(package_id: int, db: DbSession):
    package = await _get_package_or_404(db, package_id)
    return PackageResponse.model_validate(package)


@router.put("/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: int,
    data: PackageUpdate,
    db: DbSession,
    user: CurrentUser,
):
    package = await _get_package_or_404(db, package_id)

    apply_update(package, data)

    await db.commit()
    await db.refresh(package)
    return PackageResponse.model_validate(package)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(package_id: int, db: DbSession, user: CurrentUser):
    package = await _get_package_or_404(db, package_id)
    await db.delete(package)
    await db.commit()
