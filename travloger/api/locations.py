"""
Package catalog endpoints: hotel/vehicle/fixed locations, vehicles and the
fixed-plan building blocks (days, plans, priced options).
Mounted under /api.
"""

from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import select

from travloger.api.common import get_or_404
from travloger.api.deps import CurrentUser, DbSession
from travloger.models.location import (
    FixedDay,
    FixedLocation,
    FixedPlan,
    FixedPlanOption,
    HotelLocation,
    Vehicle,
    VehicleLocation,
)

router = APIRouter()


def _city_filter(query, model, city: Optional[str]):
    if city and city.lower() != "all":
        query = query.where(model.city == city.strip())
    return query


class _Trimmed(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v):
        return v.strip() if isinstance(v, str) else v


# ============================================================================
# Locations
# ============================================================================

class LocationCreate(_Trimmed):
    name: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)


class VehicleLocationCreate(LocationCreate):
    rates: Optional[dict[str, Any]] = None


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    city: str
    created_at: datetime


class VehicleLocationResponse(LocationResponse):
    rates: Optional[dict[str, Any]] = None


@router.get("/locations/hotels", response_model=List[LocationResponse])
async def list_hotel_locations(db: DbSession, city: Optional[str] = None):
    query = _city_filter(select(HotelLocation), HotelLocation, city).order_by(HotelLocation.name)
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/locations/hotels", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_hotel_location(data: LocationCreate, db: DbSession, user: CurrentUser):
    location = HotelLocation(**data.model_dump())
    db.add(location)
    await db.commit()
    await db.refresh(location)
    return location


@router.get("/locations/vehicles", response_model=List[VehicleLocationResponse])
async def list_vehicle_locations(db: DbSession, city: Optional[str] = None):
    query = _city_filter(select(VehicleLocation), VehicleLocation, city).order_by(VehicleLocation.name)
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/locations/vehicles", response_model=VehicleLocationResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle_location(data: VehicleLocationCreate, db: DbSession, user: CurrentUser):
    location = VehicleLocation(**data.model_dump())
    db.add(location)
    await db.commit()
    await db.refresh(location)
    return location


@router.get("/locations/fixed", response_model=List[LocationResponse])
async def list_fixed_locations(db: DbSession, city: Optional[str] = None):
    query = _city_filter(select(FixedLocation), FixedLocation, city).order_by(FixedLocation.created_at.desc())
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/locations/fixed", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_fixed_location(data: LocationCreate, db: DbSession, user: CurrentUser):
    location = FixedLocation(**data.model_dump())
    db.add(location)
    await db.commit()
    await db.refresh(location)
    return location


# ============================================================================
# Vehicles
# ============================================================================

class VehicleCreate(_Trimmed):
    vehicle_type: str = Field(..., min_length=1)
    rate: float = Field(0, ge=0)
    ac_extra: float = Field(0, ge=0)
    location_id: int


class VehicleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    vehicle_type: str
    rate: float
    ac_extra: float
    location_id: int
    created_at: datetime


@router.get("/vehicles", response_model=List[VehicleResponse])
async def list_vehicles(db: DbSession, location_id: Optional[int] = None):
    query = select(Vehicle)
    if location_id is not None:
        query = query.where(Vehicle.location_id == location_id)
    result = await db.execute(query.order_by(Vehicle.created_at.desc(), Vehicle.id.desc()))
    return result.scalars().all()


@router.post("/vehicles", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(data: VehicleCreate, db: DbSession, user: CurrentUser):
    await get_or_404(db, VehicleLocation, data.location_id, "Vehicle location")
    vehicle = Vehicle(**data.model_dump())
    db.add(vehicle)
    await db.commit()
    await db.refresh(vehicle)
    return vehicle


# ============================================================================
# Fixed plans
# ============================================================================

class FixedDayCreate(_Trimmed):
    city: str = Field(..., min_length=1)
    days: int = Field(..., ge=1)
    label: str = ""


class FixedDayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    city: str
    days: int
    label: str
    created_at: datetime


class FixedPlanCreate(_Trimmed):
    city: str = Field(..., min_length=1)
    fixed_location_id: int
    name: str = Field(..., min_length=1)


class FixedPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    city: str
    fixed_location_id: int
    name: str
    created_at: datetime


class FixedPlanOptionCreate(_Trimmed):
    city: str = Field(..., min_length=1)
    fixed_location_id: int
    fixed_plan_id: int
    adults: int = Field(..., ge=1)
    price_per_person: float = Field(..., gt=0)
    rooms_vehicle: str = ""


class FixedPlanOptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    city: str
    fixed_location_id: int
    fixed_plan_id: int
    adults: int
    price_per_person: float
    rooms_vehicle: str
    created_at: datetime


@router.get("/fixed-days", response_model=List[FixedDayResponse])
async def list_fixed_days(db: DbSession, city: Optional[str] = None):
    query = _city_filter(select(FixedDay), FixedDay, city).order_by(FixedDay.days)
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/fixed-days", response_model=FixedDayResponse, status_code=status.HTTP_201_CREATED)
async def create_fixed_day(data: FixedDayCreate, db: DbSession, user: CurrentUser):
    option = FixedDay(**data.model_dump())
    db.add(option)
    await db.commit()
    await db.refresh(option)
    return option


@router.get("/fixed-plans", response_model=List[FixedPlanResponse])
async def list_fixed_plans(
    db: DbSession,
    city: Optional[str] = None,
    location_id: Optional[int] = None,
):
    query = _city_filter(select(FixedPlan), FixedPlan, city)
    if location_id is not None:
        query = query.where(FixedPlan.fixed_location_id == location_id)
    result = await db.execute(query.order_by(FixedPlan.created_at.desc(), FixedPlan.id.desc()))
    return result.scalars().all()


@router.post("/fixed-plans", response_model=FixedPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_fixed_plan(data: FixedPlanCreate, db: DbSession, user: CurrentUser):
    await get_or_404(db, FixedLocation, data.fixed_location_id, "Fixed location")
    plan = FixedPlan(**data.model_dump())
    db.add(plan)
    await db.commit()
    await db.refresh(plan)
    return plan


@router.get("/fixed-plan-options", response_model=List[FixedPlanOptionResponse])
async def list_fixed_plan_options(
    db: DbSession,
    city: Optional[str] = None,
    plan_id: Optional[int] = None,
    location_id: Optional[int] = None,
):
    query = _city_filter(select(FixedPlanOption), FixedPlanOption, city)
    if plan_id is not None:
        query = query.where(FixedPlanOption.fixed_plan_id == plan_id)
    if location_id is not None:
        query = query.where(FixedPlanOption.fixed_location_id == location_id)
    result = await db.execute(
        query.order_by(FixedPlanOption.created_at.desc(), FixedPlanOption.id.desc())
    )
    return result.scalars().all()


@router.post("/fixed-plan-options", response_model=FixedPlanOptionResponse, status_code=status.HTTP_201_CREATED)
async def create_fixed_plan_option(data: FixedPlanOptionCreate, db: DbSession, user: CurrentUser):
    await get_or_404(db, FixedPlan, data.fixed_plan_id, "Fixed plan")
    option = FixedPlanOption(**data.model_dump())
    db.add(option)
    await db.commit()
    await db.refresh(option)
    return option
