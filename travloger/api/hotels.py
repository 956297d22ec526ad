"""
Hotel and hotel rate endpoints (CMS).
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from sqlalchemy import func, select

from travloger.api.common import AuditResponse, apply_update, get_or_404
from travloger.api.deps import CurrentUser, DbSession
from travloger.models.hotel import Hotel, HotelRate
from travloger.models.location import HotelLocation

router = APIRouter()
rates_router = APIRouter()


# ============================================================================
# Hotels
# ============================================================================

class HotelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=100)
    category: int = Field(3, ge=1, le=7)
    price: float = Field(0, ge=0)
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    icon_url: Optional[str] = None
    map_rate: float = Field(0, ge=0)
    eb: float = Field(0, ge=0)
    location_id: Optional[int] = None
    status: str = "Active"


class HotelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    destination: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[int] = Field(None, ge=1, le=7)
    price: Optional[float] = Field(None, ge=0)
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    icon_url: Optional[str] = None
    map_rate: Optional[float] = Field(None, ge=0)
    eb: Optional[float] = Field(None, ge=0)
    location_id: Optional[int] = None
    status: Optional[str] = None


class HotelResponse(AuditResponse):
    name: str
    destination: str
    category: int
    price: float
    address: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    icon_url: Optional[str]
    map_rate: float
    eb: float
    location_id: Optional[int]


class HotelListResponse(BaseModel):
    items: List[HotelResponse]
    total: int


@router.get("", response_model=HotelListResponse)
async def list_hotels(
    db: DbSession,
    destination: Optional[str] = None,
    location_id: Optional[int] = None,
):
    """List hotels, newest first. Package pages read this without a token."""
    query = select(Hotel)
    if destination and destination.lower() != "all":
        query = query.where(func.lower(Hotel.destination) == destination.strip().lower())
    if location_id is not None:
        query = query.where(Hotel.location_id == location_id)

    result = await db.execute(query.order_by(Hotel.created_at.desc(), Hotel.id.desc()))
    hotels = result.scalars().all()
    return HotelListResponse(
        items=[HotelResponse.model_validate(h) for h in hotels],
        total=len(hotels),
    )


@router.post("", response_model=HotelResponse, status_code=status.HTTP_201_CREATED)
async def create_hotel(data: HotelCreate, db: DbSession, user: CurrentUser):
    if data.location_id is not None:
        await get_or_404(db, HotelLocation, data.location_id, "Hotel location")

    hotel = Hotel(**data.model_dump())
    db.add(hotel)
    await db.commit()
    await db.refresh(hotel)
    return HotelResponse.model_validate(hotel)


@router.get("/{hotel_id}", response_model=HotelResponse)
async def get_hotel(hotel_id: int, db: DbSession):
    hotel = await get_or_404(db, Hotel, hotel_id, "Hotel")
    return HotelResponse.model_validate(hotel)


@router.put("/{hotel_id}", response_model=HotelResponse)
async def update_hotel(hotel_id: int, data: HotelUpdate, db: DbSession, user: CurrentUser):
    hotel = await get_or_404(db, Hotel, hotel_id, "Hotel")
    if data.location_id is not None:
        await get_or_404(db, HotelLocation, data.location_id, "Hotel location")

    apply_update(hotel, data)
    await db.commit()
    await db.refresh(hotel)
    return HotelResponse.model_validate(hotel)


@router.delete("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hotel(hotel_id: int, db: DbSession, user: CurrentUser):
    """Delete a hotel. Its rates go with it."""
    hotel = await get_or_404(db, Hotel, hotel_id, "Hotel")
    await db.delete(hotel)
    await db.commit()


# ============================================================================
# Hotel rates
# ============================================================================

class HotelRateFields(BaseModel):
    @model_validator(mode="after")
    def check_period(self):
        from_date = getattr(self, "from_date", None)
        to_date = getattr(self, "to_date", None)
        if from_date and to_date and to_date < from_date:
            raise ValueError("to_date must be on or after from_date")
        return self


class HotelRateCreate(HotelRateFields):
    hotel_id: int
    from_date: date
    to_date: date
    room_type: str = Field(..., min_length=1, max_length=100)
    meal_plan: str = Field("APAI", max_length=20)
    single: float = Field(0, ge=0)
    double: float = Field(0, ge=0)
    triple: float = Field(0, ge=0)
    quad: float = Field(0, ge=0)
    cwb: float = Field(0, ge=0)
    cnb: float = Field(0, ge=0)


class HotelRateUpdate(HotelRateFields):
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    room_type: Optional[str] = Field(None, min_length=1, max_length=100)
    meal_plan: Optional[str] = Field(None, max_length=20)
    single: Optional[float] = Field(None, ge=0)
    double: Optional[float] = Field(None, ge=0)
    triple: Optional[float] = Field(None, ge=0)
    quad: Optional[float] = Field(None, ge=0)
    cwb: Optional[float] = Field(None, ge=0)
    cnb: Optional[float] = Field(None, ge=0)


class HotelRateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    hotel_id: int
    from_date: date
    to_date: date
    room_type: str
    meal_plan: str
    single: float
    double: float
    triple: float
    quad: float
    cwb: float
    cnb: float


@rates_router.get("", response_model=List[HotelRateResponse])
async def list_hotel_rates(db: DbSession, hotel_id: Optional[int] = None):
    """Rates of one hotel, latest season first."""
    if hotel_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="hotel_id is required",
        )
    result = await db.execute(
        select(HotelRate)
        .where(HotelRate.hotel_id == hotel_id)
        .order_by(HotelRate.from_date.desc(), HotelRate.room_type)
    )
    return [HotelRateResponse.model_validate(r) for r in result.scalars().all()]


@rates_router.post("", response_model=HotelRateResponse, status_code=status.HTTP_201_CREATED)
async def create_hotel_rate(data: HotelRateCreate, db: DbSession, user: CurrentUser):
    await get_or_404(db, Hotel, data.hotel_id, "Hotel")
    rate = HotelRate(**data.model_dump())
    db.add(rate)
    await db.commit()
    await db.refresh(rate)
    return HotelRateResponse.model_validate(rate)


@rates_router.get("/{rate_id}", response_model=HotelRateResponse)
async def get_hotel_rate(rate_id: int, db: DbSession):
    rate = await get_or_404(db, HotelRate, rate_id, "Hotel rate")
    return HotelRateResponse.model_validate(rate)


@rates_router.put("/{rate_id}", response_model=HotelRateResponse)
async def update_hotel_rate(rate_id: int, data: HotelRateUpdate, db: DbSession, user: CurrentUser):
    rate = await get_or_404(db, HotelRate, rate_id, "Hotel rate")
    from_date = data.from_date or rate.from_date
    to_date = data.to_date or rate.to_date
    if to_date < from_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="to_date must be on or after from_date",
        )
    apply_update(rate, data)
    await db.commit()
    await db.refresh(rate)
    return HotelRateResponse.model_validate(rate)


@rates_router.delete("/{rate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hotel_rate(rate_id: int, db: DbSession, user: CurrentUser):
    rate = await get_or_404(db, HotelRate, rate_id, "Hotel rate")
    await db.delete(rate)
    await db.commit()
