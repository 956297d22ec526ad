"""
Itinerary endpoints.

An itinerary is built day by day; each day holds ordered events whose
event_data may carry a price. The quotation endpoint totals those prices for
the customer-facing quote.
"""

import logging
from datetime import date as DayDate, datetime, timezone
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import func, select

from travloger.api.common import apply_update
from travloger.api.deps import CurrentUser, DbSession
from travloger.api.leads import LeadResponse
from travloger.models.itinerary import Itinerary, ItineraryDay, ItineraryEvent
from travloger.models.lead import Lead

logger = logging.getLogger(__name__)

router = APIRouter()
quotation_router = APIRouter()

CONFIRMED = "confirmed"


# ============================================================================
# Schemas
# ============================================================================

class ItineraryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    start_date: Optional[DayDate] = None
    end_date: Optional[DayDate] = None
    adults: int = Field(1, ge=0)
    children: int = Field(0, ge=0)
    destinations: str = Field(..., min_length=1)
    notes: Optional[str] = None
    price: float = Field(0, ge=0)
    marketplace_shared: bool = False
    cover_photo: Optional[str] = None
    package_terms: Optional[Any] = None
    pricing_data: Optional[Any] = None
    status: str = "pending"
    lead_id: Optional[int] = None


class ItineraryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    start_date: Optional[DayDate] = None
    end_date: Optional[DayDate] = None
    adults: Optional[int] = Field(None, ge=0)
    children: Optional[int] = Field(None, ge=0)
    destinations: Optional[str] = None
    notes: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    marketplace_shared: Optional[bool] = None
    cover_photo: Optional[str] = None
    package_terms: Optional[Any] = None
    pricing_data: Optional[Any] = None
    status: Optional[str] = None
    lead_id: Optional[int] = None


class ItineraryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    start_date: Optional[DayDate]
    end_date: Optional[DayDate]
    adults: int
    children: int
    destinations: str
    notes: Optional[str]
    price: float
    marketplace_shared: bool
    cover_photo: Optional[str]
    package_terms: Optional[Any]
    pricing_data: Optional[Any]
    status: str
    confirmed_at: Optional[datetime]
    lead_id: Optional[int]
    created_at: datetime
    updated_at: datetime


class ItineraryListResponse(BaseModel):
    items: List[ItineraryResponse]
    total: int


class DayCreate(BaseModel):
    day_number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    date: Optional[DayDate] = None


class DayUpdate(BaseModel):
    day_number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    date: Optional[DayDate] = None


class DayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    itinerary_id: int
    day_number: int
    title: Optional[str]
    location: Optional[str]
    notes: Optional[str]
    date: Optional[DayDate]


class EventCreate(BaseModel):
    title: str = "New Event"
    subtitle: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[str] = Field(None, max_length=10)
    end_time: Optional[str] = Field(None, max_length=10)
    sort_order: Optional[int] = None
    event_data: Optional[dict[str, Any]] = None


class EventUpdate(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[str] = Field(None, max_length=10)
    end_time: Optional[str] = Field(None, max_length=10)
    sort_order: Optional[int] = None
    event_data: Optional[dict[str, Any]] = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day_id: int
    title: str
    subtitle: Optional[str]
    description: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]
    sort_order: int
    event_data: Optional[dict[str, Any]]
    price: float


class QuotationResponse(BaseModel):
    itinerary: ItineraryResponse
    events: List[EventResponse]
    total_price: float
    lead: Optional[LeadResponse] = None


# ============================================================================
# Helpers
# ============================================================================

async def _get_itinerary_or_404(db: DbSession, itinerary_id: int) -> Itinerary:
    itinerary = await db.get(Itinerary, itinerary_id)
    if not itinerary:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Itinerary not found",
        )
    return itinerary


async def _get_day_or_404(db: DbSession, day_id: int) -> ItineraryDay:
    day = await db.get(ItineraryDay, day_id)
    if not day:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Day not found",
        )
    return day


async def _get_event_or_404(db: DbSession, event_id: int) -> ItineraryEvent:
    event = await db.get(ItineraryEvent, event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    return event


def _apply_status(itinerary: Itinerary, new_status: Optional[str]) -> None:
    if new_status is None:
        return
    if new_status == CONFIRMED and itinerary.status != CONFIRMED:
        itinerary.confirmed_at = datetime.now(timezone.utc)
    itinerary.status = new_status


async def itinerary_events(db, itinerary_id: int) -> List[ItineraryEvent]:
    """Every event of an itinerary, ordered by day number then sort order."""
    result = await db.execute(
        select(ItineraryEvent)
        .join(ItineraryDay, ItineraryEvent.day_id == ItineraryDay.id)
        .where(ItineraryDay.itinerary_id == itinerary_id)
        .order_by(ItineraryDay.day_number, ItineraryEvent.sort_order, ItineraryEvent.id)
    )
    return list(result.scalars().all())


# ============================================================================
# Itineraries
# ============================================================================

@router.get("", response_model=ItineraryListResponse)
async def list_itineraries(
    db: DbSession,
    user: CurrentUser,
    lead_id: Optional[int] = None,
    status_filter: Optional[str] = None,
):
    query = select(Itinerary)
    if lead_id is not None:
        query = query.where(Itinerary.lead_id == lead_id)
    if status_filter:
        query = query.where(Itinerary.status == status_filter)

    count_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = count_result.scalar() or 0

    result = await db.execute(query.order_by(Itinerary.created_at.desc(), Itinerary.id.desc()))
    items = result.scalars().all()
    return ItineraryListResponse(
        items=[ItineraryResponse.model_validate(i) for i in items],
        total=total,
    )


@router.post("", response_model=ItineraryResponse, status_code=status.HTTP_201_CREATED)
async def create_itinerary(data: ItineraryCreate, db: DbSession, user: CurrentUser):
    if data.lead_id is not None and not await db.get(Lead, data.lead_id):
        raise HTTPException(status_code=404, detail="Lead not found")

    values = data.model_dump(exclude={"status"})
    itinerary = Itinerary(**values)
    itinerary.status = "pending"
    _apply_status(itinerary, data.status)

    db.add(itinerary)
    await db.commit()
    await db.refresh(itinerary)

    logger.info(f"Created itinerary {itinerary.id} ({itinerary.name})")
    return ItineraryResponse.model_validate(itinerary)


@router.get("/days/{day_id}/events", response_model=List[EventResponse])
async def list_day_events(day_id: int, db: DbSession, user: CurrentUser):
    await _get_day_or_404(db, day_id)
    result = await db.execute(
        select(ItineraryEvent)
        .where(ItineraryEvent.day_id == day_id)
        .order_by(ItineraryEvent.sort_order, ItineraryEvent.id)
    )
    return [EventResponse.model_validate(e) for e in result.scalars().all()]


@router.post("/days/{day_id}/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_day_event(day_id: int, data: EventCreate, db: DbSession, user: CurrentUser):
    await _get_day_or_404(db, day_id)

    sort_order = data.sort_order
    if sort_order is None:
        result = await db.execute(
            select(func.max(ItineraryEvent.sort_order)).where(ItineraryEvent.day_id == day_id)
        )
        current_max = result.scalar()
        sort_order = 0 if current_max is None else current_max + 1

    event = ItineraryEvent(
        day_id=day_id,
        **data.model_dump(exclude={"sort_order"}),
        sort_order=sort_order,
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return EventResponse.model_validate(event)


@router.put("/days/{day_id}", response_model=DayResponse)
async def update_day(day_id: int, data: DayUpdate, db: DbSession, user: CurrentUser):
    day = await _get_day_or_404(db, day_id)
    apply_update(day, data)
    await db.commit()
    await db.refresh(day)
    return DayResponse.model_validate(day)


@router.delete("/days/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_day(day_id: int, db: DbSession, user: CurrentUser):
    day = await _get_day_or_404(db, day_id)
    await db.delete(day)
    await db.commit()


@router.put("/events/{event_id}", response_model=EventResponse)
async def update_event(event_id: int, data: EventUpdate, db: DbSession, user: CurrentUser):
    event = await _get_event_or_404(db, event_id)
    apply_update(event, data)
    await db.commit()
    await db.refresh(event)
    return EventResponse.model_validate(event)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: int, db: DbSession, user: CurrentUser):
    event = await _get_event_or_404(db, event_id)
    await db.delete(event)
    await db.commit()


@router.get("/{itinerary_id}", response_model=ItineraryResponse)
async def get_itinerary(itinerary_id: int, db: DbSession, user: CurrentUser):
    itinerary = await _get_itinerary_or_404(db, itinerary_id)
    return ItineraryResponse.model_validate(itinerary)


@router.put("/{itinerary_id}", response_model=ItineraryResponse)
async def update_itinerary(
    itinerary_id: int,
    data: ItineraryUpdate,
    db: DbSession,
    user: CurrentUser,
):
    itinerary = await _get_itinerary_or_404(db, itinerary_id)

    if data.lead_id is not None and not await db.get(Lead, data.lead_id):
        raise HTTPException(status_code=404, detail="Lead not found")

    apply_update(itinerary, data, exclude={"status"})
    _apply_status(itinerary, data.status)

    await db.commit()
    await db.refresh(itinerary)
    return ItineraryResponse.model_validate(itinerary)


@router.delete("/{itinerary_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_itinerary(itinerary_id: int, db: DbSession, user: CurrentUser):
    itinerary = await _get_itinerary_or_404(db, itinerary_id)
    await db.delete(itinerary)
    await db.commit()


@router.get("/{itinerary_id}/days", response_model=List[DayResponse])
async def list_days(itinerary_id: int, db: DbSession, user: CurrentUser):
    await _get_itinerary_or_404(db, itinerary_id)
    result = await db.execute(
        select(ItineraryDay)
        .where(ItineraryDay.itinerary_id == itinerary_id)
        .order_by(ItineraryDay.day_number)
    )
    return [DayResponse.model_validate(d) for d in result.scalars().all()]


@router.post("/{itinerary_id}/days", response_model=DayResponse, status_code=status.HTTP_201_CREATED)
async def create_day(itinerary_id: int, data: DayCreate, db: DbSession, user: CurrentUser):
    """Add a day. Without a day_number it goes after the last day."""
    await _get_itinerary_or_404(db, itinerary_id)

    day_number = data.day_number
    if day_number is None:
        result = await db.execute(
            select(func.max(ItineraryDay.day_number)).where(ItineraryDay.itinerary_id == itinerary_id)
        )
        day_number = (result.scalar() or 0) + 1

    day = ItineraryDay(
        itinerary_id=itinerary_id,
        day_number=day_number,
        title=data.title,
        location=data.location,
        notes=data.notes,
        date=data.date,
    )
    db.add(day)
    await db.commit()
    await db.refresh(day)

    logger.info(f"Created day {day_number} for itinerary {itinerary_id}")
    return DayResponse.model_validate(day)


@router.get("/{itinerary_id}/events", response_model=List[EventResponse])
async def list_itinerary_events(itinerary_id: int, db: DbSession, user: CurrentUser):
    await _get_itinerary_or_404(db, itinerary_id)
    events = await itinerary_events(db, itinerary_id)
    return [EventResponse.model_validate(e) for e in events]


# ============================================================================
# Quotation
# ============================================================================

@quotation_router.get("/{itinerary_id}", response_model=QuotationResponse)
async def get_quotation(
    itinerary_id: int,
    db: DbSession,
    query_id: Optional[int] = None,
):
    """
    Customer-facing quote for an itinerary.

    The lead comes from query_id when given, otherwise from the itinerary's
    own lead_id. An unknown lead is reported as null. When no event carries a
    price the itinerary's own price is quoted.
    """
    itinerary = await _get_itinerary_or_404(db, itinerary_id)
    events = await itinerary_events(db, itinerary_id)

    lead_id = query_id if query_id is not None else itinerary.lead_id
    lead = await db.get(Lead, lead_id) if lead_id is not None else None
    total_price = round(sum(e.price for e in events), 2) or itinerary.price or 0

    return QuotationResponse(
        itinerary=ItineraryResponse.model_validate(itinerary),
        events=[EventResponse.model_validate(e) for e in events],
        total_price=total_price,
        lead=LeadResponse.model_validate(lead) if lead else None,
    )
