"""
Transfer and transfer rate endpoints (CMS).
"""

from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import func, select

from travloger.api.common import AuditResponse, apply_update, get_or_404
from travloger.api.deps import CurrentUser, DbSession
from travloger.models.transfer import Transfer, TransferRate

router = APIRouter()
rates_router = APIRouter()

TransferType = Literal["SIC", "PVT"]


# ============================================================================
# Transfers
# ============================================================================

class TransferCreate(BaseModel):
    query_name: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=100)
    price: float = Field(0, ge=0)
    content: Optional[str] = None
    photo_url: Optional[str] = None
    status: str = "Active"


class TransferUpdate(BaseModel):
    query_name: Optional[str] = Field(None, min_length=1, max_length=255)
    destination: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    content: Optional[str] = None
    photo_url: Optional[str] = None
    status: Optional[str] = None


class TransferResponse(AuditResponse):
    query_name: str
    destination: str
    price: float
    content: Optional[str]
    photo_url: Optional[str]


class TransferListResponse(BaseModel):
    items: List[TransferResponse]
    total: int


@router.get("", response_model=TransferListResponse)
async def list_transfers(db: DbSession, destination: Optional[str] = None):
    query = select(Transfer)
    if destination and destination.lower() != "all":
        query = query.where(func.lower(Transfer.destination) == destination.strip().lower())
    result = await db.execute(query.order_by(Transfer.created_at.desc(), Transfer.id.desc()))
    transfers = result.scalars().all()
    return TransferListResponse(
        items=[TransferResponse.model_validate(t) for t in transfers],
        total=len(transfers),
    )


@router.post("", response_model=TransferResponse, status_code=status.HTTP_201_CREATED)
async def create_transfer(data: TransferCreate, db: DbSession, user: CurrentUser):
    transfer = Transfer(**data.model_dump())
    db.add(transfer)
    await db.commit()
    await db.refresh(transfer)
    return TransferResponse.model_validate(transfer)


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(transfer_id: int, db: DbSession):
    transfer = await get_or_404(db, Transfer, transfer_id, "Transfer")
    return TransferResponse.model_validate(transfer)


@router.put("/{transfer_id}", response_model=TransferResponse)
async def update_transfer(transfer_id: int, data: TransferUpdate, db: DbSession, user: CurrentUser):
    transfer = await get_or_404(db, Transfer, transfer_id, "Transfer")
    apply_update(transfer, data)
    await db.commit()
    await db.refresh(transfer)
    return TransferResponse.model_validate(transfer)


@router.delete("/{transfer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transfer(transfer_id: int, db: DbSession, user: CurrentUser):
    transfer = await get_or_404(db, Transfer, transfer_id, "Transfer")
    await db.delete(transfer)
    await db.commit()


# ============================================================================
# Transfer rates
# ============================================================================

class TransferRateCreate(BaseModel):
    transfer_id: int
    from_date: date
    to_date: date
    type: TransferType
    adult_count: int = Field(1, ge=0)
    child_count: int = Field(0, ge=0)
    vehicle: Optional[str] = None
    adult_price: float = Field(0, ge=0)
    child_price: float = Field(0, ge=0)


class TransferRateUpdate(BaseModel):
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    type: Optional[TransferType] = None
    adult_count: Optional[int] = Field(None, ge=0)
    child_count: Optional[int] = Field(None, ge=0)
    vehicle: Optional[str] = None
    adult_price: Optional[float] = Field(None, ge=0)
    child_price: Optional[float] = Field(None, ge=0)


class TransferRateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    transfer_id: int
    from_date: date
    to_date: date
    type: str
    adult_count: int
    child_count: int
    vehicle: Optional[str]
    adult_price: float
    child_price: float


def _check_period(from_date: date, to_date: date) -> None:
    if to_date < from_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="to_date must be on or after from_date",
        )


@rates_router.get("", response_model=List[TransferRateResponse])
async def list_transfer_rates(db: DbSession, transfer_id: Optional[int] = None):
    query = select(TransferRate)
    if transfer_id is not None:
        query = query.where(TransferRate.transfer_id == transfer_id)
    result = await db.execute(query.order_by(TransferRate.from_date.desc(), TransferRate.id.desc()))
    return [TransferRateResponse.model_validate(r) for r in result.scalars().all()]


@rates_router.post("", response_model=TransferRateResponse, status_code=status.HTTP_201_CREATED)
async def create_transfer_rate(data: TransferRateCreate, db: DbSession, user: CurrentUser):
    await get_or_404(db, Transfer, data.transfer_id, "Transfer")
    _check_period(data.from_date, data.to_date)

    rate = TransferRate(**data.model_dump())
    db.add(rate)
    await db.commit()
    await db.refresh(rate)
    return TransferRateResponse.model_validate(rate)


@rates_router.get("/{rate_id}", response_model=TransferRateResponse)
async def get_transfer_rate(rate_id: int, db: DbSession):
    rate = await get_or_404(db, TransferRate, rate_id, "Transfer rate")
    return TransferRateResponse.model_validate(rate)


@rates_router.put("/{rate_id}", response_model=TransferRateResponse)
async def update_transfer_rate(
    rate_id: int,
    data: TransferRateUpdate,
    db: DbSession,
    user: CurrentUser,
):
    rate = await get_or_404(db, TransferRate, rate_id, "Transfer rate")
    _check_period(data.from_date or rate.from_date, data.to_date or rate.to_date)

    apply_update(rate, data)
    await db.commit()
    await db.refresh(rate)
    return TransferRateResponse.model_validate(rate)


@rates_router.delete("/{rate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transfer_rate(rate_id: int, db: DbSession, user: CurrentUser):
    rate = await get_or_404(db, TransferRate, rate_id, "Transfer rate")
    await db.delete(rate)
    await db.commit()
