"""
Payments recorded against a lead (billing screen).
"""

from datetime import date, datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select

from travloger.api.deps import CurrentUser, DbSession
from travloger.models.lead import Lead
from travloger.models.payment import QueryPayment

router = APIRouter()


# Schemas
class QueryPaymentCreate(BaseModel):
    query_id: int
    trans_id: Optional[str] = None
    type: Optional[str] = None
    amount: float = Field(..., gt=0)
    payment_date: Optional[date] = None
    status: Literal["Pending", "Paid", "Failed", "Refunded"] = "Pending"
    convenience_fee: float = Field(0, ge=0)


class QueryPaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    query_id: int
    trans_id: Optional[str]
    type: Optional[str]
    amount: float
    payment_date: Optional[date]
    status: str
    convenience_fee: float
    created_at: datetime


class QueryPaymentListResponse(BaseModel):
    items: List[QueryPaymentResponse]
    total: int
    total_paid: float


def total_paid(payments: List[QueryPayment]) -> float:
    """Sum of the amounts with status Paid."""
    return round(sum(float(p.amount or 0) for p in payments if p.status == "Paid"), 2)


# Endpoints
@router.get("", response_model=QueryPaymentListResponse)
async def list_query_payments(
    db: DbSession,
    user: CurrentUser,
    query_id: Optional[int] = None,
):
    """List payments (optionally of one lead), latest payment date first."""
    query = select(QueryPayment)
    if query_id is not None:
        query = query.where(QueryPayment.query_id == query_id)
    query = query.order_by(QueryPayment.payment_date.desc(), QueryPayment.id.desc())

    result = await db.execute(query)
    payments = list(result.scalars().all())

    return QueryPaymentListResponse(
        items=[QueryPaymentResponse.model_validate(p) for p in payments],
        total=len(payments),
        total_paid=total_paid(payments),
    )


@router.post("", response_model=QueryPaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_query_payment(data: QueryPaymentCreate, db: DbSession, user: CurrentUser):
    if not await db.get(Lead, data.query_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lead not found",
        )

    payment = QueryPayment(**data.model_dump())
    if payment.payment_date is None:
        payment.payment_date = date.today()
    db.add(payment)
    await db.commit()
    await db.refresh(payment)
    return QueryPaymentResponse.model_validate(payment)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_query_payment(payment_id: int, db: DbSession, user: CurrentUser):
    payment = await db.get(QueryPayment, payment_id)
    if not payment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found",
        )
    await db.delete(payment)
    await db.commit()
