"""
Supplier management endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, status
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import func, or_, select

from travloger.api.common import AuditResponse, apply_update, get_or_404
from travloger.api.deps import CurrentUser, DbSession
from travloger.models.supplier import Supplier

router = APIRouter()


class SupplierCreate(BaseModel):
    city: Optional[str] = None
    company_name: str = Field(..., min_length=1, max_length=255)
    title: Optional[str] = Field(None, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    mobile_country_code: str = Field("+91", max_length=8)
    mobile_number: str = Field(..., min_length=4, max_length=20)
    address: Optional[str] = None
    status: str = "Active"


class SupplierUpdate(BaseModel):
    city: Optional[str] = None
    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    title: Optional[str] = Field(None, max_length=20)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    mobile_country_code: Optional[str] = Field(None, max_length=8)
    mobile_number: Optional[str] = Field(None, min_length=4, max_length=20)
    address: Optional[str] = None
    status: Optional[str] = None


class SupplierResponse(AuditResponse):
    city: Optional[str]
    company_name: str
    title: Optional[str]
    first_name: str
    last_name: str
    contact_name: str
    email: str
    mobile_country_code: str
    mobile_number: str
    address: Optional[str]


class SupplierListResponse(BaseModel):
    items: List[SupplierResponse]
    total: int


@router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    db: DbSession,
    user: CurrentUser,
    city: Optional[str] = None,
    search: Optional[str] = None,
):
    """
    List suppliers, newest first.

    `search` matches the company name or the contact's first or last name.
    """
    query = select(Supplier)
    if city and city.lower() != "all":
        query = query.where(func.lower(Supplier.city) == city.strip().lower())
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                Supplier.company_name.ilike(pattern),
                Supplier.first_name.ilike(pattern),
                Supplier.last_name.ilike(pattern),
            )
        )

    result = await db.execute(query.order_by(Supplier.created_at.desc(), Supplier.id.desc()))
    suppliers = result.scalars().all()
    return SupplierListResponse(
        items=[SupplierResponse.model_validate(s) for s in suppliers],
        total=len(suppliers),
    )


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(data: SupplierCreate, db: DbSession, user: CurrentUser):
    supplier = Supplier(**data.model_dump())
    db.add(supplier)
    await db.commit()
    await db.refresh(supplier)
    return SupplierResponse.model_validate(supplier)


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(supplier_id: int, db: DbSession, user: CurrentUser):
    supplier = await get_or_404(db, Supplier, supplier_id, "Supplier")
    return SupplierResponse.model_validate(supplier)


@router.put("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(supplier_id: int, data: SupplierUpdate, db: DbSession, user: CurrentUser):
    supplier = await get_or_404(db, Supplier, supplier_id, "Supplier")
    apply_update(supplier, data)
    await db.commit()
    await db.refresh(supplier)
    return SupplierResponse.model_validate(supplier)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supplier(supplier_id: int, db: DbSession, user: CurrentUser):
    supplier = await get_or_404(db, Supplier, supplier_id, "Supplier")
    await db.delete(supplier)
    await db.commit()
