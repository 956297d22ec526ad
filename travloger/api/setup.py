"""
One-off setup endpoint: create any missing tables.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from travloger.api.deps import AdminUser, DbSession
from travloger.database import create_tables

logger = logging.getLogger(__name__)

router = APIRouter()


class SetupTablesResponse(BaseModel):
    success: bool
    tables: list[str]


@router.post("/tables", response_model=SetupTablesResponse)
async def setup_tables(db: DbSession, user: AdminUser):
    """Create missing tables on the session's engine. Existing tables are left untouched."""
    tables = await create_tables(bind=db.bind)
    logger.info(f"Table setup requested by {user.email}: {len(tables)} tables checked")
    return SetupTablesResponse(success=True, tables=tables)
