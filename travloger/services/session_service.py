"""
Employee active-session tracking.

The employee portal sends a heartbeat every couple of minutes; the admin panel
polls the list of employees seen within the timeout window. Sessions that
stop beating are purged by the scheduler (and on demand).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.config import get_settings
from travloger.models.employee import EmployeeSession

logger = logging.getLogger(__name__)


def _cutoff(timeout_minutes: Optional[int] = None) -> datetime:
    if timeout_minutes is None:
        timeout_minutes = get_settings().session_timeout_minutes
    return datetime.now(timezone.utc) - timedelta(minutes=timeout_minutes)


async def touch_session(db: AsyncSession, employee_id: int) -> EmployeeSession:
    """Upsert the heartbeat of an employee."""
    result = await db.execute(
        select(EmployeeSession).where(EmployeeSession.employee_id == employee_id)
    )
    session = result.scalar_one_or_none()
    now = datetime.now(timezone.utc)

    if session:
        session.last_activity = now
    else:
        session = EmployeeSession(employee_id=employee_id, last_activity=now, created_at=now)
        db.add(session)

    await db.commit()
    await db.refresh(session)
    return session


async def end_session(db: AsyncSession, employee_id: int) -> bool:
    """Remove the session of an employee. Returns True if one existed."""
    result = await db.execute(
        delete(EmployeeSession).where(EmployeeSession.employee_id == employee_id)
    )
    await db.commit()
    return result.rowcount > 0


async def list_active_sessions(
    db: AsyncSession,
    timeout_minutes: Optional[int] = None,
) -> List[EmployeeSession]:
    """Sessions with a heartbeat inside the timeout window, most recent first."""
    result = await db.execute(
        select(EmployeeSession)
        .where(EmployeeSession.last_activity >= _cutoff(timeout_minutes))
        .order_by(EmployeeSession.last_activity.desc())
    )
    return list(result.scalars().all())


async def purge_stale_sessions(
    db: AsyncSession,
    timeout_minutes: Optional[int] = None,
) -> int:
    """Delete sessions older than the timeout. Returns the number removed."""
    result = await db.execute(
        delete(EmployeeSession).where(EmployeeSession.last_activity < _cutoff(timeout_minutes))
    )
    await db.commit()
    return result.rowcount or 0


async def cleanup_expired_sessions() -> int:
    """Scheduler job: purge stale sessions with a fresh database session."""
    from travloger.database import async_session_maker

    async with async_session_maker() as db:
        deleted = await purge_stale_sessions(db)

    if deleted:
        logger.info("Session cleanup removed %d stale employee sessions", deleted)
    return deleted
