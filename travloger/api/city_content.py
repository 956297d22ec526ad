"""
City landing-page content (CMS).

Each city page is a set of JSON sections keyed by the city slug. Reads are
public; unknown slugs simply return empty sections.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from travloger.api.deps import CurrentUser, DbSession
from travloger.models.city_content import CITY_SECTIONS, CityContent
from travloger.utils import slugify

logger = logging.getLogger(__name__)

router = APIRouter()


class CityContentSections(BaseModel):
    hero: Optional[Any] = None
    header: Optional[Any] = None
    contact: Optional[Any] = None
    trip_options: Optional[Any] = None
    trip_highlights: Optional[Any] = None
    usp: Optional[Any] = None
    faq: Optional[Any] = None
    group_cta: Optional[Any] = None
    reviews: Optional[Any] = None
    brands: Optional[Any] = None


class CityContentSaveResponse(BaseModel):
    ok: bool
    content: CityContentSections


@router.get("/{slug}", response_model=CityContentSections)
async def get_city_content(slug: str, db: DbSession):
    content = await db.get(CityContent, slugify(slug))
    if not content:
        return CityContentSections()
    return CityContentSections(**content.sections())


@router.put("/{slug}", response_model=CityContentSaveResponse)
async def save_city_content(
    slug: str,
    data: CityContentSections,
    db: DbSession,
    user: CurrentUser,
):
    """Upsert the sections present in the body; the others keep their value."""
    key = slugify(slug)
    content = await db.get(CityContent, key)
    if not content:
        content = CityContent(slug=key)
        db.add(content)

    for section, value in data.model_dump(exclude_unset=True).items():
        if section in CITY_SECTIONS:
            setattr(content, section, value)

    await db.commit()
    await db.refresh(content)

    logger.info(f"Saved city content for '{key}'")
    return CityContentSaveResponse(ok=True, content=CityContentSections(**content.sections()))
