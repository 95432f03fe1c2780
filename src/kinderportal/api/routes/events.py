"""
Events and Extra Classes API Endpoints
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from datetime import UTC, datetime, time, timedelta

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.access import require_session
from kinderportal.core.database import get_db
from kinderportal.core.models import Event, ExtraClass
from kinderportal.core.schemas import EventSchema, ExtraClassSchema
from kinderportal.core.validation import parse_iso_date, validate_date_range

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/events", response_model=list[EventSchema])
async def list_events(
    start_date: str | None = Query(None, alias="startDate", description="YYYY-MM-DD"),
    end_date: str | None = Query(None, alias="endDate", description="YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
) -> list[Event]:
    """
    Calendar events ordered by start.

    When both `startDate` and `endDate` are given, only events starting
    within those days (inclusive) are returned.
    """
    date_range = validate_date_range(
        parse_iso_date(start_date, "startDate"), parse_iso_date(end_date, "endDate")
    )

    query = select(Event)
    if date_range:
        first_day, last_day = date_range
        window_start = datetime.combine(first_day, time.min, tzinfo=UTC)
        window_end = datetime.combine(last_day + timedelta(days=1), time.min, tzinfo=UTC)
        query = query.where(Event.start_date >= window_start, Event.start_date < window_end)

    result = await db.execute(query.order_by(Event.start_date))
    return list(result.scalars().all())


@router.get("/extra-classes", response_model=list[ExtraClassSchema])
async def list_extra_classes(db: AsyncSession = Depends(get_db)) -> list[ExtraClass]:
    """Active extra-curricular classes."""
    result = await db.execute(
        select(ExtraClass).where(ExtraClass.is_active.is_(True)).order_by(ExtraClass.name)
    )
    return list(result.scalars().all())
