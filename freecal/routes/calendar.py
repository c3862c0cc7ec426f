from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

from ..auth import get_current_user
from ..calendar_utils import as_utc, day_bounds, get_calendar_days, month_bounds, month_name, overlaps
from ..crud.events import list_visible_events
from ..recurrence import expand_recurring_events
from ..schemas.events import CalendarDayOut, CalendarMonthOut, OccurrenceOut

router = APIRouter()


def _as_occurrence(event: dict) -> dict:
    data = dict(event)
    data.setdefault('event_id', data['id'])
    data['id'] = str(data['id'])
    data['start_time'] = as_utc(data['start_time'])
    data['end_time'] = as_utc(data['end_time'])
    return data


async def occurrences_between(user_id, start: datetime, end: datetime) -> List[dict]:
    """Visible events expanded and clipped to [start, end), sorted by start."""
    events = await list_visible_events(user_id)
    expanded = [_as_occurrence(e) for e in expand_recurring_events(events, start, end)]
    in_range = [e for e in expanded if overlaps(e['start_time'], e['end_time'], start, end)]
    return sorted(in_range, key=lambda e: e['start_time'])


@router.get('/range', response_model=List[OccurrenceOut])
async def calendar_range(
    start: datetime = Query(...),
    end: datetime = Query(...),
    current_user=Depends(get_current_user),
):
    start, end = as_utc(start), as_utc(end)
    if end < start:
        raise HTTPException(400, 'end must not be before start')
    return await occurrences_between(current_user.id, start, end)


@router.get('/month', response_model=CalendarMonthOut)
async def calendar_month(
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    current_user=Depends(get_current_user),
):
    """Monday-first month grid; leading cells before day one are null."""
    start, end = month_bounds(year, month)
    occurrences = await occurrences_between(current_user.id, start, end)
    days = []
    for day in get_calendar_days(year, month):
        if day is None:
            days.append(None)
            continue
        day_start, day_end = day_bounds(day)
        days.append(CalendarDayOut(
            date=day.isoformat(),
            events=[e for e in occurrences if overlaps(e['start_time'], e['end_time'], day_start, day_end)],
        ))
    return CalendarMonthOut(year=year, month=month, month_name=month_name(month), days=days)
