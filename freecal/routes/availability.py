from datetime import date, datetime, timedelta, timezone
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from ..auth import get_current_user
from ..availability import find_free_slots
from ..calendar_utils import day_bounds
from ..crud.events import list_events_involving
from ..crud.relationships import connected_user_ids
from ..recurrence import expand_recurring_events
from ..schemas.availability import FreeDayOut

router = APIRouter()


@router.get('', response_model=List[FreeDayOut])
async def shared_free_time(
    user_ids: List[UUID] = Query([]),
    start: Optional[date] = Query(None),
    days: int = Query(14, ge=1, le=31),
    current_user=Depends(get_current_user),
):
    """Free 30 minute blocks shared by the current user and the selected connections"""
    selected = [uid for uid in dict.fromkeys(user_ids) if uid != current_user.id]
    if selected:
        connected = await connected_user_ids(current_user.id)
        if any(uid not in connected for uid in selected):
            raise HTTPException(403, 'Availability is only shared between connected users')

    start_day = start or datetime.now(timezone.utc).date()
    window_start, _ = day_bounds(start_day)
    window_end = window_start + timedelta(days=days)
    participants = [current_user.id] + selected

    events = await list_events_involving(participants, window_start, window_end)
    occurrences = expand_recurring_events(events, window_start, window_end)
    return find_free_slots(occurrences, participants, start_day, days)
