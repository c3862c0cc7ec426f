"""
Event Routes
CRUD for events with attendees and viewers, invitation responses and
removal of single occurrences from a recurring series.
"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ..auth import get_current_user
from ..crud.events import (
    add_recurrence_exception,
    create_event,
    delete_event,
    get_event,
    get_event_view,
    list_visible_events,
    respond_to_invite,
    update_event,
)
from ..crud.profiles import get_profiles_by_ids
from ..calendar_utils import as_utc
from ..notifications import notify_event_invitation
from ..recurrence import is_recurring
from ..schemas.common import MessageOut
from ..schemas.events import EventIn, EventOut, EventUpdateIn, ExcludeOccurrenceIn, RespondIn

router = APIRouter()
logger = logging.getLogger('freecal.events')


async def _check_users_exist(user_ids):
    if not user_ids:
        return {}
    profiles = await get_profiles_by_ids(user_ids)
    missing = [str(uid) for uid in user_ids if uid not in profiles]
    if missing:
        raise HTTPException(400, f"Unknown users: {', '.join(missing)}")
    return profiles


def _invite(profiles: dict, user_ids, inviter, title: str):
    for user_id in user_ids:
        profile = profiles.get(user_id)
        if profile:
            notify_event_invitation(profile.email, inviter.display_name, title)


async def _owned_event(event_id: UUID, current_user):
    event = await get_event(event_id)
    if not event:
        raise HTTPException(404, 'Event not found')
    if event.user_id != current_user.id:
        raise HTTPException(403, 'Not authorized')
    return event


@router.get('', response_model=List[EventOut])
async def get_events(current_user=Depends(get_current_user)):
    """Events the user owns, attends or views"""
    try:
        return await list_visible_events(current_user.id)
    except Exception as e:
        raise HTTPException(500, f"Error fetching events: {str(e)}")


@router.post('', response_model=EventOut)
async def create(payload: EventIn, current_user=Depends(get_current_user)):
    if payload.end_time < payload.start_time:
        raise HTTPException(400, 'end_time must not be before start_time')
    profiles = await _check_users_exist(payload.attendees + payload.viewers)
    fields = payload.model_dump(exclude={'attendees', 'viewers'})
    fields['color'] = fields.get('color') or current_user.calendar_color
    try:
        event = await create_event(current_user.id, fields, payload.attendees, payload.viewers)
    except Exception as e:
        raise HTTPException(500, f"Error creating event: {str(e)}")

    _invite(profiles, payload.attendees, current_user, event.title)
    logger.info({'msg': 'event_created', 'event_id': str(event.id), 'attendees': len(payload.attendees)})
    return await get_event_view(event.id, current_user.id)


@router.put('/{event_id}', response_model=EventOut)
async def update(event_id: UUID, payload: EventUpdateIn, current_user=Depends(get_current_user)):
    existing = await _owned_event(event_id, current_user)
    fields = payload.model_dump(exclude_unset=True, exclude={'attendees', 'viewers'})
    start = fields.get('start_time') or as_utc(existing.start_time)
    end = fields.get('end_time') or as_utc(existing.end_time)
    if end < start:
        raise HTTPException(400, 'end_time must not be before start_time')
    for key in ('title', 'start_time', 'end_time', 'is_all_day', 'is_tentative', 'color'):
        if key in fields and fields[key] is None:
            raise HTTPException(400, f'{key} cannot be null')

    profiles = await _check_users_exist((payload.attendees or []) + (payload.viewers or []))
    try:
        event, invited = await update_event(event_id, fields, payload.attendees, payload.viewers)
    except Exception as e:
        raise HTTPException(500, f"Error updating event: {str(e)}")

    _invite(profiles, invited, current_user, event.title)
    return await get_event_view(event_id, current_user.id)


@router.delete('/{event_id}', response_model=MessageOut)
async def delete(event_id: UUID, current_user=Depends(get_current_user)):
    await _owned_event(event_id, current_user)
    try:
        await delete_event(event_id)
        return MessageOut(message='Event deleted')
    except Exception as e:
        raise HTTPException(500, f"Error deleting event: {str(e)}")


@router.put('/{event_id}/respond', response_model=MessageOut)
async def respond(event_id: UUID, payload: RespondIn, current_user=Depends(get_current_user)):
    if payload.status not in ('accepted', 'declined'):
        raise HTTPException(400, 'Invalid status')
    attendee = await respond_to_invite(event_id, current_user.id, payload.status)
    if not attendee:
        raise HTTPException(404, 'Invitation not found')
    return MessageOut(message=f'Invitation {payload.status}')


@router.post('/{event_id}/exclude-occurrence', response_model=EventOut)
async def exclude_occurrence(event_id: UUID, payload: ExcludeOccurrenceIn, current_user=Depends(get_current_user)):
    """Drop one occurrence from a recurring series; the rest of the series is kept."""
    event = await _owned_event(event_id, current_user)
    if not is_recurring({'recurrence_type': event.recurrence_type}):
        raise HTTPException(400, 'Event is not recurring')
    try:
        await add_recurrence_exception(event_id, payload.occurrence_start.isoformat())
    except Exception as e:
        raise HTTPException(500, f"Error excluding occurrence: {str(e)}")
    return await get_event_view(event_id, current_user.id)
