from collections import defaultdict
from sqlalchemy import select, or_, and_, delete

from ..models import AsyncSessionLocal
from ..models.events import RECURRENCE_TYPES, Event, EventAttendee, EventViewer
from ..models.profiles import Profile

RECURRING_TYPES = tuple(t for t in RECURRENCE_TYPES if t != 'none')


def _unique(ids):
    seen = []
    for i in ids or []:
        if i not in seen:
            seen.append(i)
    return seen


def event_to_dict(event) -> dict:
    return {c.name: getattr(event, c.name) for c in Event.__table__.columns}


async def get_event(event_id):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Event).where(Event.id == event_id))
        return q.scalars().first()


async def visible_event_ids(user_id) -> set:
    """Events the user owns, attends or views."""
    async with AsyncSessionLocal() as session:
        owned = await session.execute(select(Event.id).where(Event.user_id == user_id))
        attending = await session.execute(select(EventAttendee.event_id).where(EventAttendee.user_id == user_id))
        viewing = await session.execute(select(EventViewer.event_id).where(EventViewer.user_id == user_id))
        return set(owned.scalars().all()) | set(attending.scalars().all()) | set(viewing.scalars().all())


async def build_event_views(events, viewer_id) -> list:
    """
    Attach attendees, viewers and the creator's name/colour to each event,
    loading related rows in one batch per table.
    """
    if not events:
        return []
    event_ids = [e.id for e in events]
    async with AsyncSessionLocal() as session:
        aq = await session.execute(select(EventAttendee).where(EventAttendee.event_id.in_(event_ids)).order_by(EventAttendee.created_at))
        vq = await session.execute(select(EventViewer).where(EventViewer.event_id.in_(event_ids)).order_by(EventViewer.created_at))
        attendees = aq.scalars().all()
        viewers = vq.scalars().all()
        creator_ids = {e.user_id for e in events}
        pq = await session.execute(select(Profile).where(Profile.id.in_(creator_ids)))
        creators = {p.id: p for p in pq.scalars().all()}

    attendees_by_event = defaultdict(list)
    for a in attendees:
        attendees_by_event[a.event_id].append(a)
    viewers_by_event = defaultdict(list)
    for v in viewers:
        viewers_by_event[v.event_id].append(v.user_id)

    results = []
    for event in events:
        data = event_to_dict(event)
        event_attendees = attendees_by_event.get(event.id, [])
        attendee_ids = [a.user_id for a in event_attendees]
        viewer_ids = viewers_by_event.get(event.id, [])
        creator = creators.get(event.user_id)
        is_creator = event.user_id == viewer_id
        data.update({
            'attendees': attendee_ids,
            'attendees_details': [{'user_id': a.user_id, 'status': a.status} for a in event_attendees],
            'viewers': viewer_ids,
            'creator_name': creator.display_name if creator else None,
            'creator_color': creator.calendar_color if creator else None,
            'is_viewer': viewer_id in viewer_ids and not is_creator and viewer_id not in attendee_ids,
        })
        results.append(data)
    return results


async def list_visible_events(user_id) -> list:
    ids = await visible_event_ids(user_id)
    if not ids:
        return []
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Event).where(Event.id.in_(ids)).order_by(Event.start_time))
        events = q.scalars().all()
    return await build_event_views(events, user_id)


async def get_event_view(event_id, viewer_id):
    event = await get_event(event_id)
    if not event:
        return None
    views = await build_event_views([event], viewer_id)
    return views[0]


async def list_events_involving(user_ids, start, end) -> list:
    """
    Events owned or attended by any of user_ids that may touch [start, end).
    Recurring series are always included and left to expansion.
    """
    ids = list(user_ids)
    async with AsyncSessionLocal() as session:
        attended = select(EventAttendee.event_id).where(EventAttendee.user_id.in_(ids))
        q = await session.execute(select(Event).where(
            or_(Event.user_id.in_(ids), Event.id.in_(attended)),
            Event.start_time < end,
            or_(Event.end_time >= start, Event.recurrence_type.in_(RECURRING_TYPES)),
        ))
        events = q.scalars().all()
    return await build_event_views(events, None)


async def create_event(owner_id, fields: dict, attendees=None, viewers=None):
    async with AsyncSessionLocal() as session:
        event = Event(user_id=owner_id, **fields)
        session.add(event)
        await session.flush()
        for user_id in _unique(attendees):
            session.add(EventAttendee(event_id=event.id, user_id=user_id, status='pending'))
        for user_id in _unique(viewers):
            session.add(EventViewer(event_id=event.id, user_id=user_id))
        await session.commit()
        await session.refresh(event)
        return event


async def update_event(event_id, fields: dict, attendees=None, viewers=None):
    """
    Write the given fields. attendees / viewers, when not None, replace the
    current lists; attendees who stay keep their response.
    Returns (event, newly_invited_user_ids) or None.
    """
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Event).where(Event.id == event_id))
        event = q.scalars().first()
        if not event:
            return None
        for key, value in fields.items():
            setattr(event, key, value)

        invited = []
        if attendees is not None:
            wanted = _unique(attendees)
            aq = await session.execute(select(EventAttendee).where(EventAttendee.event_id == event_id))
            current = {a.user_id: a for a in aq.scalars().all()}
            for user_id, row in current.items():
                if user_id not in wanted:
                    await session.delete(row)
            for user_id in wanted:
                if user_id not in current:
                    session.add(EventAttendee(event_id=event_id, user_id=user_id, status='pending'))
                    invited.append(user_id)

        if viewers is not None:
            await session.execute(delete(EventViewer).where(EventViewer.event_id == event_id))
            for user_id in _unique(viewers):
                session.add(EventViewer(event_id=event_id, user_id=user_id))

        await session.commit()
        await session.refresh(event)
        return event, invited


async def delete_event(event_id) -> bool:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Event).where(Event.id == event_id))
        event = q.scalars().first()
        if not event:
            return False
        await session.delete(event)
        await session.commit()
        return True


async def respond_to_invite(event_id, user_id, status: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(EventAttendee).where(
            and_(EventAttendee.event_id == event_id, EventAttendee.user_id == user_id)
        ))
        attendee = q.scalars().first()
        if not attendee:
            return None
        attendee.status = status
        await session.commit()
        await session.refresh(attendee)
        return attendee


async def add_recurrence_exception(event_id, occurrence_start: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Event).where(Event.id == event_id))
        event = q.scalars().first()
        if not event:
            return None
        exceptions = list(event.recurrence_exceptions or [])
        if occurrence_start not in exceptions:
            exceptions.append(occurrence_start)
        # reassign so the JSON column is flagged dirty
        event.recurrence_exceptions = exceptions
        await session.commit()
        await session.refresh(event)
        return event
