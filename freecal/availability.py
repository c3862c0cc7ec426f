"""
Shared free-time finder.

A user is busy during an event they own, or one they were invited to as an
attendee and have not declined. Viewers only see an event; it never blocks
their calendar.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List

from .calendar_utils import as_utc, overlaps

DAY_START_HOUR = 6
DAY_END_HOUR = 22
SLOT_MINUTES = 30


def _same(a, b) -> bool:
    return str(a) == str(b)


def blocks_calendar(event: dict, user_id) -> bool:
    if _same(event.get('user_id'), user_id):
        return True
    for attendee in event.get('attendees_details') or []:
        if _same(attendee.get('user_id'), user_id):
            return attendee.get('status') != 'declined'
    return False


def busy_intervals(events: Iterable[dict], user_ids: Iterable) -> list:
    ids = list(user_ids)
    return [
        (as_utc(e['start_time']), as_utc(e['end_time']))
        for e in events
        if any(blocks_calendar(e, uid) for uid in ids)
    ]


def find_free_slots(events: Iterable[dict], user_ids: Iterable, start_day: date, days: int = 14) -> List[dict]:
    """
    For each day from start_day, merge the free 30 minute slots between 06:00
    and 22:00 UTC in which none of user_ids is busy.
    """
    busy = busy_intervals(events, user_ids)
    result = []
    for offset in range(days):
        day = start_day + timedelta(days=offset)
        slots = []
        free_minutes = 0
        slot_start = datetime(day.year, day.month, day.day, DAY_START_HOUR, tzinfo=timezone.utc)
        day_end = datetime(day.year, day.month, day.day, DAY_END_HOUR, tzinfo=timezone.utc)
        while slot_start < day_end:
            slot_end = slot_start + timedelta(minutes=SLOT_MINUTES)
            if not any(overlaps(b_start, b_end, slot_start, slot_end) for b_start, b_end in busy):
                if slots and slots[-1]['end'] == slot_start:
                    slots[-1]['end'] = slot_end
                else:
                    slots.append({'start': slot_start, 'end': slot_end})
                free_minutes += SLOT_MINUTES
            slot_start = slot_end
        result.append({
            'date': day,
            'total_shared_hours': free_minutes / 60,
            'slots': slots,
        })
    return result
