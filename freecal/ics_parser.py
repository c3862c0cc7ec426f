"""
iCalendar import: reads VEVENT components exported by phone calendars into
ParsedEvent drafts.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from icalendar import Calendar

from .schemas.imports import ParsedAlert, ParsedAttendee, ParsedEvent

logger = logging.getLogger('freecal.import')


def _text(component, key: str) -> Optional[str]:
    value = component.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _as_list(value) -> list:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _attendees(component) -> List[ParsedAttendee]:
    attendees = []
    for address in _as_list(component.get('ATTENDEE')):
        raw = str(address)
        if not raw.lower().startswith('mailto:'):
            continue
        email = raw[len('mailto:'):]
        if not email:
            continue
        name = str(address.params.get('CN', '')) if hasattr(address, 'params') else ''
        attendees.append(ParsedAttendee(name=name or email, email=email))
    return attendees


def _alerts(component) -> List[ParsedAlert]:
    alerts = []
    for alarm in component.walk('VALARM'):
        trigger = alarm.get('TRIGGER')
        # absolute triggers carry a datetime; only relative offsets map to minutes
        if trigger is None or not isinstance(trigger.dt, timedelta):
            continue
        minutes = abs(int(trigger.dt.total_seconds() // 60))
        alerts.append(ParsedAlert(minutes=minutes, type='DISPLAY'))
    return alerts


def _split(value) -> tuple:
    """(YYYY-MM-DD, HH:MM or None, is_all_day) for a DTSTART/DTEND value."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            # TZID values are wall-clock time in that zone; drafts are UTC
            value = value.astimezone(timezone.utc)
        return value.strftime('%Y-%m-%d'), value.strftime('%H:%M'), False
    if isinstance(value, date):
        return value.strftime('%Y-%m-%d'), None, True
    return None, None, False


def _parse_component(component) -> Optional[ParsedEvent]:
    dtstart = component.get('DTSTART')
    if dtstart is None:
        return None
    start_date, start_time, is_all_day = _split(dtstart.dt)
    if start_date is None:
        return None
    dtend = component.get('DTEND')
    end_date, end_time = start_date, start_time
    if dtend is not None:
        parsed_end_date, parsed_end_time, _ = _split(dtend.dt)
        end_date = parsed_end_date or start_date
        end_time = parsed_end_time

    rrule = component.get('RRULE')
    recurrence_rule = rrule.to_ical().decode('utf-8') if rrule is not None else None
    status = (_text(component, 'STATUS') or 'CONFIRMED').upper()

    return ParsedEvent(
        title=_text(component, 'SUMMARY') or '',
        description=_text(component, 'DESCRIPTION'),
        location=_text(component, 'LOCATION'),
        url=_text(component, 'URL'),
        start_date=start_date,
        end_date=end_date,
        start_time=None if is_all_day else start_time,
        end_time=None if is_all_day else end_time,
        is_all_day=is_all_day,
        recurrence_rule=recurrence_rule,
        attendees=_attendees(component) or None,
        alerts=_alerts(component) or None,
        is_tentative=status == 'TENTATIVE',
        original_calendar_id=_text(component, 'UID'),
    )


def _events(content: str) -> list:
    try:
        calendar = Calendar.from_ical(content)
    except Exception as e:
        logger.warning({'msg': 'ics_parse_failed', 'error': str(e)})
        return []
    return calendar.walk('VEVENT')


def parse_ics(content: str) -> Optional[ParsedEvent]:
    """Parse the first VEVENT of an iCalendar document, or None."""
    for component in _events(content):
        try:
            return _parse_component(component)
        except Exception as e:
            logger.warning({'msg': 'ics_event_skipped', 'error': str(e)})
            return None
    return None


def parse_multiple_ics(content: str) -> List[ParsedEvent]:
    parsed = []
    for component in _events(content):
        try:
            event = _parse_component(component)
        except Exception as e:
            logger.warning({'msg': 'ics_event_skipped', 'error': str(e)})
            continue
        if event is not None:
            parsed.append(event)
    return parsed
