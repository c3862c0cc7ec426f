"""
Recurrence expansion: turns stored repeat settings into concrete occurrences
for a viewing window. Built on dateutil.rrule.
"""

import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional

from dateutil import rrule

from .calendar_utils import parse_datetime

logger = logging.getLogger('freecal.recurrence')

FREQUENCIES = {
    'daily': rrule.DAILY,
    'weekly': rrule.WEEKLY,
    'monthly': rrule.MONTHLY,
    'custom': rrule.WEEKLY,
}

# recurrence_days are stored Sunday-first, '0'..'6'
WEEKDAYS = {
    0: rrule.SU,
    1: rrule.MO,
    2: rrule.TU,
    3: rrule.WE,
    4: rrule.TH,
    5: rrule.FR,
    6: rrule.SA,
}

# UNTIL=YYYYMMDD or a floating YYYYMMDDTHHMMSS, as phone exports write them
FLOATING_UNTIL = re.compile(r"UNTIL=(\d{8})(T\d{6})?(?=;|$)", re.IGNORECASE)


def _utc_until(rule_text: str) -> str:
    """Pin a date-only or floating UNTIL to UTC; the rule start is always aware."""
    def _pin(match):
        return f"UNTIL={match.group(1)}{match.group(2) or 'T235959'}Z"
    return FLOATING_UNTIL.sub(_pin, rule_text)


def is_recurring(event: dict) -> bool:
    return bool(event.get('recurrence_type')) and event.get('recurrence_type') != 'none'


def _weekdays(days: Optional[Iterable]) -> list:
    result = []
    for d in days or []:
        try:
            day = int(d)
        except (TypeError, ValueError):
            continue
        if day in WEEKDAYS:
            result.append(WEEKDAYS[day])
    return result


def build_rule(event: dict):
    """Return the dateutil rule for a recurring event."""
    start = parse_datetime(event['start_time'])
    recurrence_type = event.get('recurrence_type')
    stored_rule = event.get('recurrence_rule')
    if recurrence_type == 'custom' and stored_rule:
        return rrule.rrulestr(_utc_until(stored_rule), dtstart=start)

    options = {
        'dtstart': start,
        'interval': event.get('recurrence_interval') or 1,
        'until': parse_datetime(event.get('recurrence_end_date')),
    }
    byweekday = _weekdays(event.get('recurrence_days'))
    if byweekday:
        options['byweekday'] = byweekday
    return rrule.rrule(FREQUENCIES.get(recurrence_type, rrule.WEEKLY), **options)


def _excluded(event: dict) -> set:
    excluded = set()
    for value in event.get('recurrence_exceptions') or []:
        try:
            excluded.add(parse_datetime(value))
        except ValueError:
            logger.warning({'msg': 'bad_recurrence_exception', 'event_id': str(event.get('id')), 'value': value})
    return excluded


def expand_recurring_events(events: List[dict], start_range: datetime, end_range: datetime) -> List[dict]:
    """
    Expand recurring events within [start_range, end_range].

    Non-recurring events are returned as-is. Each occurrence of a recurring
    event is a copy of the event with its own start/end (duration kept), an id
    of ``<event id>_<epoch ms>`` and ``event_id`` pointing at the series.
    """
    start_range = parse_datetime(start_range)
    end_range = parse_datetime(end_range)
    expanded: List[dict] = []

    for event in events:
        if not is_recurring(event):
            expanded.append(event)
            continue

        try:
            event_start = parse_datetime(event['start_time'])
            duration = parse_datetime(event['end_time']) - event_start
            rule = build_rule(event)
            excluded = _excluded(event)
            # widen by the duration so an occurrence running into the window is kept
            for occurrence in rule.between(start_range - duration, end_range, inc=True):
                if occurrence in excluded:
                    continue
                occurrence_end = occurrence + duration
                if duration and occurrence_end <= start_range:
                    continue
                expanded.append({
                    **event,
                    'id': f"{event['id']}_{int(occurrence.timestamp() * 1000)}",
                    'event_id': event['id'],
                    'start_time': occurrence,
                    'end_time': occurrence_end,
                })
        except Exception as e:
            logger.error({'msg': 'recurrence_expansion_failed', 'event_id': str(event.get('id')), 'error': str(e)})
            expanded.append(event)

    return expanded
