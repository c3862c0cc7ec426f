"""
Date helpers shared by the calendar views, recurrence expansion and the
free-time finder. All datetimes handled here are timezone-aware UTC.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return as_utc(datetime.fromisoformat(text))


def get_days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def get_calendar_days(year: int, month: int) -> List[Optional[date]]:
    """Month grid cells, Monday first, with None padding before day one."""
    first = date(year, month, 1)
    padding = first.weekday()
    days: List[Optional[date]] = [None] * padding
    days.extend(date(year, month, d) for d in range(1, get_days_in_month(year, month) + 1))
    return days


def start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def end_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=6)


def get_week_dates(day: date) -> List[date]:
    monday = start_of_week(day)
    return [monday + timedelta(days=i) for i in range(7)]


def add_months(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int):
    """UTC [start, end) of a calendar month."""
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    next_year, next_month = add_months(year, month, 1)
    return start, datetime(next_year, next_month, 1, tzinfo=timezone.utc)


def day_bounds(day: date):
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    if start_a == end_a:
        return start_b <= start_a < end_b
    return start_a < end_b and end_a > start_b


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]
