from datetime import date, datetime, timedelta, timezone

import pytest

from freecal.calendar_utils import (
    add_months,
    end_of_week,
    as_utc,
    get_calendar_days,
    get_days_in_month,
    get_week_dates,
    month_bounds,
    month_name,
    overlaps,
    parse_datetime,
    start_of_week,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestDates:

    def test_days_in_month(self):
        assert get_days_in_month(2024, 2) == 29
        assert get_days_in_month(2023, 2) == 28
        assert get_days_in_month(2024, 12) == 31

    def test_calendar_days_monday_first(self):
        # 2024-02-01 is a Thursday
        days = get_calendar_days(2024, 2)
        assert days[:3] == [None, None, None]
        assert days[3] == date(2024, 2, 1)
        assert days[-1] == date(2024, 2, 29)
        assert len(days) == 3 + 29

    def test_month_starting_on_monday_has_no_padding(self):
        assert get_calendar_days(2024, 1)[0] == date(2024, 1, 1)

    def test_week(self):
        assert start_of_week(date(2024, 1, 10)) == date(2024, 1, 8)
        assert end_of_week(date(2024, 1, 10)) == date(2024, 1, 14)
        week = get_week_dates(date(2024, 1, 14))
        assert week[0] == date(2024, 1, 8)
        assert week[-1] == date(2024, 1, 14)

    def test_add_months(self):
        assert add_months(2024, 12, 1) == (2025, 1)
        assert add_months(2024, 1, -1) == (2023, 12)
        assert add_months(2024, 5, 14) == (2025, 7)

    def test_month_bounds(self):
        assert month_bounds(2024, 12) == (utc(2024, 12, 1), utc(2025, 1, 1))

    def test_month_name(self):
        assert month_name(1) == 'January'
        assert month_name(12) == 'December'


class TestParsing:

    def test_as_utc(self):
        assert as_utc(None) is None
        assert as_utc(datetime(2024, 1, 1, 9)) == utc(2024, 1, 1, 9)
        plus_two = timezone(timedelta(hours=2))
        assert as_utc(datetime(2024, 1, 1, 11, tzinfo=plus_two)) == utc(2024, 1, 1, 9)

    def test_parse_datetime(self):
        assert parse_datetime('2024-01-01T09:00:00Z') == utc(2024, 1, 1, 9)
        assert parse_datetime('2024-01-01T10:00:00+01:00') == utc(2024, 1, 1, 9)
        assert parse_datetime(date(2024, 1, 1)) == utc(2024, 1, 1)
        assert parse_datetime('') is None
        with pytest.raises(ValueError):
            parse_datetime('not a date')


class TestOverlaps:

    def test_overlapping(self):
        assert overlaps(utc(2024, 1, 1, 9), utc(2024, 1, 1, 10), utc(2024, 1, 1, 9, 30), utc(2024, 1, 1, 11))

    def test_touching_is_not_overlap(self):
        assert not overlaps(utc(2024, 1, 1, 9), utc(2024, 1, 1, 10), utc(2024, 1, 1, 10), utc(2024, 1, 1, 11))

    def test_zero_length_event(self):
        point = utc(2024, 1, 1, 10)
        assert overlaps(point, point, utc(2024, 1, 1), utc(2024, 1, 2))
        assert not overlaps(point, point, utc(2024, 1, 1, 11), utc(2024, 1, 2))
