from datetime import datetime, timedelta, timezone

from freecal.recurrence import build_rule, expand_recurring_events, is_recurring


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def make_event(**overrides):
    event = {
        'id': 'evt-1',
        'title': 'Team Meeting',
        'start_time': utc(2024, 1, 1, 9, 0),
        'end_time': utc(2024, 1, 1, 10, 0),
        'recurrence_type': 'none',
        'recurrence_days': None,
        'recurrence_interval': None,
        'recurrence_end_date': None,
        'recurrence_rule': None,
        'recurrence_exceptions': None,
    }
    event.update(overrides)
    return event


class TestIsRecurring:

    def test_none_and_missing(self):
        assert not is_recurring({})
        assert not is_recurring({'recurrence_type': 'none'})
        assert not is_recurring({'recurrence_type': None})

    def test_repeating_types(self):
        for kind in ('daily', 'weekly', 'monthly', 'custom'):
            assert is_recurring({'recurrence_type': kind})


class TestExpandRecurringEvents:

    def test_weekly_event_in_range(self):
        # 2024-01-01 is a Monday
        event = make_event(recurrence_type='weekly')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 20))
        assert [o['start_time'] for o in result] == [
            utc(2024, 1, 1, 9), utc(2024, 1, 8, 9), utc(2024, 1, 15, 9),
        ]

    def test_occurrence_keeps_duration_and_series_id(self):
        event = make_event(recurrence_type='weekly')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 20))
        second = result[1]
        assert second['end_time'] - second['start_time'] == timedelta(hours=1)
        assert second['event_id'] == 'evt-1'
        assert second['id'] == f"evt-1_{int(utc(2024, 1, 8, 9).timestamp() * 1000)}"
        assert second['title'] == 'Team Meeting'

    def test_end_date_stops_series(self):
        event = make_event(recurrence_type='weekly', recurrence_end_date=utc(2024, 1, 10))
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 31))
        assert len(result) == 2

    def test_end_date_accepts_iso_string(self):
        event = make_event(recurrence_type='daily', recurrence_end_date='2024-01-03T23:59:59Z')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 31))
        assert len(result) == 3

    def test_series_started_before_window(self):
        """A Friday series from last week still produces occurrences in the window."""
        event = make_event(
            start_time=utc(2026, 2, 6, 18),
            end_time=utc(2026, 2, 6, 19),
            recurrence_type='weekly',
        )
        result = expand_recurring_events([event], utc(2026, 2, 9), utc(2026, 2, 28))
        days = [o['start_time'].date().isoformat() for o in result]
        assert days == ['2026-02-13', '2026-02-20', '2026-02-27']

    def test_recurrence_days_sunday_first(self):
        # '1' is Monday, '3' is Wednesday
        event = make_event(recurrence_type='weekly', recurrence_days=['1', '3'])
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 8))
        assert [o['start_time'].weekday() for o in result] == [0, 2]

    def test_interval(self):
        event = make_event(recurrence_type='daily', recurrence_interval=2)
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 7, 23))
        assert [o['start_time'].day for o in result] == [1, 3, 5, 7]

    def test_monthly(self):
        event = make_event(start_time=utc(2024, 1, 15, 9), end_time=utc(2024, 1, 15, 10), recurrence_type='monthly')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 4, 30))
        assert [o['start_time'].month for o in result] == [1, 2, 3, 4]

    def test_custom_rule(self):
        event = make_event(recurrence_type='custom', recurrence_rule='FREQ=WEEKLY;BYDAY=TU,TH;COUNT=3')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 2, 1))
        assert [o['start_time'].day for o in result] == [2, 4, 9]

    def test_exceptions_are_skipped(self):
        event = make_event(
            recurrence_type='weekly',
            recurrence_exceptions=['2024-01-08T09:00:00+00:00'],
        )
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 20))
        assert [o['start_time'].day for o in result] == [1, 15]

    def test_occurrence_running_into_window(self):
        event = make_event(
            start_time=utc(2024, 1, 1, 23),
            end_time=utc(2024, 1, 2, 1),
            recurrence_type='daily',
        )
        result = expand_recurring_events([event], utc(2024, 1, 3), utc(2024, 1, 3, 12))
        assert [o['start_time'] for o in result] == [utc(2024, 1, 2, 23)]

    def test_non_recurring_passes_through(self):
        event = make_event()
        result = expand_recurring_events([event], utc(2030, 1, 1), utc(2030, 2, 1))
        assert result == [event]

    def test_broken_rule_keeps_event(self):
        event = make_event(recurrence_type='custom', recurrence_rule='NOT A RULE')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 2, 1))
        assert result == [event]


def test_build_rule_without_days_uses_start_weekday():
    rule = build_rule(make_event(recurrence_type='weekly'))
    assert rule.after(utc(2024, 1, 1, 9)) == utc(2024, 1, 8, 9)


class TestImportedRules:
    """RRULE text as phone calendars export it"""

    def test_date_until_on_all_day_series(self):
        event = make_event(
            start_time=utc(2025, 1, 6),
            end_time=utc(2025, 1, 7),
            recurrence_type='custom',
            recurrence_rule='FREQ=WEEKLY;UNTIL=20250203',
        )
        result = expand_recurring_events([event], utc(2025, 1, 1), utc(2025, 2, 28))
        assert [o['start_time'].day for o in result] == [6, 13, 20, 27, 3]

    def test_floating_until(self):
        event = make_event(recurrence_type='custom', recurrence_rule='FREQ=DAILY;UNTIL=20240103T090000')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 31))
        assert [o['start_time'].day for o in result] == [1, 2, 3]

    def test_utc_until_is_left_alone(self):
        event = make_event(recurrence_type='custom', recurrence_rule='FREQ=DAILY;UNTIL=20240102T090000Z;INTERVAL=1')
        result = expand_recurring_events([event], utc(2024, 1, 1), utc(2024, 1, 31))
        assert [o['start_time'].day for o in result] == [1, 2]
