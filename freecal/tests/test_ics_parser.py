from freecal.ics_parser import parse_ics, parse_multiple_ics

TIMED_EVENT = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//FreeCal Tests//EN
BEGIN:VEVENT
UID:abc-123@example.com
DTSTAMP:20240101T000000Z
DTSTART:20240115T090000Z
DTEND:20240115T103000Z
SUMMARY:Team Sync
DESCRIPTION:Weekly planning
LOCATION:Office
URL:https://example.com/sync
STATUS:TENTATIVE
RRULE:FREQ=WEEKLY;BYDAY=MO
ATTENDEE;CN=Anna Example:mailto:anna@example.com
BEGIN:VALARM
ACTION:DISPLAY
DESCRIPTION:Reminder
TRIGGER:-PT15M
END:VALARM
END:VEVENT
END:VCALENDAR
"""

ALL_DAY_EVENTS = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//FreeCal Tests//EN
BEGIN:VEVENT
UID:xmas@example.com
DTSTAMP:20240101T000000Z
DTSTART;VALUE=DATE:20241224
DTEND;VALUE=DATE:20241226
SUMMARY:Christmas
END:VEVENT
BEGIN:VEVENT
UID:nye@example.com
DTSTAMP:20240101T000000Z
DTSTART:20241231T200000Z
SUMMARY:New Year's Eve
END:VEVENT
END:VCALENDAR
"""

EMPTY_CALENDAR = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//FreeCal Tests//EN
END:VCALENDAR
"""


class TestParseICS:

    def test_timed_event(self):
        event = parse_ics(TIMED_EVENT)
        assert event is not None
        assert event.title == 'Team Sync'
        assert event.description == 'Weekly planning'
        assert event.location == 'Office'
        assert event.url == 'https://example.com/sync'
        assert event.start_date == '2024-01-15'
        assert event.end_date == '2024-01-15'
        assert event.start_time == '09:00'
        assert event.end_time == '10:30'
        assert event.is_all_day is False
        assert event.is_tentative is True
        assert event.original_calendar_id == 'abc-123@example.com'

    def test_recurrence_rule(self):
        event = parse_ics(TIMED_EVENT)
        assert 'FREQ=WEEKLY' in event.recurrence_rule
        assert 'BYDAY=MO' in event.recurrence_rule

    def test_attendees_and_alerts(self):
        event = parse_ics(TIMED_EVENT)
        assert len(event.attendees) == 1
        assert event.attendees[0].email == 'anna@example.com'
        assert event.attendees[0].name == 'Anna Example'
        assert [a.minutes for a in event.alerts] == [15]
        assert event.alerts[0].type == 'DISPLAY'

    def test_all_day_event(self):
        event = parse_ics(ALL_DAY_EVENTS)
        assert event.title == 'Christmas'
        assert event.is_all_day is True
        assert event.start_date == '2024-12-24'
        assert event.end_date == '2024-12-26'
        assert event.start_time is None
        assert event.end_time is None

    def test_no_events(self):
        assert parse_ics(EMPTY_CALENDAR) is None
        assert parse_multiple_ics(EMPTY_CALENDAR) == []


class TestParseMultipleICS:

    def test_all_events_returned(self):
        events = parse_multiple_ics(ALL_DAY_EVENTS)
        assert [e.title for e in events] == ['Christmas', "New Year's Eve"]

    def test_missing_end_uses_start(self):
        nye = parse_multiple_ics(ALL_DAY_EVENTS)[1]
        assert nye.start_date == '2024-12-31'
        assert nye.end_date == '2024-12-31'
        assert nye.start_time == '20:00'
        assert nye.is_tentative is False


ZONED_EVENT = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//FreeCal Tests//EN
BEGIN:VEVENT
UID:berlin@example.com
DTSTAMP:20250101T000000Z
DTSTART;TZID=Europe/Berlin:20250115T100000
DTEND;TZID=Europe/Berlin:20250115T113000
SUMMARY:Standup Berlin
END:VEVENT
END:VCALENDAR
"""


def test_zoned_times_are_converted_to_utc():
    event = parse_ics(ZONED_EVENT)
    assert event.start_date == '2025-01-15'
    assert event.start_time == '09:00'
    assert event.end_time == '10:30'
    assert event.is_all_day is False
