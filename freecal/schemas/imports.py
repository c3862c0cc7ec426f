from pydantic import BaseModel
from typing import List, Optional

from .events import EventOut


class ParsedAttendee(BaseModel):
    name: str
    email: str


class ParsedAlert(BaseModel):
    minutes: int
    type: str = 'DISPLAY'


class ParsedEvent(BaseModel):
    """Draft event read from an .ics file or screenshot text."""
    title: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_all_day: bool = False
    description: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    recurrence_rule: Optional[str] = None
    attendees: Optional[List[ParsedAttendee]] = None
    alerts: Optional[List[ParsedAlert]] = None
    is_tentative: bool = False
    calendar: Optional[str] = None
    original_calendar_id: Optional[str] = None


class ICSImportIn(BaseModel):
    content: str
    dry_run: bool = False
    color: Optional[str] = None


class ICSImportOut(BaseModel):
    parsed: List[ParsedEvent]
    created: List[EventOut] = []


class OCRImportIn(BaseModel):
    text: str
