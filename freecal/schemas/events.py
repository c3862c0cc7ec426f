from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from .common import UTCDateTime

RecurrenceType = Literal['none', 'daily', 'weekly', 'monthly', 'custom']
AttendeeStatus = Literal['pending', 'accepted', 'declined']


class EventBase(BaseModel):
    description: Optional[str] = None
    is_all_day: bool = False
    color: Optional[str] = None
    recurrence_rule: Optional[str] = None
    recurrence_type: RecurrenceType = 'none'
    recurrence_days: Optional[List[str]] = None
    recurrence_interval: Optional[int] = Field(None, ge=1)
    recurrence_end_date: Optional[UTCDateTime] = None
    imported_from_device: bool = False
    location: Optional[str] = None
    url: Optional[str] = None
    is_tentative: bool = False
    alerts: Optional[List[Dict[str, Any]]] = None
    travel_time: Optional[str] = None
    original_calendar_id: Optional[str] = None
    structured_metadata: Optional[Dict[str, Any]] = None


class EventIn(EventBase):
    title: str = Field(..., min_length=1, max_length=500)
    start_time: UTCDateTime
    end_time: UTCDateTime
    attendees: List[UUID] = []
    viewers: List[UUID] = []


class EventUpdateIn(BaseModel):
    """Partial update; only the fields sent are written."""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    start_time: Optional[UTCDateTime] = None
    end_time: Optional[UTCDateTime] = None
    is_all_day: Optional[bool] = None
    color: Optional[str] = None
    recurrence_rule: Optional[str] = None
    recurrence_type: Optional[RecurrenceType] = None
    recurrence_days: Optional[List[str]] = None
    recurrence_interval: Optional[int] = Field(None, ge=1)
    recurrence_end_date: Optional[UTCDateTime] = None
    location: Optional[str] = None
    url: Optional[str] = None
    is_tentative: Optional[bool] = None
    alerts: Optional[List[Dict[str, Any]]] = None
    travel_time: Optional[str] = None
    structured_metadata: Optional[Dict[str, Any]] = None
    attendees: Optional[List[UUID]] = None
    viewers: Optional[List[UUID]] = None


class AttendeeDetail(BaseModel):
    user_id: UUID = Field(..., serialization_alias='userId')
    status: AttendeeStatus


class EventOut(EventBase):
    id: UUID
    user_id: UUID
    title: str
    color: str
    start_time: UTCDateTime
    end_time: UTCDateTime
    recurrence_type: Optional[RecurrenceType] = 'none'
    recurrence_exceptions: Optional[List[str]] = None
    attendees: List[UUID] = []
    attendees_details: List[AttendeeDetail] = []
    viewers: List[UUID] = []
    creator_name: Optional[str] = None
    creator_color: Optional[str] = None
    is_viewer: bool = Field(False, serialization_alias='isViewer')
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None

    model_config = ConfigDict(from_attributes=True)


class OccurrenceOut(EventOut):
    """One concrete occurrence; id is ``<event id>_<epoch ms>`` for repeats."""
    id: str
    event_id: UUID


class RespondIn(BaseModel):
    status: Optional[str] = None


class ExcludeOccurrenceIn(BaseModel):
    occurrence_start: UTCDateTime


class CalendarDayOut(BaseModel):
    date: str
    events: List[OccurrenceOut] = []


class CalendarMonthOut(BaseModel):
    year: int
    month: int
    month_name: str
    days: List[Optional[CalendarDayOut]]
