import uuid
from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime, ForeignKey, UniqueConstraint, JSON, Uuid
from . import Base, utcnow

RECURRENCE_TYPES = ('none', 'daily', 'weekly', 'monthly', 'custom')


class Event(Base):
    __tablename__ = 'events'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('profiles.id', ondelete='CASCADE'), index=True, nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    is_all_day = Column(Boolean, nullable=False, default=False)
    color = Column(String(64), nullable=False)
    recurrence_rule = Column(Text, nullable=True)
    recurrence_type = Column(String(16), nullable=True, default='none')
    recurrence_days = Column(JSON, nullable=True)
    recurrence_interval = Column(Integer, nullable=True, default=1)
    recurrence_end_date = Column(DateTime(timezone=True), nullable=True)
    # occurrence starts (ISO strings) removed from a recurring series
    recurrence_exceptions = Column(JSON, nullable=True)
    imported_from_device = Column(Boolean, nullable=False, default=False)
    location = Column(String(500), nullable=True)
    url = Column(String(2048), nullable=True)
    is_tentative = Column(Boolean, nullable=False, default=False)
    alerts = Column(JSON, nullable=True)
    travel_time = Column(String(64), nullable=True)
    original_calendar_id = Column(String(255), nullable=True)
    structured_metadata = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class EventAttendee(Base):
    __tablename__ = 'event_attendees'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey('events.id', ondelete='CASCADE'), index=True, nullable=False)
    user_id = Column(Uuid, ForeignKey('profiles.id', ondelete='CASCADE'), index=True, nullable=False)
    status = Column(String(16), nullable=False, default='pending')
    is_attendee = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    __table_args__ = (
        UniqueConstraint('event_id', 'user_id', name='uix_event_attendee'),
    )


class EventViewer(Base):
    __tablename__ = 'event_viewers'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey('events.id', ondelete='CASCADE'), index=True, nullable=False)
    user_id = Column(Uuid, ForeignKey('profiles.id', ondelete='CASCADE'), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    __table_args__ = (
        UniqueConstraint('event_id', 'user_id', name='uix_event_viewer'),
    )
