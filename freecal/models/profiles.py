import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from . import Base, utcnow
from ..config import DEFAULT_CALENDAR_COLOR


class Profile(Base):
    __tablename__ = 'profiles'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # accounts migrated from the hosted auth provider arrive without a hash
    password_hash = Column(String(255), nullable=True)
    display_name = Column(String(255), nullable=False)
    avatar_url = Column(String, nullable=True)
    calendar_color = Column(String(64), nullable=False, default=DEFAULT_CALENDAR_COLOR)
    is_approved = Column(Boolean, nullable=False, default=False)
    approval_status = Column(String(16), nullable=False, default='pending')
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(Uuid, nullable=True)
    reset_token = Column(String(128), nullable=True, index=True)
    reset_token_expires = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
