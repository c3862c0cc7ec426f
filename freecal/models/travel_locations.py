import uuid
from sqlalchemy import Column, String, Text, Boolean, Float, Date, DateTime, ForeignKey, Uuid
from . import Base, utcnow


class TravelLocation(Base):
    __tablename__ = 'travel_locations'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('profiles.id', ondelete='CASCADE'), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    country = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    visited_date = Column(Date, nullable=True)
    with_relationship_id = Column(Uuid, ForeignKey('profiles.id', ondelete='SET NULL'), index=True, nullable=True)
    is_wishlist = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
