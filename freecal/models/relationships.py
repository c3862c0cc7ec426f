import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Uuid
from . import Base, utcnow


class Relationship(Base):
    __tablename__ = 'relationships'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('profiles.id', ondelete='CASCADE'), index=True, nullable=False)
    related_user_id = Column(Uuid, ForeignKey('profiles.id', ondelete='CASCADE'), index=True, nullable=False)
    status = Column(String(16), nullable=False, default='pending')
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    __table_args__ = (
        UniqueConstraint('user_id', 'related_user_id', name='uix_relationship_pair'),
    )
