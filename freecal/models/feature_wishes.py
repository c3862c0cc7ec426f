import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from . import Base, utcnow

WISH_STATUSES = ('pending', 'completed')


class FeatureWish(Base):
    __tablename__ = 'feature_wishes'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(500), nullable=False)
    status = Column(String(16), nullable=False, default='pending')
    created_by = Column(Uuid, ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
