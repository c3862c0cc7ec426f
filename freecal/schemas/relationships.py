from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional
from uuid import UUID

from .common import UTCDateTime
from .users import UserOut

RelationshipStatus = Literal['pending', 'accepted', 'rejected']


class RelationshipCreateIn(BaseModel):
    email: Optional[str] = None


class RelationshipUpdateIn(BaseModel):
    status: Optional[str] = None


class RelationshipOut(BaseModel):
    id: UUID
    user_id: UUID
    related_user_id: UUID
    status: RelationshipStatus
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None
    # the other party, seen from the requesting user
    profile: Optional[UserOut] = None

    model_config = ConfigDict(from_attributes=True)
