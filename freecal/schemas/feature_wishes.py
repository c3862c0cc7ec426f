from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional
from uuid import UUID

from .common import UTCDateTime


class WishCreateIn(BaseModel):
    title: Optional[str] = None


class WishStatusIn(BaseModel):
    status: Optional[str] = None


class WishOut(BaseModel):
    id: UUID
    title: str
    status: Literal['pending', 'completed']
    created_by: Optional[UUID] = None
    created_at: Optional[UTCDateTime] = None

    model_config = ConfigDict(from_attributes=True)
