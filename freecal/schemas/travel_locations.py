from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from uuid import UUID

from .common import UTCDateTime


class CamelModel(BaseModel):
    # the map client speaks camelCase
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TravelLocationIn(CamelModel):
    name: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    country: Optional[str] = None
    city: Optional[str] = None
    visited_date: Optional[date] = None
    with_relationship_id: Optional[UUID] = None
    is_wishlist: bool = False
    notes: Optional[str] = None


class TravelLocationUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    country: Optional[str] = None
    city: Optional[str] = None
    visited_date: Optional[date] = None
    with_relationship_id: Optional[UUID] = None
    is_wishlist: Optional[bool] = None
    notes: Optional[str] = None


class TravelLocationOut(CamelModel):
    id: UUID
    user_id: UUID
    name: str
    latitude: float
    longitude: float
    country: Optional[str] = None
    city: Optional[str] = None
    visited_date: Optional[date] = None
    with_relationship_id: Optional[UUID] = None
    is_wishlist: bool = False
    notes: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None
    is_own: Optional[bool] = None
    owner_name: Optional[str] = None
    owner_color: Optional[str] = None
    with_relationship_name: Optional[str] = None
