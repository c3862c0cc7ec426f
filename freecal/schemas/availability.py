from datetime import date
from pydantic import BaseModel
from typing import List

from .common import UTCDateTime


class FreeSlotOut(BaseModel):
    start: UTCDateTime
    end: UTCDateTime


class FreeDayOut(BaseModel):
    date: date
    total_shared_hours: float
    slots: List[FreeSlotOut] = []
