from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel

from ..calendar_utils import as_utc

# stored and returned as UTC whatever the database driver hands back
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class MessageOut(BaseModel):
    message: str
