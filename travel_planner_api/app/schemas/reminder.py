"""
Pydantic models for reminders.

A reminder references both its owner and a trip.  On update the client
must send the reminder's ``tripId``; it is compared with the stored
value and never written, so a reminder cannot be re-attached to
another trip.
"""

from datetime import datetime
from typing import ClassVar, Optional
from uuid import UUID

from pydantic import Field

from .common import ApiModel, PatchModel, UtcDatetime


class ReminderCreate(ApiModel):
    trip_id: UUID
    message: str = Field(..., min_length=1, examples=["Check in online"])
    time: UtcDatetime = Field(..., examples=["2022-11-30T09:00:00Z"])


class ReminderUpdate(PatchModel):
    reference_fields: ClassVar[frozenset] = frozenset({"trip_id"})

    trip_id: UUID
    message: Optional[str] = Field(None, min_length=1)
    time: Optional[UtcDatetime] = None


class ReminderRead(ApiModel):
    id: str
    user_id: str
    trip_id: str
    message: str
    time: datetime
    created_at: datetime
    updated_at: datetime
