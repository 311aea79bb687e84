"""Pydantic models for itinerary data."""

import datetime as dt
from typing import ClassVar, Optional
from uuid import UUID

from pydantic import Field

from .common import ApiModel, PatchModel


class ItineraryCreate(ApiModel):
    trip_id: UUID
    date: dt.date = Field(..., examples=["2022-12-02"])


class ItineraryUpdate(PatchModel):
    """``tripId`` may be sent, but must name the itinerary's current trip."""

    reference_fields: ClassVar[frozenset] = frozenset({"trip_id"})

    trip_id: Optional[UUID] = None
    date: Optional[dt.date] = None


class ItineraryRead(ApiModel):
    id: str
    trip_id: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime
