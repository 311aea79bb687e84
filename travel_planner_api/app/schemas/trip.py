"""
Pydantic models for trip data.

``TripCreate`` is the request body for creating a trip, ``TripUpdate``
the partial update body and ``TripRead`` the representation returned
by the API.  The owner is never taken from the body; it is the
authenticated principal.
"""

from datetime import date, datetime
from typing import ClassVar, Optional

from pydantic import Field

from .common import ApiModel, PatchModel


class TripCreate(ApiModel):
    title: str = Field(..., min_length=1, examples=["Trip Test"])
    description: Optional[str] = Field(None, examples=["Two weeks on the coast"])
    destination: str = Field(..., min_length=1, examples=["Test Destination"])
    start_date: date = Field(..., examples=["2022-12-01"])
    end_date: date = Field(..., examples=["2022-12-10"])


class TripUpdate(PatchModel):
    """Schema for updating a trip.

    All fields are optional; only provided fields will be updated.
    """

    nullable_fields: ClassVar[frozenset] = frozenset({"description"})

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    destination: Optional[str] = Field(None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TripRead(ApiModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    destination: str
    start_date: date
    end_date: date
    created_at: datetime
    updated_at: datetime
