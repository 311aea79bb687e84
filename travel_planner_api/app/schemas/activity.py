"""
Pydantic models for activity data.

Activities belong to an itinerary.  ``detail`` is an open key/value
object (opening hours, booking references and the like) stored as JSON.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional
from uuid import UUID

from pydantic import Field

from .common import ApiModel, PatchModel, UtcDatetime


class ActivityCategory(str, Enum):
    ACCOMMODATION = "ACCOMMODATION"
    FOOD = "FOOD"
    TRANSPORT = "TRANSPORT"
    SIGHTSEEING = "SIGHTSEEING"
    SHOPPING = "SHOPPING"
    OTHER = "OTHER"


class ActivityCreate(ApiModel):
    itinerary_id: UUID
    title: str = Field(..., min_length=1, examples=["Museum visit"])
    description: Optional[str] = None
    location: str = Field(..., min_length=1, examples=["Rijksmuseum, Amsterdam"])
    start_time: UtcDatetime = Field(..., examples=["2022-12-02T10:00:00Z"])
    end_time: UtcDatetime = Field(..., examples=["2022-12-02T12:00:00Z"])
    category: ActivityCategory
    detail: Dict[str, Any] = Field(default_factory=dict)


class ActivityUpdate(PatchModel):
    """Schema for updating an activity.

    ``itineraryId`` may be sent, but must name the activity's current
    itinerary; activities are not moved between itineraries.
    """

    nullable_fields: ClassVar[frozenset] = frozenset({"description"})
    reference_fields: ClassVar[frozenset] = frozenset({"itinerary_id"})

    itinerary_id: Optional[UUID] = None
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    location: Optional[str] = Field(None, min_length=1)
    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None
    category: Optional[ActivityCategory] = None
    detail: Optional[Dict[str, Any]] = None


class ActivityRead(ApiModel):
    id: str
    itinerary_id: str
    title: str
    description: Optional[str] = None
    location: str
    start_time: datetime
    end_time: datetime
    category: ActivityCategory
    detail: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
