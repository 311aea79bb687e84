"""
Activity endpoints for API v1.

Activities are created inside an itinerary and listed per itinerary
under ``/activities/itineraries/{itinerary_id}``.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from travel_planner_api.app.core.db import Database, get_db
from travel_planner_api.app.core.security import Principal, get_current_user
from travel_planner_api.app.schemas.activity import ActivityCreate, ActivityRead, ActivityUpdate
from travel_planner_api.app.schemas.common import Envelope
from travel_planner_api.app.services.activity_service import ActivityService


router = APIRouter()


def get_activity_service(db: Database = Depends(get_db)) -> ActivityService:
    return ActivityService(db)


@router.post("", response_model=Envelope[ActivityRead], status_code=status.HTTP_201_CREATED)
async def create_activity(
    payload: ActivityCreate,
    current_user: Principal = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    """Create an activity.  ``startTime`` must not be after ``endTime``."""
    activity = await service.create_activity(payload, current_user)
    return Envelope(message="Activity successfully created", data=activity)


@router.get("/itineraries/{itinerary_id}", response_model=Envelope[List[ActivityRead]])
async def list_activities_for_itinerary(
    itinerary_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    activities = await service.list_for_itinerary(str(itinerary_id), current_user)
    return Envelope(message="Activities successfully retrieved", data=activities)


@router.get("/{activity_id}", response_model=Envelope[ActivityRead])
async def get_activity(
    activity_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    activity = await service.get_activity(str(activity_id), current_user)
    return Envelope(message="Activity successfully retrieved", data=activity)


@router.put("/{activity_id}", response_model=Envelope[ActivityRead])
async def update_activity(
    activity_id: UUID,
    payload: ActivityUpdate,
    current_user: Principal = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    activity = await service.update_activity(str(activity_id), payload, current_user)
    return Envelope(message="Activity successfully updated", data=activity)


@router.delete("/{activity_id}", response_model=Envelope[None])
async def delete_activity(
    activity_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    await service.delete_activity(str(activity_id), current_user)
    return Envelope(message="Activity successfully deleted")
