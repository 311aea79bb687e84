"""
Trip endpoints for API v1.

These routes provide CRUD operations on the authenticated user's
trips.  Ownership and date-range rules are enforced by
``TripService``; handlers only translate between HTTP and the service.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from travel_planner_api.app.core.db import Database, get_db
from travel_planner_api.app.core.security import Principal, get_current_user
from travel_planner_api.app.schemas.common import Envelope
from travel_planner_api.app.schemas.trip import TripCreate, TripRead, TripUpdate
from travel_planner_api.app.services.trip_service import TripService


router = APIRouter()


def get_trip_service(db: Database = Depends(get_db)) -> TripService:
    return TripService(db)


@router.get("", response_model=Envelope[List[TripRead]])
async def list_trips(
    current_user: Principal = Depends(get_current_user),
    service: TripService = Depends(get_trip_service),
):
    """List the trips of the authenticated user, earliest first."""
    trips = await service.list_trips(current_user)
    return Envelope(message="Trips successfully retrieved", data=trips)


@router.post("", response_model=Envelope[TripRead], status_code=status.HTTP_201_CREATED)
async def create_trip(
    payload: TripCreate,
    current_user: Principal = Depends(get_current_user),
    service: TripService = Depends(get_trip_service),
):
    """Create a trip.  ``startDate`` must not be after ``endDate``."""
    trip = await service.create_trip(payload, current_user)
    return Envelope(message="Trip successfully created", data=trip)


@router.get("/{trip_id}", response_model=Envelope[TripRead])
async def get_trip(
    trip_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: TripService = Depends(get_trip_service),
):
    trip = await service.get_trip(str(trip_id), current_user)
    return Envelope(message="Trip successfully retrieved", data=trip)


@router.put("/{trip_id}", response_model=Envelope[TripRead])
async def update_trip(
    trip_id: UUID,
    payload: TripUpdate,
    current_user: Principal = Depends(get_current_user),
    service: TripService = Depends(get_trip_service),
):
    trip = await service.update_trip(str(trip_id), payload, current_user)
    return Envelope(message="Trip successfully updated", data=trip)


@router.delete("/{trip_id}", response_model=Envelope[None])
async def delete_trip(
    trip_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: TripService = Depends(get_trip_service),
):
    await service.delete_trip(str(trip_id), current_user)
    return Envelope(message="Trip successfully deleted")
