"""Itinerary endpoints for API v1."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from travel_planner_api.app.core.db import Database, get_db
from travel_planner_api.app.core.security import Principal, get_current_user
from travel_planner_api.app.schemas.common import Envelope
from travel_planner_api.app.schemas.itinerary import ItineraryCreate, ItineraryRead, ItineraryUpdate
from travel_planner_api.app.services.itinerary_service import ItineraryService


router = APIRouter()


def get_itinerary_service(db: Database = Depends(get_db)) -> ItineraryService:
    return ItineraryService(db)


@router.post("", response_model=Envelope[ItineraryRead], status_code=status.HTTP_201_CREATED)
async def create_itinerary(
    payload: ItineraryCreate,
    current_user: Principal = Depends(get_current_user),
    service: ItineraryService = Depends(get_itinerary_service),
):
    itinerary = await service.create_itinerary(payload, current_user)
    return Envelope(message="Itinerary successfully created", data=itinerary)


@router.get("/trips/{trip_id}", response_model=Envelope[List[ItineraryRead]])
async def list_itineraries_for_trip(
    trip_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ItineraryService = Depends(get_itinerary_service),
):
    """List the itineraries of one of the user's trips."""
    itineraries = await service.list_for_trip(str(trip_id), current_user)
    return Envelope(message="Itineraries successfully retrieved", data=itineraries)


@router.get("/{itinerary_id}", response_model=Envelope[ItineraryRead])
async def get_itinerary(
    itinerary_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ItineraryService = Depends(get_itinerary_service),
):
    itinerary = await service.get_itinerary(str(itinerary_id), current_user)
    return Envelope(message="Itinerary successfully retrieved", data=itinerary)


@router.put("/{itinerary_id}", response_model=Envelope[ItineraryRead])
async def update_itinerary(
    itinerary_id: UUID,
    payload: ItineraryUpdate,
    current_user: Principal = Depends(get_current_user),
    service: ItineraryService = Depends(get_itinerary_service),
):
    itinerary = await service.update_itinerary(str(itinerary_id), payload, current_user)
    return Envelope(message="Itinerary successfully updated", data=itinerary)


@router.delete("/{itinerary_id}", response_model=Envelope[None])
async def delete_itinerary(
    itinerary_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ItineraryService = Depends(get_itinerary_service),
):
    await service.delete_itinerary(str(itinerary_id), current_user)
    return Envelope(message="Itinerary successfully deleted")
