"""
User endpoints for API v1.

A user can only read, update or delete their own account.  Deleting
the account requires the password in the request body and removes
every trip, itinerary, activity, expense and reminder the user owns.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from travel_planner_api.app.core.security import Principal, get_current_user
from travel_planner_api.app.schemas.common import Envelope
from travel_planner_api.app.schemas.user import UserDelete, UserRead, UserUpdate
from travel_planner_api.app.services.user_service import UserService

from .auth import get_user_service


router = APIRouter()


@router.get("/{user_id}", response_model=Envelope[UserRead])
async def get_user(
    user_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_user(str(user_id), current_user)
    return Envelope(message="User successfully retrieved", data=user)


@router.put("/{user_id}", response_model=Envelope[UserRead])
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    current_user: Principal = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update profile fields.  Omitted fields keep their stored value."""
    user = await service.update_user(str(user_id), payload, current_user)
    return Envelope(message="User successfully updated", data=user)


@router.delete("/{user_id}", response_model=Envelope[None])
async def delete_user(
    user_id: UUID,
    payload: UserDelete,
    current_user: Principal = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Delete the account after re-checking its password."""
    await service.delete_user(str(user_id), payload.password, current_user)
    return Envelope(message="User successfully deleted")
