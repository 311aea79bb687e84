"""
Reminder endpoints for API v1.

Updating a reminder requires its ``tripId`` in the body.  A ``tripId``
other than the stored one is refused with 403 and the reminder is left
unchanged.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from travel_planner_api.app.core.db import Database, get_db
from travel_planner_api.app.core.security import Principal, get_current_user
from travel_planner_api.app.schemas.common import Envelope
from travel_planner_api.app.schemas.reminder import ReminderCreate, ReminderRead, ReminderUpdate
from travel_planner_api.app.services.reminder_service import ReminderService


router = APIRouter()


def get_reminder_service(db: Database = Depends(get_db)) -> ReminderService:
    return ReminderService(db)


@router.get("", response_model=Envelope[List[ReminderRead]])
async def list_reminders(
    current_user: Principal = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
):
    reminders = await service.list_reminders(current_user)
    return Envelope(message="Reminders successfully retrieved", data=reminders)


@router.post("", response_model=Envelope[ReminderRead], status_code=status.HTTP_201_CREATED)
async def create_reminder(
    payload: ReminderCreate,
    current_user: Principal = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
):
    reminder = await service.create_reminder(payload, current_user)
    return Envelope(message="Reminder successfully created", data=reminder)


@router.get("/{reminder_id}", response_model=Envelope[ReminderRead])
async def get_reminder(
    reminder_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
):
    reminder = await service.get_reminder(str(reminder_id), current_user)
    return Envelope(message="Reminder successfully retrieved", data=reminder)


@router.put("/{reminder_id}", response_model=Envelope[ReminderRead])
async def update_reminder(
    reminder_id: UUID,
    payload: ReminderUpdate,
    current_user: Principal = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
):
    reminder = await service.update_reminder(str(reminder_id), payload, current_user)
    return Envelope(message="Reminder successfully updated", data=reminder)


@router.delete("/{reminder_id}", response_model=Envelope[None])
async def delete_reminder(
    reminder_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
):
    await service.delete_reminder(str(reminder_id), current_user)
    return Envelope(message="Reminder successfully deleted")
