"""
Top-level router for version 1 of the API.

This router aggregates the resource routers (users, trips,
itineraries, etc.) under a unified prefix.  The authentication router
is mounted separately by ``main.create_app`` because it lives outside
that prefix.
"""

from fastapi import APIRouter

from .endpoints import (
    activities,
    expenses,
    itineraries,
    reminders,
    trips,
    users,
)

# Create a router for version 1 and include sub-routers for each domain.
router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(trips.router, prefix="/trips", tags=["trips"])
router.include_router(itineraries.router, prefix="/itineraries", tags=["itineraries"])
router.include_router(activities.router, prefix="/activities", tags=["activities"])
router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
