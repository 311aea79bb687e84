"""
Business logic for trips.

A trip is owned directly by a user and spans ``startDate`` to
``endDate`` (inclusive, calendar dates).  The start may never be after
the end, neither on creation nor after a partial update has been
merged into the stored trip.
"""

import logging
from datetime import date
from typing import List

from ..core.db import Database
from ..core.security import Principal
from ..schemas.trip import TripCreate, TripRead, TripUpdate
from .lifecycle import ensure_ordered, ensure_ordered_update, fetch_row, insert_row, update_row
from .ownership import EntityKind, OwnershipResolver

logger = logging.getLogger(__name__)

ORDER_MESSAGE = "Start date must be before end date"
RANGE_MESSAGE = "Start date and end date must be within the original range"


class TripService:
    """CRUD operations on the principal's trips."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_trips(self, principal: Principal) -> List[TripRead]:
        with self.db.read() as conn:
            rows = conn.execute(
                "SELECT * FROM trips WHERE user_id = ? ORDER BY start_date, created_at",
                (principal.id,),
            ).fetchall()
        return [TripRead.model_validate(dict(row)) for row in rows]

    async def get_trip(self, trip_id: str, principal: Principal) -> TripRead:
        with self.db.read() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.TRIP, trip_id, principal.id)
        return TripRead.model_validate(resolved.record)

    async def create_trip(self, data: TripCreate, principal: Principal) -> TripRead:
        """Create a trip owned by ``principal``."""
        ensure_ordered(data.start_date, data.end_date, "startDate", ORDER_MESSAGE)
        with self.db.transaction() as conn:
            trip_id = insert_row(conn, "trips", {"user_id": principal.id, **data.model_dump()})
            row = fetch_row(conn, "trips", trip_id)
        logger.info("User %s created trip %s", principal.id, trip_id)
        return TripRead.model_validate(row)

    async def update_trip(self, trip_id: str, updates: TripUpdate, principal: Principal) -> TripRead:
        """Merge the supplied fields into the stored trip.

        The date range is validated against the stored dates: a new
        ``startDate`` alone may not pass the stored ``endDate`` and a
        new ``endDate`` alone may not precede the stored ``startDate``.
        """
        changes = updates.changes()
        with self.db.transaction() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.TRIP, trip_id, principal.id, "update")
            ensure_ordered_update(
                date.fromisoformat(resolved.record["start_date"]),
                date.fromisoformat(resolved.record["end_date"]),
                changes.get("start_date"),
                changes.get("end_date"),
                ("startDate", "endDate"),
                ORDER_MESSAGE,
                RANGE_MESSAGE,
            )
            update_row(conn, "trips", trip_id, changes)
            row = fetch_row(conn, "trips", trip_id)
        logger.info("User %s updated trip %s fields %s", principal.id, trip_id, sorted(changes))
        return TripRead.model_validate(row)

    async def delete_trip(self, trip_id: str, principal: Principal) -> None:
        """Delete a trip; its itineraries, activities, expenses and reminders cascade."""
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(EntityKind.TRIP, trip_id, principal.id, "delete")
            conn.execute("DELETE FROM trips WHERE id = ?", (trip_id,))
        logger.info("User %s deleted trip %s", principal.id, trip_id)
