"""
Business logic for reminders.

A reminder is owned by the user who created it and points at one of
that user's trips.  Both references are checked: the trip is resolved
for the acting user on creation, and on update the ``tripId`` the
client sends must equal the stored one.
"""

import logging
from typing import List

from ..core.db import Database
from ..core.security import Principal
from ..schemas.reminder import ReminderCreate, ReminderRead, ReminderUpdate
from .lifecycle import fetch_row, insert_row, update_row
from .ownership import EntityKind, OwnershipResolver

logger = logging.getLogger(__name__)


class ReminderService:
    """CRUD operations on the principal's reminders."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_reminders(self, principal: Principal) -> List[ReminderRead]:
        with self.db.read() as conn:
            rows = conn.execute(
                "SELECT * FROM reminders WHERE user_id = ? ORDER BY time, created_at",
                (principal.id,),
            ).fetchall()
        return [ReminderRead.model_validate(dict(row)) for row in rows]

    async def get_reminder(self, reminder_id: str, principal: Principal) -> ReminderRead:
        with self.db.read() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.REMINDER, reminder_id, principal.id)
        return ReminderRead.model_validate(resolved.record)

    async def create_reminder(self, data: ReminderCreate, principal: Principal) -> ReminderRead:
        """Create a reminder on one of the principal's trips.

        Raises ``NotFoundError`` ("Trip not found") when the trip does
        not exist and ``ForbiddenError`` when it belongs to someone else.
        """
        trip_id = str(data.trip_id)
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(EntityKind.TRIP, trip_id, principal.id, "create a reminder for")
            reminder_id = insert_row(
                conn,
                "reminders",
                {"user_id": principal.id, "trip_id": trip_id, "message": data.message, "time": data.time},
            )
            row = fetch_row(conn, "reminders", reminder_id)
        logger.info("User %s created reminder %s for trip %s", principal.id, reminder_id, trip_id)
        return ReminderRead.model_validate(row)

    async def update_reminder(
        self, reminder_id: str, updates: ReminderUpdate, principal: Principal
    ) -> ReminderRead:
        changes = updates.changes()
        with self.db.transaction() as conn:
            resolver = OwnershipResolver(conn)
            resolved = resolver.resolve(EntityKind.REMINDER, reminder_id, principal.id, "update")
            resolver.check_parent_reference(resolved, updates.trip_id)
            update_row(conn, "reminders", reminder_id, changes)
            row = fetch_row(conn, "reminders", reminder_id)
        logger.info("User %s updated reminder %s", principal.id, reminder_id)
        return ReminderRead.model_validate(row)

    async def delete_reminder(self, reminder_id: str, principal: Principal) -> None:
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(EntityKind.REMINDER, reminder_id, principal.id, "delete")
            conn.execute("DELETE FROM reminders WHERE id = ?", (reminder_id,))
        logger.info("User %s deleted reminder %s", principal.id, reminder_id)
