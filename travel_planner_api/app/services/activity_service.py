"""
Business logic for activities.

Activities are scheduled inside an itinerary between ``startTime`` and
``endTime``.  The ``detail`` map is stored as a JSON document and
decoded on the way out.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List

from ..core.db import Database
from ..core.security import Principal
from ..schemas.activity import ActivityCreate, ActivityRead, ActivityUpdate
from .lifecycle import ensure_ordered, ensure_ordered_update, fetch_row, insert_row, update_row
from .ownership import EntityKind, OwnershipResolver

logger = logging.getLogger(__name__)

ORDER_MESSAGE = "Start time cannot be later than end time"
RANGE_MESSAGE = "Start time and end time must be within the original range"


def _to_read(record: Dict[str, Any]) -> ActivityRead:
    data = dict(record)
    data["detail"] = json.loads(data.get("detail") or "{}")
    return ActivityRead.model_validate(data)


class ActivityService:
    """CRUD operations on activities, authorized through their itinerary's trip."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_itinerary(self, itinerary_id: str, principal: Principal) -> List[ActivityRead]:
        with self.db.read() as conn:
            children = OwnershipResolver(conn).resolve_children(
                EntityKind.ITINERARY, itinerary_id, EntityKind.ACTIVITY, principal.id
            )
        return [_to_read(child.record) for child in children]

    async def get_activity(self, activity_id: str, principal: Principal) -> ActivityRead:
        with self.db.read() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.ACTIVITY, activity_id, principal.id)
        return _to_read(resolved.record)

    async def create_activity(self, data: ActivityCreate, principal: Principal) -> ActivityRead:
        ensure_ordered(data.start_time, data.end_time, "startTime", ORDER_MESSAGE)
        values = data.model_dump()
        values["itinerary_id"] = str(data.itinerary_id)
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(
                EntityKind.ITINERARY, values["itinerary_id"], principal.id, "create activity for"
            )
            activity_id = insert_row(conn, "activities", values)
            row = fetch_row(conn, "activities", activity_id)
        logger.info("User %s created activity %s", principal.id, activity_id)
        return _to_read(row)

    async def update_activity(
        self, activity_id: str, updates: ActivityUpdate, principal: Principal
    ) -> ActivityRead:
        """Merge the supplied fields into the stored activity.

        A supplied ``itineraryId`` must equal the stored one.  Time
        endpoints follow the same merge rule as trip dates.
        """
        changes = updates.changes()
        with self.db.transaction() as conn:
            resolver = OwnershipResolver(conn)
            resolved = resolver.resolve(EntityKind.ACTIVITY, activity_id, principal.id, "update")
            resolver.check_parent_reference(resolved, updates.itinerary_id)
            ensure_ordered_update(
                datetime.fromisoformat(resolved.record["start_time"]),
                datetime.fromisoformat(resolved.record["end_time"]),
                changes.get("start_time"),
                changes.get("end_time"),
                ("startTime", "endTime"),
                ORDER_MESSAGE,
                RANGE_MESSAGE,
            )
            update_row(conn, "activities", activity_id, changes)
            row = fetch_row(conn, "activities", activity_id)
        logger.info("User %s updated activity %s fields %s", principal.id, activity_id, sorted(changes))
        return _to_read(row)

    async def delete_activity(self, activity_id: str, principal: Principal) -> None:
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(EntityKind.ACTIVITY, activity_id, principal.id, "delete")
            conn.execute("DELETE FROM activities WHERE id = ?", (activity_id,))
        logger.info("User %s deleted activity %s", principal.id, activity_id)
