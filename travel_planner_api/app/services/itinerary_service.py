"""Business logic for itineraries (one day of a trip)."""

import logging
from typing import List

from ..core.db import Database
from ..core.security import Principal
from ..schemas.itinerary import ItineraryCreate, ItineraryRead, ItineraryUpdate
from .lifecycle import fetch_row, insert_row, update_row
from .ownership import EntityKind, OwnershipResolver

logger = logging.getLogger(__name__)


class ItineraryService:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_trip(self, trip_id: str, principal: Principal) -> List[ItineraryRead]:
        with self.db.read() as conn:
            children = OwnershipResolver(conn).resolve_children(
                EntityKind.TRIP, trip_id, EntityKind.ITINERARY, principal.id
            )
        return [ItineraryRead.model_validate(child.record) for child in children]

    async def get_itinerary(self, itinerary_id: str, principal: Principal) -> ItineraryRead:
        with self.db.read() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.ITINERARY, itinerary_id, principal.id)
        return ItineraryRead.model_validate(resolved.record)

    async def create_itinerary(self, data: ItineraryCreate, principal: Principal) -> ItineraryRead:
        trip_id = str(data.trip_id)
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(EntityKind.TRIP, trip_id, principal.id, "create an itinerary for")
            itinerary_id = insert_row(conn, "itineraries", {"trip_id": trip_id, "date": data.date})
            row = fetch_row(conn, "itineraries", itinerary_id)
        logger.info("User %s created itinerary %s in trip %s", principal.id, itinerary_id, trip_id)
        return ItineraryRead.model_validate(row)

    async def update_itinerary(
        self, itinerary_id: str, updates: ItineraryUpdate, principal: Principal
    ) -> ItineraryRead:
        changes = updates.changes()
        with self.db.transaction() as conn:
            resolver = OwnershipResolver(conn)
            resolved = resolver.resolve(EntityKind.ITINERARY, itinerary_id, principal.id, "update")
            resolver.check_parent_reference(resolved, updates.trip_id)
            update_row(conn, "itineraries", itinerary_id, changes)
            row = fetch_row(conn, "itineraries", itinerary_id)
        logger.info("User %s updated itinerary %s", principal.id, itinerary_id)
        return ItineraryRead.model_validate(row)

    async def delete_itinerary(self, itinerary_id: str, principal: Principal) -> None:
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(EntityKind.ITINERARY, itinerary_id, principal.id, "delete")
            conn.execute("DELETE FROM itineraries WHERE id = ?", (itinerary_id,))
        logger.info("User %s deleted itinerary %s", principal.id, itinerary_id)
