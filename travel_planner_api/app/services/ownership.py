"""
Ownership resolution.

Every resource belongs to exactly one user, reached by walking parent
references::

    User <- Trip <- Itinerary <- Activity <- Expense
    User <- Reminder (which also references a Trip)

``OwnershipResolver`` fetches an entity together with its whole chain
in a single joined query and decides whether the requesting principal
may act on it.  The entity is looked up before ownership is compared,
so an absent id always yields ``NotFoundError`` and never reveals
anything about who owns what.

The resolver is built on an open connection.  Services create it
inside ``Database.transaction`` so the check and the write that follows
it see the same state.
"""

import logging
import sqlite3
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..core.errors import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    USER = "user"
    TRIP = "trip"
    ITINERARY = "itinerary"
    ACTIVITY = "activity"
    EXPENSE = "expense"
    REMINDER = "reminder"


@dataclass(frozen=True)
class _ChainQuery:
    label: str
    plural: str
    select: str
    # Column of the entity's own table holding its parent id.
    parent_column: Optional[str]
    # Extra ancestor ids selected by the joins, besides ``owner_id``.
    ancestors: Tuple[str, ...] = ()


_CHAINS: Dict[EntityKind, _ChainQuery] = {
    EntityKind.USER: _ChainQuery(
        label="User",
        plural="users",
        select="SELECT e.*, e.id AS owner_id FROM users e",
        parent_column=None,
    ),
    EntityKind.TRIP: _ChainQuery(
        label="Trip",
        plural="trips",
        select="SELECT e.*, e.user_id AS owner_id FROM trips e",
        parent_column="user_id",
    ),
    EntityKind.ITINERARY: _ChainQuery(
        label="Itinerary",
        plural="itineraries",
        select=(
            "SELECT e.*, t.user_id AS owner_id FROM itineraries e "
            "JOIN trips t ON t.id = e.trip_id"
        ),
        parent_column="trip_id",
    ),
    EntityKind.ACTIVITY: _ChainQuery(
        label="Activity",
        plural="activities",
        select=(
            "SELECT e.*, i.trip_id AS chain_trip_id, t.user_id AS owner_id FROM activities e "
            "JOIN itineraries i ON i.id = e.itinerary_id "
            "JOIN trips t ON t.id = i.trip_id"
        ),
        parent_column="itinerary_id",
        ancestors=("chain_trip_id",),
    ),
    EntityKind.EXPENSE: _ChainQuery(
        label="Expense",
        plural="expenses",
        select=(
            "SELECT e.*, a.itinerary_id AS chain_itinerary_id, i.trip_id AS chain_trip_id, "
            "t.user_id AS owner_id FROM expenses e "
            "JOIN activities a ON a.id = e.activity_id "
            "JOIN itineraries i ON i.id = a.itinerary_id "
            "JOIN trips t ON t.id = i.trip_id"
        ),
        parent_column="activity_id",
        ancestors=("chain_itinerary_id", "chain_trip_id"),
    ),
    EntityKind.REMINDER: _ChainQuery(
        label="Reminder",
        plural="reminders",
        select="SELECT e.*, e.user_id AS owner_id FROM reminders e",
        parent_column="trip_id",
    ),
}


@dataclass
class ResolvedEntity:
    """An entity fetched together with the ids of its ownership chain.

    ``record`` holds the entity's own columns.  ``chain`` maps ancestor
    columns (``user_id``, ``trip_id``, ``itinerary_id``, ...) to ids,
    including the entity's own parent reference.
    """

    kind: EntityKind
    record: Dict[str, Any]
    owner_id: str
    chain: Dict[str, str] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.record["id"]

    @property
    def parent_id(self) -> Optional[str]:
        column = _CHAINS[self.kind].parent_column
        return self.record.get(column) if column else None


def _to_resolved(kind: EntityKind, row: sqlite3.Row) -> ResolvedEntity:
    query = _CHAINS[kind]
    extra = set(query.ancestors) | {"owner_id"}
    record = {key: row[key] for key in row.keys() if key not in extra}
    chain = {name[len("chain_"):]: row[name] for name in query.ancestors}
    for column in ("user_id", "trip_id", "itinerary_id", "activity_id"):
        if column in record:
            chain[column] = record[column]
    chain["user_id"] = row["owner_id"]
    return ResolvedEntity(kind=kind, record=record, owner_id=row["owner_id"], chain=chain)


class OwnershipResolver:
    """Decide whether a principal may act on an entity.

    Parameters
    ----------
    conn : sqlite3.Connection
        Open connection; the resolver never commits or closes it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find(self, kind: EntityKind, entity_id: str) -> Optional[ResolvedEntity]:
        """Fetch an entity and its chain without any ownership check."""
        query = _CHAINS[kind]
        row = self.conn.execute(f"{query.select} WHERE e.id = ?", (str(entity_id),)).fetchone()
        return _to_resolved(kind, row) if row else None

    def resolve(
        self,
        kind: EntityKind,
        entity_id: str,
        principal_id: str,
        action: str = "view",
    ) -> ResolvedEntity:
        """Return the entity if ``principal_id`` owns it.

        ``action`` only shapes the refusal message, e.g. ``"update"``
        gives "User not authorized to update this trip" and
        ``"create an itinerary for"`` gives "User not authorized to
        create an itinerary for this trip".

        Raises
        ------
        NotFoundError
            No entity of that kind has this id.
        ForbiddenError
            The entity exists but belongs to another user.
        """
        query = _CHAINS[kind]
        resolved = self.find(kind, entity_id)
        if resolved is None:
            raise NotFoundError(f"{query.label} not found")
        if resolved.owner_id != principal_id:
            logger.warning(
                "User %s refused to %s %s %s owned by %s",
                principal_id, action, kind.value, entity_id, resolved.owner_id,
            )
            raise ForbiddenError(f"User not authorized to {action} this {query.label.lower()}")
        return resolved

    def check_parent_reference(
        self,
        resolved: ResolvedEntity,
        supplied_parent_id: Optional[str],
        action: str = "update",
    ) -> None:
        """Compare a caller-supplied parent id with the stored one.

        ``None`` means the caller did not send a parent id and nothing
        is checked.  A different id is refused with ``ForbiddenError``;
        it is never used to re-parent the entity.
        """
        if supplied_parent_id is None:
            return
        if str(supplied_parent_id) != resolved.parent_id:
            label = _CHAINS[resolved.kind].label.lower()
            logger.warning(
                "Parent mismatch on %s %s: supplied %s, stored %s",
                resolved.kind.value, resolved.id, supplied_parent_id, resolved.parent_id,
            )
            raise ForbiddenError(f"User not authorized to {action} this {label}")

    def resolve_children(
        self,
        parent_kind: EntityKind,
        parent_id: str,
        child_kind: EntityKind,
        principal_id: str,
    ) -> List[ResolvedEntity]:
        """List the children of a parent the principal owns.

        The parent is resolved first, so an unknown parent is a
        ``NotFoundError`` and a foreign one a ``ForbiddenError``.  Every
        child is resolved up to its root as well; a child owned by
        someone else fails the whole listing.
        """
        self.resolve(parent_kind, parent_id, principal_id)
        query = _CHAINS[child_kind]
        rows = self.conn.execute(
            f"{query.select} WHERE e.{query.parent_column} = ? ORDER BY e.created_at, e.id",
            (str(parent_id),),
        ).fetchall()
        children = [_to_resolved(child_kind, row) for row in rows]
        if any(child.owner_id != principal_id for child in children):
            raise ForbiddenError(f"User not authorized to view these {query.plural}")
        return children
