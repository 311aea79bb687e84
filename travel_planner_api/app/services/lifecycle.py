"""
Rules shared by every entity service.

Identifiers and timestamps, time-range validation and the translation
of a partial update into a single ``UPDATE`` statement live here so
that each service only states which table and which fields it deals
with.
"""

import json
import sqlite3
import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, TypeVar
from uuid import UUID

from ..core.errors import ValidationFailedError

R = TypeVar("R", date, datetime)


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_column(value: Any) -> Any:
    """Convert a schema value to what is stored in SQLite."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, dict):
        return json.dumps(value)
    return value


def ensure_ordered(start: R, end: R, field: str, message: str) -> None:
    """Reject a range whose start lies after its end."""
    if start > end:
        raise ValidationFailedError(message, errors=[{"field": field, "message": message}])


def ensure_ordered_update(
    stored_start: R,
    stored_end: R,
    new_start: Optional[R],
    new_end: Optional[R],
    fields: tuple,
    order_message: str,
    range_message: str,
) -> None:
    """Validate a range after merging supplied endpoints into stored ones.

    When only one endpoint is supplied it is compared with the stored
    opposite endpoint and a violation reports ``range_message``.  When
    both are supplied they are compared with each other and a violation
    reports ``order_message``.
    """
    start = new_start if new_start is not None else stored_start
    end = new_end if new_end is not None else stored_end
    if start <= end:
        return
    start_field, end_field = fields
    if new_start is not None and new_end is not None:
        raise ValidationFailedError(order_message, errors=[{"field": start_field, "message": order_message}])
    field = start_field if new_start is not None else end_field
    raise ValidationFailedError(range_message, errors=[{"field": field, "message": range_message}])


def insert_row(conn: sqlite3.Connection, table: str, values: Dict[str, Any]) -> str:
    """Insert a new row with a fresh id and timestamps; return the id."""
    entity_id = new_id()
    timestamp = now_iso()
    row = {"id": entity_id, **{k: to_column(v) for k, v in values.items()}}
    row["created_at"] = timestamp
    row["updated_at"] = timestamp
    columns = ", ".join(row)
    placeholders = ", ".join("?" for _ in row)
    conn.execute(f"INSERT INTO {table} ({columns}) VALUES ({placeholders})", tuple(row.values()))
    return entity_id


def update_row(conn: sqlite3.Connection, table: str, entity_id: str, changes: Dict[str, Any]) -> None:
    """Apply ``changes`` (column -> value) and bump ``updated_at``.

    Column names come from schema field names, never from client keys.
    ``updated_at`` is bumped even when ``changes`` is empty.
    """
    assignments = [f"{column} = ?" for column in changes]
    values = [to_column(value) for value in changes.values()]
    assignments.append("updated_at = ?")
    values.append(now_iso())
    values.append(entity_id)
    conn.execute(f"UPDATE {table} SET {', '.join(assignments)} WHERE id = ?", tuple(values))


def fetch_row(conn: sqlite3.Connection, table: str, entity_id: str) -> Dict[str, Any]:
    row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (entity_id,)).fetchone()
    return dict(row)
