"""
SQLite database integration and simple migration system.

This module provides the ``Database`` gateway used by every service.
A single instance is created per application (see ``main.create_app``)
and handed to endpoints through the ``get_db`` dependency, so no
module keeps a global connection.

``Database.transaction`` opens a ``BEGIN IMMEDIATE`` transaction: the
write lock is taken before the ownership check reads the entity, so
the check and the mutation that follows it are atomic with respect to
other writers.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .errors import PersistenceError, TravelPlannerError

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            phone_number TEXT,
            profile_picture_url TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS trips (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            destination TEXT NOT NULL,
            start_date TEXT NOT NULL,
            end_date TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS itineraries (
            id TEXT PRIMARY KEY,
            trip_id TEXT NOT NULL,
            date TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY(trip_id) REFERENCES trips(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS activities (
            id TEXT PRIMARY KEY,
            itinerary_id TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            location TEXT NOT NULL,
            start_time TEXT NOT NULL,
            end_time TEXT NOT NULL,
            category TEXT NOT NULL,
            detail TEXT NOT NULL DEFAULT '{}',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY(itinerary_id) REFERENCES itineraries(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS expenses (
            id TEXT PRIMARY KEY,
            activity_id TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            amount INTEGER NOT NULL,
            currency TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY(activity_id) REFERENCES activities(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS reminders (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            trip_id TEXT NOT NULL,
            message TEXT NOT NULL,
            time TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(trip_id) REFERENCES trips(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: indices on foreign keys used by the ownership joins
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_trips_user_id ON trips(user_id);
        CREATE INDEX IF NOT EXISTS idx_itineraries_trip_id ON itineraries(trip_id);
        CREATE INDEX IF NOT EXISTS idx_activities_itinerary_id ON activities(itinerary_id);
        CREATE INDEX IF NOT EXISTS idx_expenses_activity_id ON expenses(activity_id);
        CREATE INDEX IF NOT EXISTS idx_reminders_user_id ON reminders(user_id);
        CREATE INDEX IF NOT EXISTS idx_reminders_trip_id ON reminders(trip_id);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged.  Relative
    paths are resolved relative to the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Persistence gateway over a SQLite file.

    Every call to ``connect`` opens a fresh connection; SQLite
    serialises writers itself, so connections are never shared between
    requests.
    """

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def connect(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  Autocommit mode (``isolation_level=None``) is used so
        that ``transaction`` controls ``BEGIN``/``COMMIT`` explicitly.
        """
        try:
            conn = sqlite3.connect(self.path, isolation_level=None, timeout=10)
        except sqlite3.Error as e:
            raise PersistenceError(f"Unable to open database: {e}") from e
        conn.row_factory = sqlite3.Row
        # Foreign keys (and therefore cascading deletes) are off by
        # default in SQLite and must be enabled per connection.
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def read(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for read-only work and close it on exit."""
        conn = self.connect()
        try:
            yield conn
        except sqlite3.Error as e:
            raise PersistenceError(f"Database read failed: {e}") from e
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside a write transaction.

        Commits when the block exits normally and rolls back on any
        exception, including the service's own ``NotFoundError`` or
        ``ForbiddenError``.  ``sqlite3.Error`` is re-raised as
        ``PersistenceError``; ``sqlite3.IntegrityError`` is left as is
        so services can translate unique violations into conflicts.
        """
        conn = self.connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            conn.commit()
        except (TravelPlannerError, sqlite3.IntegrityError):
            raise
        except sqlite3.Error as e:
            raise PersistenceError(f"Database transaction failed: {e}") from e
        finally:
            conn.close()

    def init(self) -> None:
        """Initialise the database and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version, and applies any new migrations defined in
        ``MIGRATIONS``.  If you add a migration, append it with an
        incremented version number.
        """
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        conn = self.connect()
        try:
            conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0
            for version, sql in MIGRATIONS:
                if version > current_version:
                    logger.info("Applying database migration %s", version)
                    conn.executescript(sql)
                    conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
        finally:
            conn.close()


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.db
