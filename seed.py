#!/usr/bin/env python3
"""
Fill the Travel Planner SQLite database with linked sample data.

For each chain the script creates one user with a trip, an itinerary
day, an activity, an expense and a reminder, all owned by that user.
Every seeded user gets the same password so the data can be explored
through the API right away.

Usage:
    python seed.py --count 10 --password "secret123"

Use --seed to get the same data on every run.
"""

import argparse
import logging
import random
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, List, Optional

from travel_planner_api.app.core.config import settings
from travel_planner_api.app.core.db import Database
from travel_planner_api.app.core.logging_config import setup_logging
from travel_planner_api.app.core.security import CredentialProvider, HmacCredentialProvider
from travel_planner_api.app.schemas.activity import ActivityCategory
from travel_planner_api.app.services.lifecycle import insert_row

logger = logging.getLogger(__name__)

FIRST_NAMES = ["Ana", "Budi", "Chen", "Dewi", "Eko", "Fatima", "Gita", "Hugo", "Ines", "Joko"]
LAST_NAMES = ["Santoso", "Wijaya", "Lim", "Pratama", "Silva", "Nguyen", "Haddad", "Kusuma"]
CITIES = ["Lisbon", "Kyoto", "Bandung", "Porto", "Yogyakarta", "Hanoi", "Seville", "Bali"]
SIGHTS = ["Old town walk", "Night market", "Museum visit", "Harbour cruise", "Cooking class", "Temple tour"]
CURRENCIES = ["EUR", "IDR", "JPY", "USD", "VND"]


def _seed_chain(conn, rng: random.Random, password_hash: str, index: int) -> None:
    name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
    user_id = insert_row(
        conn,
        "users",
        {
            "name": name,
            "email": f"traveller{index}-{uuid.uuid4().hex[:8]}@example.com",
            "password_hash": password_hash,
            "phone_number": "".join(rng.choice("0123456789") for _ in range(10)),
            "profile_picture_url": f"https://example.com/avatars/{index}.png",
        },
    )

    city = rng.choice(CITIES)
    start = date.today() + timedelta(days=rng.randint(1, 60))
    end = start + timedelta(days=rng.randint(1, 14))
    trip_id = insert_row(
        conn,
        "trips",
        {
            "user_id": user_id,
            "title": f"{city} getaway",
            "description": f"{(end - start).days} days in {city}",
            "destination": city,
            "start_date": start,
            "end_date": end,
        },
    )

    day = start + timedelta(days=rng.randint(0, (end - start).days))
    itinerary_id = insert_row(conn, "itineraries", {"trip_id": trip_id, "date": day})

    begins = datetime.combine(day, time(hour=rng.randint(8, 18)), tzinfo=timezone.utc)
    activity_id = insert_row(
        conn,
        "activities",
        {
            "itinerary_id": itinerary_id,
            "title": rng.choice(SIGHTS),
            "description": None,
            "location": city,
            "start_time": begins,
            "end_time": begins + timedelta(hours=rng.randint(1, 4)),
            "category": rng.choice(list(ActivityCategory)),
            "detail": {"note": f"Booked for {name}"},
        },
    )

    insert_row(
        conn,
        "expenses",
        {
            "activity_id": activity_id,
            "title": "Tickets",
            "description": None,
            "amount": rng.randint(10_000, 5_000_000),
            "currency": rng.choice(CURRENCIES),
        },
    )

    insert_row(
        conn,
        "reminders",
        {
            "user_id": user_id,
            "trip_id": trip_id,
            "message": f"Pack for {city}",
            "time": datetime.combine(start - timedelta(days=1), time(hour=9), tzinfo=timezone.utc),
        },
    )


def seed(
    db: Database,
    credentials: CredentialProvider,
    count: int,
    password: str,
    rng: Optional[random.Random] = None,
) -> None:
    """Create ``count`` linked user -> trip -> ... -> expense chains in one transaction."""
    rng = rng or random.Random()
    password_hash = credentials.hash_password(password)
    with db.transaction() as conn:
        for index in range(count):
            _seed_chain(conn, rng, password_hash, index)
    logger.info("Seeded %s chains into %s", count, db.path)


def row_counts(db: Database) -> Dict[str, int]:
    tables: List[str] = ["users", "trips", "itineraries", "activities", "expenses", "reminders"]
    with db.read() as conn:
        return {table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0] for table in tables}


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the Travel Planner database with sample data.")
    ap.add_argument("--db", default=settings.database_url, help="SQLite database (default DATABASE_URL)")
    ap.add_argument("--count", type=int, default=10, help="Number of users to create (default 10)")
    ap.add_argument("--password", default="secret123", help="Password of every seeded user")
    ap.add_argument("--seed", type=int, help="Random seed for reproducible data")
    args = ap.parse_args()

    setup_logging(settings.log_level)
    db = Database(args.db)
    db.init()
    seed(db, HmacCredentialProvider(settings), args.count, args.password, random.Random(args.seed))
    print(f"[+] Seed completed: {row_counts(db)}")


if __name__ == "__main__":
    main()
