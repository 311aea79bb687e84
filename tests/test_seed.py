"""Tests for the sample data seeding tool."""

import random

from seed import row_counts, seed
from travel_planner_api.app.core.db import Database
from travel_planner_api.app.core.security import HmacCredentialProvider
from travel_planner_api.app.services.ownership import EntityKind, OwnershipResolver


def test_seed_creates_linked_chains(db, settings):
    seed(db, HmacCredentialProvider(settings), 3, "secret123", random.Random(7))
    assert row_counts(db) == {
        "users": 3,
        "trips": 3,
        "itineraries": 3,
        "activities": 3,
        "expenses": 3,
        "reminders": 3,
    }
    with db.read() as conn:
        resolver = OwnershipResolver(conn)
        owners = [resolver.find(EntityKind.EXPENSE, row["id"]).owner_id for row in conn.execute("SELECT id FROM expenses")]
        users = [row["id"] for row in conn.execute("SELECT id FROM users")]
        assert sorted(owners) == sorted(users)
        for row in conn.execute("SELECT trip_id, user_id FROM reminders").fetchall():
            assert resolver.find(EntityKind.TRIP, row["trip_id"]).owner_id == row["user_id"]
        for row in conn.execute("SELECT start_date, end_date FROM trips").fetchall():
            assert row["start_date"] <= row["end_date"]


def test_seeded_user_can_log_in_and_read_data(client, settings):
    db = Database(settings.database_url)
    seed(db, client.app.state.credentials, 2, "secret123")
    with db.read() as conn:
        email = conn.execute("SELECT email FROM users ORDER BY email").fetchone()["email"]

    resp = client.post("/auth/login", json={"email": email, "password": "secret123"})
    assert resp.status_code == 200
    headers = {"Authorization": f"Bearer {resp.json()['data']['token']}"}

    trips = client.get("/api/trips", headers=headers).json()["data"]
    assert len(trips) == 1
    reminders = client.get("/api/reminders", headers=headers).json()["data"]
    assert [reminder["tripId"] for reminder in reminders] == [trips[0]["id"]]
