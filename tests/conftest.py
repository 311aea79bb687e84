"""Shared test fixtures for the Travel Planner API."""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from travel_planner_api.app.core.config import Settings
from travel_planner_api.app.core.db import Database
from travel_planner_api.app.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        database_url=str(tmp_path / "travel_planner.db"),
        secret_key="test-secret",
        password_hash_iterations=1000,
    )


@pytest.fixture
def db(tmp_path):
    """A migrated database for service-level tests."""
    database = Database(str(tmp_path / "unit.db"))
    database.init()
    return database


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user, log in and return its id and auth headers."""

    def _register(email="jane@example.com", password="secret123", name="Jane Traveller"):
        resp = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password, "confirmPassword": password},
        )
        assert resp.status_code == 201, resp.text
        user = resp.json()["data"]
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["token"]
        return SimpleNamespace(
            id=user["id"],
            email=email,
            password=password,
            token=token,
            headers={"Authorization": f"Bearer {token}"},
        )

    return _register


@pytest.fixture
def alice(register):
    return register("alice@example.com", name="Alice")


@pytest.fixture
def bob(register):
    return register("bob@example.com", name="Bob")


@pytest.fixture
def make_trip(client):
    def _make(user, **overrides):
        body = {
            "title": "Trip Test",
            "destination": "Test Destination",
            "startDate": "2022-12-01",
            "endDate": "2022-12-10",
        }
        body.update(overrides)
        resp = client.post("/api/trips", json=body, headers=user.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make


@pytest.fixture
def make_itinerary(client):
    def _make(user, trip_id, date="2022-12-02"):
        resp = client.post("/api/itineraries", json={"tripId": trip_id, "date": date}, headers=user.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make


@pytest.fixture
def make_activity(client):
    def _make(user, itinerary_id, **overrides):
        body = {
            "itineraryId": itinerary_id,
            "title": "Museum visit",
            "location": "Rijksmuseum",
            "startTime": "2022-12-02T10:00:00Z",
            "endTime": "2022-12-02T12:00:00Z",
            "category": "SIGHTSEEING",
        }
        body.update(overrides)
        resp = client.post("/api/activities", json=body, headers=user.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make


@pytest.fixture
def make_expense(client):
    def _make(user, activity_id, **overrides):
        body = {"activityId": activity_id, "title": "Tickets", "amount": 100, "currency": "EUR"}
        body.update(overrides)
        resp = client.post("/api/expenses", json=body, headers=user.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make


@pytest.fixture
def chain(alice, make_trip, make_itinerary, make_activity, make_expense):
    """A full trip -> itinerary -> activity -> expense chain owned by alice."""
    trip = make_trip(alice)
    itinerary = make_itinerary(alice, trip["id"])
    activity = make_activity(alice, itinerary["id"])
    expense = make_expense(alice, activity["id"])
    return SimpleNamespace(trip=trip, itinerary=itinerary, activity=activity, expense=expense)
