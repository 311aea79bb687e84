"""End-to-end tests for the activity endpoints."""

from datetime import datetime

import pytest


def _parse(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def itinerary(alice, make_trip, make_itinerary):
    return make_itinerary(alice, make_trip(alice)["id"])


def test_create_with_detail(client, alice, itinerary, make_activity):
    activity = make_activity(alice, itinerary["id"], detail={"bookingRef": "AB123", "guests": 2})
    assert activity["itineraryId"] == itinerary["id"]
    assert activity["category"] == "SIGHTSEEING"
    assert activity["detail"] == {"bookingRef": "AB123", "guests": 2}
    assert _parse(activity["startTime"]) == _parse("2022-12-02T10:00:00+00:00")


def test_detail_defaults_to_empty(client, alice, itinerary, make_activity):
    activity = make_activity(alice, itinerary["id"])
    assert activity["detail"] == {}


def test_create_rejects_reversed_times(client, alice, itinerary):
    body = {
        "itineraryId": itinerary["id"],
        "title": "Dinner",
        "location": "Old town",
        "startTime": "2022-12-02T21:00:00Z",
        "endTime": "2022-12-02T19:00:00Z",
        "category": "FOOD",
    }
    resp = client.post("/api/activities", json=body, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Start time cannot be later than end time"


def test_create_rejects_unknown_category(client, alice, itinerary):
    body = {
        "itineraryId": itinerary["id"],
        "title": "Spa",
        "location": "Hotel",
        "startTime": "2022-12-02T09:00:00Z",
        "endTime": "2022-12-02T10:00:00Z",
        "category": "WELLNESS",
    }
    resp = client.post("/api/activities", json=body, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "category"


def test_create_in_foreign_itinerary_is_forbidden(client, bob, itinerary):
    body = {
        "itineraryId": itinerary["id"],
        "title": "Intrusion",
        "location": "Nowhere",
        "startTime": "2022-12-02T09:00:00Z",
        "endTime": "2022-12-02T10:00:00Z",
        "category": "OTHER",
    }
    resp = client.post("/api/activities", json=body, headers=bob.headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "User not authorized to create activity for this itinerary"


def test_update_end_before_stored_start_fails(client, alice, itinerary, make_activity):
    activity = make_activity(alice, itinerary["id"])
    resp = client.put(
        f"/api/activities/{activity['id']}", json={"endTime": "2022-12-02T09:00:00Z"}, headers=alice.headers
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Start time and end time must be within the original range"


def test_update_both_times_reversed_fails(client, alice, itinerary, make_activity):
    activity = make_activity(alice, itinerary["id"])
    body = {"startTime": "2022-12-03T12:00:00Z", "endTime": "2022-12-03T08:00:00Z"}
    resp = client.put(f"/api/activities/{activity['id']}", json=body, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Start time cannot be later than end time"


def test_partial_update(client, alice, itinerary, make_activity):
    activity = make_activity(alice, itinerary["id"], description="Guided tour")
    body = {"endTime": "2022-12-02T13:30:00Z", "detail": {"ticket": "e-ticket"}}
    resp = client.put(f"/api/activities/{activity['id']}", json=body, headers=alice.headers)
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert _parse(updated["endTime"]) == _parse("2022-12-02T13:30:00+00:00")
    assert updated["detail"] == {"ticket": "e-ticket"}
    assert updated["title"] == activity["title"]
    assert updated["description"] == "Guided tour"


def test_update_with_other_itinerary_is_forbidden(client, alice, itinerary, make_activity, make_trip, make_itinerary):
    activity = make_activity(alice, itinerary["id"])
    other = make_itinerary(alice, make_trip(alice)["id"])
    resp = client.put(
        f"/api/activities/{activity['id']}",
        json={"itineraryId": other["id"], "title": "Moved"},
        headers=alice.headers,
    )
    assert resp.status_code == 403
    stored = client.get(f"/api/activities/{activity['id']}", headers=alice.headers).json()["data"]
    assert stored["title"] == activity["title"]


def test_list_for_itinerary(client, alice, bob, itinerary, make_activity):
    first = make_activity(alice, itinerary["id"], title="Breakfast", category="FOOD")
    second = make_activity(alice, itinerary["id"], title="Museum")
    resp = client.get(f"/api/activities/itineraries/{itinerary['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Activities successfully retrieved"
    assert [item["id"] for item in resp.json()["data"]] == [first["id"], second["id"]]
    assert client.get(f"/api/activities/itineraries/{itinerary['id']}", headers=bob.headers).status_code == 403


def test_read_and_delete_by_other_user(client, alice, bob, itinerary, make_activity):
    activity = make_activity(alice, itinerary["id"])
    assert client.get(f"/api/activities/{activity['id']}", headers=bob.headers).status_code == 403
    assert client.delete(f"/api/activities/{activity['id']}", headers=bob.headers).status_code == 403
    resp = client.delete(f"/api/activities/{activity['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert client.get(f"/api/activities/{activity['id']}", headers=alice.headers).status_code == 404
