"""End-to-end tests for the reminder endpoints."""

import uuid

import pytest


@pytest.fixture
def reminder(client, alice, make_trip):
    trip = make_trip(alice)
    resp = client.post(
        "/api/reminders",
        json={"tripId": trip["id"], "message": "Check in online", "time": "2022-11-30T09:00:00Z"},
        headers=alice.headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_create(reminder, alice):
    assert reminder["userId"] == alice.id
    assert reminder["message"] == "Check in online"


def test_create_for_foreign_trip_is_forbidden(client, bob, reminder):
    resp = client.post(
        "/api/reminders",
        json={"tripId": reminder["tripId"], "message": "Sneaky", "time": "2022-11-30T09:00:00Z"},
        headers=bob.headers,
    )
    assert resp.status_code == 403
    assert resp.json()["message"] == "User not authorized to create a reminder for this trip"


def test_create_for_missing_trip(client, alice):
    resp = client.post(
        "/api/reminders",
        json={"tripId": str(uuid.uuid4()), "message": "Nothing", "time": "2022-11-30T09:00:00Z"},
        headers=alice.headers,
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Trip not found"


def test_list_returns_own_reminders(client, alice, bob, reminder):
    resp = client.get("/api/reminders", headers=alice.headers)
    assert resp.status_code == 200
    assert [item["id"] for item in resp.json()["data"]] == [reminder["id"]]
    assert client.get("/api/reminders", headers=bob.headers).json()["data"] == []


def test_update_with_matching_trip(client, alice, reminder):
    resp = client.put(
        f"/api/reminders/{reminder['id']}",
        json={"tripId": reminder["tripId"], "message": "Print boarding pass"},
        headers=alice.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Reminder successfully updated"
    assert resp.json()["data"]["message"] == "Print boarding pass"
    assert resp.json()["data"]["time"] == reminder["time"]


def test_update_with_different_trip_is_forbidden(client, alice, reminder, make_trip):
    other_trip = make_trip(alice, title="Other trip")
    resp = client.put(
        f"/api/reminders/{reminder['id']}",
        json={"tripId": other_trip["id"], "message": "Moved"},
        headers=alice.headers,
    )
    assert resp.status_code == 403
    stored = client.get(f"/api/reminders/{reminder['id']}", headers=alice.headers).json()["data"]
    assert stored == reminder


def test_update_with_foreign_trip_is_forbidden(client, alice, bob, reminder, make_trip):
    bobs_trip = make_trip(bob)
    resp = client.put(
        f"/api/reminders/{reminder['id']}",
        json={"tripId": bobs_trip["id"], "message": "Moved"},
        headers=alice.headers,
    )
    assert resp.status_code == 403
    stored = client.get(f"/api/reminders/{reminder['id']}", headers=alice.headers).json()["data"]
    assert stored["tripId"] == reminder["tripId"]


def test_update_requires_trip_id(client, alice, reminder):
    resp = client.put(f"/api/reminders/{reminder['id']}", json={"message": "No trip"}, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "tripId"


def test_other_user_cannot_touch_reminder(client, bob, reminder):
    url = f"/api/reminders/{reminder['id']}"
    assert client.get(url, headers=bob.headers).status_code == 403
    resp = client.put(url, json={"tripId": reminder["tripId"], "message": "x"}, headers=bob.headers)
    assert resp.status_code == 403
    assert client.delete(url, headers=bob.headers).status_code == 403


def test_delete(client, alice, reminder):
    resp = client.delete(f"/api/reminders/{reminder['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert client.get(f"/api/reminders/{reminder['id']}", headers=alice.headers).status_code == 404
