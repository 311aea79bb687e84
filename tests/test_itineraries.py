"""End-to-end tests for the itinerary endpoints."""

import uuid


def test_create_and_get(client, alice, make_trip):
    trip = make_trip(alice)
    resp = client.post(
        "/api/itineraries", json={"tripId": trip["id"], "date": "2022-12-03"}, headers=alice.headers
    )
    assert resp.status_code == 201
    assert resp.json()["message"] == "Itinerary successfully created"
    itinerary = resp.json()["data"]
    assert itinerary["tripId"] == trip["id"]
    assert itinerary["date"] == "2022-12-03"

    resp = client.get(f"/api/itineraries/{itinerary['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == itinerary


def test_create_in_foreign_trip_is_forbidden(client, alice, bob, make_trip):
    trip = make_trip(alice)
    resp = client.post(
        "/api/itineraries", json={"tripId": trip["id"], "date": "2022-12-03"}, headers=bob.headers
    )
    assert resp.status_code == 403
    assert resp.json()["message"] == "User not authorized to create an itinerary for this trip"


def test_create_in_missing_trip_is_not_found(client, alice):
    resp = client.post(
        "/api/itineraries", json={"tripId": str(uuid.uuid4()), "date": "2022-12-03"}, headers=alice.headers
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Trip not found"


def test_list_for_trip(client, alice, bob, make_trip, make_itinerary):
    trip = make_trip(alice)
    first = make_itinerary(alice, trip["id"], "2022-12-02")
    second = make_itinerary(alice, trip["id"], "2022-12-03")

    resp = client.get(f"/api/itineraries/trips/{trip['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert [item["id"] for item in resp.json()["data"]] == [first["id"], second["id"]]

    resp = client.get(f"/api/itineraries/trips/{trip['id']}", headers=bob.headers)
    assert resp.status_code == 403

    resp = client.get(f"/api/itineraries/trips/{uuid.uuid4()}", headers=alice.headers)
    assert resp.status_code == 404


def test_list_for_trip_without_itineraries_is_empty(client, alice, make_trip):
    trip = make_trip(alice)
    resp = client.get(f"/api/itineraries/trips/{trip['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == []


def test_update_date(client, alice, make_trip, make_itinerary):
    trip = make_trip(alice)
    itinerary = make_itinerary(alice, trip["id"])
    resp = client.put(
        f"/api/itineraries/{itinerary['id']}",
        json={"tripId": trip["id"], "date": "2022-12-05"},
        headers=alice.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["date"] == "2022-12-05"


def test_update_cannot_move_to_another_trip(client, alice, make_trip, make_itinerary):
    trip = make_trip(alice)
    other_trip = make_trip(alice, title="Other")
    itinerary = make_itinerary(alice, trip["id"])
    resp = client.put(
        f"/api/itineraries/{itinerary['id']}", json={"tripId": other_trip["id"]}, headers=alice.headers
    )
    assert resp.status_code == 403
    stored = client.get(f"/api/itineraries/{itinerary['id']}", headers=alice.headers).json()["data"]
    assert stored["tripId"] == trip["id"]


def test_delete(client, alice, bob, make_trip, make_itinerary):
    trip = make_trip(alice)
    itinerary = make_itinerary(alice, trip["id"])
    assert client.delete(f"/api/itineraries/{itinerary['id']}", headers=bob.headers).status_code == 403
    resp = client.delete(f"/api/itineraries/{itinerary['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Itinerary successfully deleted"
    assert client.get(f"/api/itineraries/{itinerary['id']}", headers=alice.headers).status_code == 404
