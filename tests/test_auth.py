"""Tests for registration, login and bearer-token handling."""

import uuid

from travel_planner_api.app.core.security import Principal


def _register_body(**overrides):
    body = {
        "name": "Jane Traveller",
        "email": "jane@example.com",
        "password": "secret123",
        "confirmPassword": "secret123",
        "phoneNumber": "1234567890",
        "profilePictureURL": "https://example.com/jane.png",
    }
    body.update(overrides)
    return body


def test_register_returns_user_without_password(client):
    resp = client.post("/auth/register", json=_register_body())
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully"
    user = body["data"]
    assert user["email"] == "jane@example.com"
    assert user["phoneNumber"] == "1234567890"
    assert user["profilePictureURL"] == "https://example.com/jane.png"
    assert "password" not in user and "passwordHash" not in user
    uuid.UUID(user["id"])


def test_register_rejects_password_mismatch(client):
    resp = client.post("/auth/register", json=_register_body(confirmPassword="other"))
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Passwords do not match"
    assert body["errors"][0]["field"] == "confirmPassword"


def test_register_rejects_duplicate_email(client):
    assert client.post("/auth/register", json=_register_body()).status_code == 201
    resp = client.post("/auth/register", json=_register_body(name="Someone Else"))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email already exists"


def test_register_reports_missing_fields(client):
    resp = client.post("/auth/register", json={"email": "jane@example.com"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid input"
    fields = {error["field"] for error in body["errors"]}
    assert {"name", "password", "confirmPassword"} <= fields


def test_login_returns_token(client, register):
    user = register()
    resp = client.post("/auth/login", json={"email": user.email, "password": user.password})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Login successful"
    assert resp.json()["data"]["token"].count(".") == 2


def test_login_unknown_email(client):
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found"


def test_login_wrong_password(client, register):
    user = register()
    resp = client.post("/auth/login", json={"email": user.email, "password": "wrong"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid password"


def test_missing_token(client):
    resp = client.get("/api/trips")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "There is no authorization present."}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_invalid_token(client):
    resp = client.get("/api/trips", headers={"Authorization": "Bearer not.a.token"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token is invalid."


def test_expired_token(client, alice):
    credentials = client.app.state.credentials
    token = credentials.issue_token(Principal(id=alice.id, email=alice.email), expires_delta=-5)
    resp = client.get("/api/trips", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token has expired."
