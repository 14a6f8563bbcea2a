"""Signup, login, logout, session cookie and API key endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import select

from cliproom.main import app
from cliproom.models.user import User

from conftest import PASSWORD, unique_name


# --- Signup ---

def test_signup_returns_user_and_api_key(client, db):
    username = unique_name()
    r = client.post("/api/auth/signup", json={"username": username, "password": PASSWORD})
    assert r.status_code == 200
    data = r.json()
    assert data["user"]["username"] == username
    assert len(data["apiKey"]) == 64
    assert data["message"] == "User created successfully"

    user = db.exec(select(User).where(User.username == username)).one()
    assert user.id == data["user"]["id"]
    assert user.api_key == data["apiKey"]
    assert user.password_hash != PASSWORD


def test_signup_sets_session_cookie(client):
    r = client.post("/api/auth/signup", json={"username": unique_name(), "password": PASSWORD})
    cookie = r.headers["set-cookie"]
    assert cookie.startswith("session=")
    assert "HttpOnly" in cookie
    assert "Path=/" in cookie
    assert "Max-Age=604800" in cookie
    assert "samesite=lax" in cookie.lower()
    assert "secure" not in cookie.lower()


def test_duplicate_username_is_rejected(client):
    username = unique_name()
    assert client.post("/api/auth/signup", json={"username": username, "password": PASSWORD}).status_code == 200
    r = client.post("/api/auth/signup", json={"username": username, "password": "another1"})
    assert r.status_code == 400
    assert r.json() == {"error": "Username already exists"}


@pytest.mark.parametrize(
    "body, message",
    [
        ({"username": "abc"}, "Username and password are required"),
        ({"password": "secret123"}, "Username and password are required"),
        ({"username": "abcdef", "password": "12345"}, "Password must be at least 6 characters"),
        ({"username": "ab", "password": "secret123"}, "Username must be at least 3 characters"),
        ({"username": "abcdef", "password": "p" * 73}, "Password must be at most 72 bytes"),
    ],
)
def test_signup_validation(client, body, message):
    r = client.post("/api/auth/signup", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": message}


def test_malformed_body_is_400(client):
    r = client.post("/api/auth/signup", content=b"not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert "error" in r.json()


# --- Session ---

def test_session_resolves_identity(signup):
    user = signup()
    r = user.client.get("/api/auth/me")
    assert r.status_code == 200
    assert r.json() == {"user": {"id": user.user_id, "username": user.username}}


def test_anonymous_me_is_401(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json() == {"error": "Not authenticated"}


def test_tampered_cookie_is_anonymous(signup):
    user = signup()
    header, payload, signature = user.client.cookies.get("session").split(".")
    i = len(signature) // 2
    flipped = "A" if signature[i] != "A" else "B"
    tampered = f"{header}.{payload}.{signature[:i]}{flipped}{signature[i + 1:]}"
    with TestClient(app, cookies={"session": tampered}) as forged:
        assert forged.get("/api/auth/me").status_code == 401


def test_logout_clears_cookie(signup):
    user = signup()
    r = user.client.post("/api/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"message": "Logged out successfully"}
    assert "Max-Age=0" in r.headers["set-cookie"]
    assert user.client.get("/api/auth/me").status_code == 401


# --- Login ---

def test_login_with_correct_password(signup):
    user = signup()
    with TestClient(app) as fresh:
        r = fresh.post("/api/auth/login", json={"username": user.username, "password": PASSWORD})
        assert r.status_code == 200
        assert r.json()["user"] == {"id": user.user_id, "username": user.username}
        assert fresh.get("/api/auth/me").status_code == 200


@pytest.mark.parametrize("password", ["wrong-password", "x" * 80])
def test_login_with_wrong_password(signup, password):
    user = signup()
    with TestClient(app) as fresh:
        r = fresh.post("/api/auth/login", json={"username": user.username, "password": password})
        assert r.status_code == 401
        assert r.json() == {"error": "Invalid username or password"}
        assert fresh.get("/api/auth/me").status_code == 401


def test_login_requires_both_fields(client):
    r = client.post("/api/auth/login", json={"username": unique_name()})
    assert r.status_code == 400
    assert r.json() == {"error": "Username and password are required"}


def test_login_unknown_user(client):
    r = client.post("/api/auth/login", json={"username": unique_name(), "password": PASSWORD})
    assert r.status_code == 401


# --- API key ---

def test_get_api_key(signup):
    user = signup()
    r = user.client.get("/api/auth/api-key")
    assert r.status_code == 200
    assert r.json() == {"apiKey": user.api_key}


def test_get_api_key_when_none_issued(signup, db):
    user = signup()
    row = db.get(User, user.user_id)
    row.api_key = None
    db.add(row)
    db.commit()

    r = user.client.get("/api/auth/api-key")
    assert r.status_code == 200
    assert r.json() == {"apiKey": None}


def test_regenerate_api_key_replaces_old_one(signup):
    user = signup()
    r = user.client.post("/api/auth/api-key")
    assert r.status_code == 200
    new_key = r.json()["apiKey"]
    assert new_key != user.api_key
    assert len(new_key) == 64
    assert user.client.get("/api/auth/api-key").json() == {"apiKey": new_key}

    old = user.client.get("/api/external/rooms", headers=user.bearer)
    assert old.status_code == 401
    fresh = user.client.get("/api/external/rooms", headers={"Authorization": f"Bearer {new_key}"})
    assert fresh.status_code == 200


def test_api_key_requires_session(client):
    assert client.get("/api/auth/api-key").status_code == 401
    assert client.post("/api/auth/api-key").status_code == 401
