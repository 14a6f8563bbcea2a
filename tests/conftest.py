"""Shared fixtures: isolated data dirs and one cookie jar per test user."""

import os
import tempfile
import uuid
from contextlib import ExitStack
from dataclasses import dataclass

# Setup environment for testing (must happen before the app is imported)
_data_dir = tempfile.mkdtemp(prefix="cliproom-test-")
os.environ["CLIPROOM_DATA_DIR"] = _data_dir
os.environ["CLIPROOM_UPLOAD_DIR"] = os.path.join(_data_dir, "uploads")
os.environ["CLIPROOM_DB_PATH"] = os.path.join(_data_dir, "test.db")
os.environ["CLIPROOM_BCRYPT_ROUNDS"] = "4"
os.environ["CLIPROOM_JWT_SECRET"] = "test-jwt-secret-0123456789abcdef0123"
os.environ["CLIPROOM_ENCRYPTION_KEY"] = "test-encryption-key"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from cliproom.database import engine, init_db
from cliproom.main import app

PASSWORD = "secret123"


@dataclass
class TestUser:
    __test__ = False

    client: TestClient
    username: str
    user_id: str
    api_key: str

    @property
    def bearer(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}


def unique_name(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    init_db()
    with Session(engine) as session:
        yield session


@pytest.fixture
def signup():
    """Factory: sign up a fresh user on its own client (own session cookie)."""
    with ExitStack() as stack:

        def _signup(prefix: str = "user") -> TestUser:
            c = stack.enter_context(TestClient(app))
            username = unique_name(prefix)
            r = c.post("/api/auth/signup", json={"username": username, "password": PASSWORD})
            assert r.status_code == 200, r.text
            data = r.json()
            return TestUser(
                client=c,
                username=username,
                user_id=data["user"]["id"],
                api_key=data["apiKey"],
            )

        yield _signup


@pytest.fixture
def room_with_members(signup):
    """Owner A with a room that member B has joined, plus outsider C."""
    owner = signup("alice")
    member = signup("bob")
    outsider = signup("carol")

    r = owner.client.post("/api/rooms", json={"name": "Team", "description": "shared"})
    assert r.status_code == 200, r.text
    room = r.json()

    r = member.client.post("/api/rooms/join", json={"code": room["code"]})
    assert r.status_code == 200, r.text

    return owner, member, outsider, room
