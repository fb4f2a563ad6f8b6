"""Shared fixtures for the community events test suite."""

from datetime import datetime, timedelta
from typing import Callable, Dict, List

import pytest
from fastapi.testclient import TestClient

from community_events_api.app.core.config import settings
from community_events_api.app.core.db import get_connection, init_db, utcnow_text
from community_events_api.app.main import app
from community_events_api.app.stores.base import EventRecord, EventStore
from community_events_api.app.stores.memory import InMemoryEventStore
from community_events_api.app.stores.sqlite import SQLiteEventStore


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def database(tmp_path, monkeypatch) -> str:
    """Point the application at a fresh SQLite file and migrate it."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "community_events_test.db"))
    init_db()
    return settings.database_url


def insert_users(count: int) -> List[int]:
    """Insert ``count`` bare member rows and return their ids."""
    conn = get_connection()
    try:
        start = conn.execute("SELECT COALESCE(MAX(id), 0) AS top FROM users").fetchone()["top"]
        ids = []
        for n in range(start + 1, start + count + 1):
            cursor = conn.execute(
                "INSERT INTO users (email, first_name, last_name, password, role, created_at) "
                "VALUES (?, 'Test', 'User', 'x$y', 'member', ?)",
                (f"user{n}@example.com", utcnow_text()),
            )
            ids.append(cursor.lastrowid)
        conn.commit()
        return ids
    finally:
        conn.close()


# ---------------------------------------------------------------------------
# Event stores
# ---------------------------------------------------------------------------

@pytest.fixture(params=["memory", "sqlite"])
def store(request) -> EventStore:
    """Each ledger test runs against both store implementations."""
    if request.param == "memory":
        return InMemoryEventStore()
    request.getfixturevalue("database")
    return SQLiteEventStore()


@pytest.fixture
def make_users(store) -> Callable[[int], List[int]]:
    """Return a factory of valid user ids for the current store.

    The SQLite store enforces a foreign key to ``users``, so real rows
    are inserted there.  The in‑memory store accepts any positive id.
    """
    counter = {"next": 1}

    def _make(count: int) -> List[int]:
        if isinstance(store, SQLiteEventStore):
            return insert_users(count)
        ids = list(range(counter["next"], counter["next"] + count))
        counter["next"] += count
        return ids

    return _make


@pytest.fixture
def make_event(store) -> Callable[..., EventRecord]:
    def _make(capacity: int = 30, is_active: bool = True, title: str = "Bowling Night",
              date: datetime = None) -> EventRecord:
        return store.create_event(
            {
                "title": title,
                "description": "A fun evening of bowling",
                "date": date or datetime(2030, 10, 16, 17, 0),
                "time": "5:00 PM",
                "location": "Fountain Park, Edinburgh",
                "capacity": capacity,
                "sponsor": "To be announced",
                "is_active": is_active,
            }
        )

    return _make


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def signup(client: TestClient, email: str, password: str = "password123") -> dict:
    response = client.post(
        "/api/v1/auth/register",
        json={
            "email": email,
            "password": password,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "university": "Heriot-Watt University",
            "student_status": "current",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def admin(client) -> dict:
    """The first account created on a fresh database is the administrator."""
    body = signup(client, "admin@example.com")
    assert body["user"]["role"] == "admin"
    return {"id": body["user"]["id"], "headers": auth_header(body["access_token"])}


@pytest.fixture
def member_factory(client, admin) -> Callable[[str], dict]:
    def _member(email: str) -> dict:
        body = signup(client, email)
        return {"id": body["user"]["id"], "headers": auth_header(body["access_token"])}

    return _member


@pytest.fixture
def create_event(client, admin) -> Callable[..., dict]:
    def _create(**overrides) -> dict:
        payload = {
            "title": "Bowling Night",
            "description": "A fun evening of bowling",
            "date": (datetime(2030, 1, 1) + timedelta(days=overrides.pop("days", 0))).isoformat() + "Z",
            "time": "5:00 PM",
            "location": "Fountain Park, Edinburgh",
            "capacity": 30,
        }
        payload.update(overrides)
        response = client.post("/api/v1/events/", json=payload, headers=admin["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _create
