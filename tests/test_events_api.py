"""HTTP tests for the event catalog and registration routes."""

from datetime import datetime, timezone

from community_events_api.app.api.deps import get_event_store
from community_events_api.app.main import app
from community_events_api.app.stores.memory import InMemoryEventStore


def test_register_and_unregister_over_http(client, create_event, member_factory):
    event = create_event(capacity=2)
    ada = member_factory("ada@example.com")

    ok = client.post(f"/api/v1/events/{event['id']}/register", headers=ada["headers"])
    assert ok.status_code == 200
    assert ok.json()["participant_count"] == 1
    assert ok.json()["user_id"] == ada["id"]

    again = client.post(f"/api/v1/events/{event['id']}/register", headers=ada["headers"])
    assert again.status_code == 409
    assert "already registered" in again.json()["detail"]

    listed = client.get(f"/api/v1/events/{event['id']}").json()
    assert listed["participant_count"] == 1
    assert listed["spots_left"] == 1

    out = client.post(f"/api/v1/events/{event['id']}/unregister", headers=ada["headers"])
    assert out.status_code == 200
    body = out.json()
    assert body["changed"] is True
    assert body["registered"] is False
    assert body["participant_count"] == 0
    assert body["message"] == "Successfully unregistered from the event!"

    noop = client.post(f"/api/v1/events/{event['id']}/unregister", headers=ada["headers"])
    assert noop.status_code == 200
    assert noop.json()["changed"] is False
    assert noop.json()["participant_count"] == 0


def test_register_requires_authentication(client, create_event):
    event = create_event()
    response = client.post(f"/api/v1/events/{event['id']}/register")
    assert response.status_code == 401

    garbage = client.post(
        f"/api/v1/events/{event['id']}/register",
        headers={"Authorization": "Bearer not.a.token"},
    )
    assert garbage.status_code == 401


def test_client_supplied_user_id_is_ignored(client, create_event, member_factory):
    event = create_event()
    ada = member_factory("ada@example.com")
    grace = member_factory("grace@example.com")

    response = client.post(
        f"/api/v1/events/{event['id']}/register",
        json={"user_id": grace["id"], "userId": grace["id"]},
        headers=ada["headers"],
    )

    assert response.status_code == 200
    assert response.json()["user_id"] == ada["id"]


def test_register_status_codes(client, create_event, member_factory):
    full = create_event(capacity=1, title="Tiny")
    inactive = create_event(is_active=False, title="Past")
    ada = member_factory("ada@example.com")
    grace = member_factory("grace@example.com")

    assert client.post("/api/v1/events/9999/register", headers=ada["headers"]).status_code == 404
    assert client.post("/api/v1/events/9999/unregister", headers=ada["headers"]).status_code == 404
    assert client.post(f"/api/v1/events/{inactive['id']}/register", headers=ada["headers"]).status_code == 410

    assert client.post(f"/api/v1/events/{full['id']}/register", headers=ada["headers"]).status_code == 200
    rejected = client.post(f"/api/v1/events/{full['id']}/register", headers=grace["headers"])
    assert rejected.status_code == 409
    assert rejected.json()["detail"] == "Event is full"


def test_my_events_sorted_by_date(client, create_event, member_factory):
    later = create_event(title="Hackathon", days=30)
    sooner = create_event(title="Workshop", days=3)
    create_event(title="Not mine", days=1)
    ada = member_factory("ada@example.com")
    for event in (later, sooner):
        client.post(f"/api/v1/events/{event['id']}/register", headers=ada["headers"])

    mine = client.get("/api/v1/users/me/events", headers=ada["headers"])
    by_id = client.get(f"/api/v1/users/{ada['id']}/events", headers=ada["headers"])

    assert mine.status_code == 200
    assert [e["title"] for e in mine.json()] == ["Workshop", "Hackathon"]
    assert by_id.json() == mine.json()


def test_user_event_list_is_private(client, admin, create_event, member_factory):
    event = create_event()
    ada = member_factory("ada@example.com")
    grace = member_factory("grace@example.com")
    client.post(f"/api/v1/events/{event['id']}/register", headers=ada["headers"])

    assert client.get(f"/api/v1/users/{ada['id']}/events", headers=grace["headers"]).status_code == 403
    as_admin = client.get(f"/api/v1/users/{ada['id']}/events", headers=admin["headers"])
    assert as_admin.status_code == 200
    assert [e["id"] for e in as_admin.json()] == [event["id"]]


def test_catalog_listing_and_filters(client, create_event):
    create_event(title="Later", days=10)
    create_event(title="Earlier", days=2)
    create_event(title="Closed", days=5, is_active=False)

    titles = [e["title"] for e in client.get("/api/v1/events/").json()]
    assert titles == ["Earlier", "Closed", "Later"]

    active = [e["title"] for e in client.get("/api/v1/events/", params={"active": True}).json()]
    assert active == ["Earlier", "Later"]

    page = client.get("/api/v1/events/", params={"limit": 1, "offset": 1}).json()
    assert [e["title"] for e in page] == ["Closed"]


def test_admin_only_catalog_routes(client, admin, create_event, member_factory):
    event = create_event()
    ada = member_factory("ada@example.com")
    payload = {
        "title": "Sneaky",
        "description": "x",
        "date": "2030-01-01T00:00:00Z",
        "location": "Somewhere",
    }

    assert client.post("/api/v1/events/", json=payload).status_code == 401
    assert client.post("/api/v1/events/", json=payload, headers=ada["headers"]).status_code == 403
    assert client.delete(f"/api/v1/events/{event['id']}", headers=ada["headers"]).status_code == 403
    assert client.get(f"/api/v1/events/{event['id']}/participants", headers=ada["headers"]).status_code == 403


def test_update_event_refuses_capacity_below_participants(client, admin, create_event, member_factory):
    event = create_event(capacity=3)
    for email in ("a@example.com", "b@example.com"):
        member = member_factory(email)
        client.post(f"/api/v1/events/{event['id']}/register", headers=member["headers"])

    too_small = client.put(f"/api/v1/events/{event['id']}", json={"capacity": 1}, headers=admin["headers"])
    assert too_small.status_code == 409

    ok = client.put(
        f"/api/v1/events/{event['id']}",
        json={"capacity": 2, "title": "Bowling Night (moved)"},
        headers=admin["headers"],
    )
    assert ok.status_code == 200
    assert ok.json()["capacity"] == 2
    assert ok.json()["participant_count"] == 2
    assert ok.json()["title"] == "Bowling Night (moved)"

    missing = client.put("/api/v1/events/9999", json={"capacity": 5}, headers=admin["headers"])
    assert missing.status_code == 404


def test_delete_event_clears_registrations(client, admin, create_event, member_factory):
    event = create_event()
    ada = member_factory("ada@example.com")
    client.post(f"/api/v1/events/{event['id']}/register", headers=ada["headers"])

    assert client.delete(f"/api/v1/events/{event['id']}", headers=admin["headers"]).status_code == 204
    assert client.get(f"/api/v1/events/{event['id']}").status_code == 404
    assert client.get("/api/v1/users/me/events", headers=ada["headers"]).json() == []
    assert client.delete(f"/api/v1/events/{event['id']}", headers=admin["headers"]).status_code == 404


def test_participants_roster_for_admin(client, admin, create_event, member_factory):
    event = create_event(capacity=4)
    ada = member_factory("ada@example.com")
    client.post(f"/api/v1/events/{event['id']}/register", headers=ada["headers"])

    roster = client.get(f"/api/v1/events/{event['id']}/participants", headers=admin["headers"])

    assert roster.status_code == 200
    assert roster.json() == {
        "event_id": event["id"],
        "capacity": 4,
        "participant_count": 1,
        "user_ids": [ada["id"]],
    }


def test_seed_is_idempotent(client, admin):
    first = client.post("/api/v1/events/seed", headers=admin["headers"])
    second = client.post("/api/v1/events/seed", headers=admin["headers"])

    assert first.json()["created"] == 5
    assert second.json()["created"] == 0
    titles = [e["title"] for e in client.get("/api/v1/events/").json()]
    assert "Bowling Night" in titles
    assert len(titles) == 5


def test_store_can_be_swapped_for_in_memory(client, admin, member_factory):
    store = InMemoryEventStore()
    app.dependency_overrides[get_event_store] = lambda: store
    try:
        ada = member_factory("ada@example.com")
        created = client.post(
            "/api/v1/events/",
            json={
                "title": "In memory",
                "description": "Held in a dict",
                "date": "2030-05-01T18:00:00Z",
                "location": "Nowhere",
                "capacity": 1,
            },
            headers=admin["headers"],
        ).json()

        response = client.post(f"/api/v1/events/{created['id']}/register", headers=ada["headers"])

        assert response.status_code == 200
        assert store.list_participants(created["id"]) == [ada["id"]]
    finally:
        app.dependency_overrides.pop(get_event_store, None)


def test_unknown_user_event_list_is_not_found_for_admin(client, admin, member_factory):
    ada = member_factory("ada@example.com")

    assert client.get("/api/v1/users/9999/events", headers=admin["headers"]).status_code == 404
    # Members learn nothing about which ids exist.
    assert client.get("/api/v1/users/9999/events", headers=ada["headers"]).status_code == 403


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_event_dates_round_trip_as_utc(client, create_event):
    event = create_event(date="2030-01-01T17:00:00+02:00")

    fetched = client.get(f"/api/v1/events/{event['id']}").json()

    for body in (event, fetched):
        assert _parse(body["date"]) == datetime(2030, 1, 1, 15, 0, tzinfo=timezone.utc)
        assert body["date"].endswith(("Z", "+00:00"))
        assert body["created_at"].endswith(("Z", "+00:00"))


def test_in_memory_store_dates_are_utc(client, admin):
    store = InMemoryEventStore()
    app.dependency_overrides[get_event_store] = lambda: store
    try:
        created = client.post(
            "/api/v1/events/",
            json={
                "title": "Offset",
                "description": "Evening start",
                "date": "2030-01-01T17:00:00+02:00",
                "location": "Nowhere",
            },
            headers=admin["headers"],
        ).json()
    finally:
        app.dependency_overrides.pop(get_event_store, None)

    assert created["date"].endswith(("Z", "+00:00"))
    assert _parse(created["date"]).hour == 15
