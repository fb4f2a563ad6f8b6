"""Event catalog service, run against both event stores."""

from datetime import datetime

import pytest

from community_events_api.app.core.errors import CapacityBelowParticipants, EventNotFound
from community_events_api.app.schemas.event import EventCreate
from community_events_api.app.services.event_service import DEFAULT_EVENTS, EventService
from community_events_api.app.services.registration_service import RegistrationLedger


@pytest.fixture
def service(store) -> EventService:
    return EventService(store)


def test_create_and_get(service):
    created = service.create_event(
        EventCreate(
            title="Tech Workshop",
            description="Hands-on session",
            date=datetime(2030, 9, 22, 10, 0),
            location="Heriot-Watt University",
            capacity=40,
        )
    )

    fetched = service.get_event(created.id)

    assert fetched.title == "Tech Workshop"
    assert fetched.participant_count == 0
    assert fetched.spots_left == 40
    assert fetched.sponsor == "To be announced"


def test_get_missing_event(service):
    with pytest.raises(EventNotFound):
        service.get_event(12345)


def test_update_keeps_unspecified_fields(service, make_event):
    event = make_event(capacity=10)

    updated = service.update_event(event.id, {"location": "Leith Links"})

    assert updated.location == "Leith Links"
    assert updated.capacity == 10
    assert updated.title == event.title


def test_update_cannot_shrink_below_roster(service, store, make_event, make_users):
    event = make_event(capacity=3)
    ledger = RegistrationLedger(store)
    for user in make_users(2):
        ledger.register(event.id, user)

    with pytest.raises(CapacityBelowParticipants):
        service.update_event(event.id, {"capacity": 1})

    assert store.get_event(event.id).capacity == 3
    assert service.update_event(event.id, {"capacity": 2}).spots_left == 0


def test_update_missing_event(service):
    with pytest.raises(EventNotFound):
        service.update_event(777, {"title": "Ghost"})


def test_delete_event(service, make_event):
    event = make_event()

    service.delete_event(event.id)

    with pytest.raises(EventNotFound):
        service.delete_event(event.id)


def test_list_events_filters(service, make_event):
    make_event(title="Past", date=datetime(2000, 1, 1))
    make_event(title="Future", date=datetime(2040, 1, 1))
    make_event(title="Closed", date=datetime(2041, 1, 1), is_active=False)

    assert [e.title for e in service.list_events()] == ["Past", "Future", "Closed"]
    assert [e.title for e in service.list_events(upcoming=True)] == ["Future", "Closed"]
    assert [e.title for e in service.list_events(upcoming=True, active=True)] == ["Future"]
    assert [e.title for e in service.list_events(active=False)] == ["Closed"]
    assert [e.title for e in service.list_events(limit=1, offset=1)] == ["Future"]


def test_seed_events_skips_existing_titles(service, make_event):
    make_event(title="Bowling Night")

    created = service.seed_events()

    assert created == len(DEFAULT_EVENTS) - 1
    assert service.seed_events() == 0
    titles = [e.title for e in service.list_events()]
    assert titles.count("Bowling Night") == 1
    assert "24HR HACKATHON 2026" in titles
