"""
Dependency providers for the HTTP layer.

Endpoints obtain their store and services through these functions so
that tests can swap the store with ``app.dependency_overrides``
instead of patching module globals.
"""

from fastapi import Depends

from community_events_api.app.services.event_service import EventService
from community_events_api.app.services.registration_service import RegistrationLedger
from community_events_api.app.stores.base import EventStore
from community_events_api.app.stores.sqlite import SQLiteEventStore


def get_event_store() -> EventStore:
    return SQLiteEventStore()


def get_ledger(store: EventStore = Depends(get_event_store)) -> RegistrationLedger:
    return RegistrationLedger(store)


def get_event_service(store: EventStore = Depends(get_event_store)) -> EventService:
    return EventService(store)
