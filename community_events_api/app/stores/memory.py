"""In‑memory implementation of ``EventStore``.

Used by tests and for running the service without a database file.
State lives on the store instance, never in module globals, so every
test can build its own isolated store.

Each existing event has its own ``threading.Lock``, created on first
use and dropped when the event is deleted.  A roster scope holds that
lock and works on a copy of the event, which replaces the stored
version only when the scope exits without an exception.  Plain reads
take the registry lock only: committed versions are swapped in whole.
"""

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Set

from .base import EVENT_FIELDS, EventRecord, EventStore, Roster


def _as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _StoredEvent:
    __slots__ = ("fields", "participants", "created_at")

    def __init__(self, fields: Dict[str, Any], participants: List[int], created_at: datetime):
        self.fields = fields
        # Registration order; membership checks go through ``set(...)``.
        self.participants = participants
        self.created_at = created_at

    def copy(self) -> "_StoredEvent":
        return _StoredEvent(dict(self.fields), list(self.participants), self.created_at)

    def to_record(self, event_id: int) -> EventRecord:
        return EventRecord(
            id=event_id,
            participant_count=len(self.participants),
            created_at=self.created_at,
            **self.fields,
        )


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    values = {key: fields[key] for key in EVENT_FIELDS if key in fields}
    if "date" in values:
        values["date"] = _as_utc(values["date"])
    if "is_active" in values:
        values["is_active"] = bool(values["is_active"])
    return values


class InMemoryRoster(Roster):
    def __init__(self, event_id: int, working: _StoredEvent):
        self._event_id = event_id
        self._working = working

    @property
    def event(self) -> EventRecord:
        return self._working.to_record(self._event_id)

    @property
    def participants(self) -> FrozenSet[int]:
        return frozenset(self._working.participants)

    def add(self, user_id: int) -> None:
        if user_id in self._working.participants:
            raise ValueError(f"user {user_id} already in participant set")
        self._working.participants.append(user_id)

    def remove(self, user_id: int) -> None:
        if user_id in self._working.participants:
            self._working.participants.remove(user_id)

    def update(self, fields: Dict[str, Any]) -> None:
        self._working.fields.update(_clean_fields(fields))


class InMemoryEventStore(EventStore):
    """Event store keeping everything in instance dictionaries."""

    def __init__(self):
        self._events: Dict[int, _StoredEvent] = {}
        self._locks: Dict[int, threading.Lock] = {}
        # Guards the two dictionaries above, not the events themselves.
        self._registry_lock = threading.Lock()
        self._next_id = 1

    def _lock_for(self, event_id: int) -> Optional[threading.Lock]:
        """Return the lock of an existing event, or ``None`` if there is no such event."""
        with self._registry_lock:
            if event_id not in self._events:
                return None
            return self._locks.setdefault(event_id, threading.Lock())

    def create_event(self, fields: Dict[str, Any], created_by: Optional[int] = None) -> EventRecord:
        values = {"time": None, "sponsor": None, "is_active": True}
        values.update(_clean_fields(fields))
        stored = _StoredEvent(values, [], datetime.now(timezone.utc))
        with self._registry_lock:
            event_id = self._next_id
            self._next_id += 1
            self._events[event_id] = stored
            return stored.to_record(event_id)

    def get_event(self, event_id: int) -> Optional[EventRecord]:
        with self._registry_lock:
            stored = self._events.get(event_id)
            return stored.to_record(event_id) if stored else None

    def _snapshot(self) -> List[EventRecord]:
        with self._registry_lock:
            items = list(self._events.items())
        return [stored.to_record(event_id) for event_id, stored in items]

    def list_events(
        self,
        limit: int = 100,
        offset: int = 0,
        upcoming_after: Optional[datetime] = None,
        active: Optional[bool] = None,
    ) -> List[EventRecord]:
        events = self._snapshot()
        if upcoming_after is not None:
            threshold = _as_utc(upcoming_after)
            events = [e for e in events if e.date >= threshold]
        if active is not None:
            events = [e for e in events if e.is_active == active]
        events.sort(key=lambda e: (e.date, e.id))
        return events[offset:offset + limit]

    def delete_event(self, event_id: int) -> bool:
        lock = self._lock_for(event_id)
        if lock is None:
            return False
        with lock:
            with self._registry_lock:
                self._locks.pop(event_id, None)
                return self._events.pop(event_id, None) is not None

    def list_events_for_user(self, user_id: int) -> List[EventRecord]:
        with self._registry_lock:
            items = list(self._events.items())
        events = [
            stored.to_record(event_id)
            for event_id, stored in items
            if user_id in stored.participants
        ]
        events.sort(key=lambda e: (e.date, e.id))
        return events

    def list_participants(self, event_id: int) -> Optional[List[int]]:
        with self._registry_lock:
            stored = self._events.get(event_id)
            return list(stored.participants) if stored else None

    def titles(self) -> Set[str]:
        return {event.title for event in self._snapshot()}

    @contextmanager
    def roster(self, event_id: int) -> Iterator[Optional[InMemoryRoster]]:
        lock = self._lock_for(event_id)
        if lock is None:
            yield None
            return
        with lock:
            # A delete may have run while we waited for the lock.
            stored = self._events.get(event_id)
            if stored is None:
                yield None
                return
            working = stored.copy()
            yield InMemoryRoster(event_id, working)
            with self._registry_lock:
                # The event may not be deleted while we hold its lock.
                self._events[event_id] = working
