"""Event store interface (repository pattern).

Services depend on ``EventStore`` only, so the SQLite store used in
production and the in‑memory store used by tests are interchangeable.

The participant set of an event is only ever changed inside a
``roster`` scope.  A store guarantees that, for a given event id, at
most one roster scope is open at a time and that the state it exposes
was read after the scope was entered.  Leaving the scope normally
persists the changes; leaving it with an exception discards them.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Set

# Columns a client may set on an event.
EVENT_FIELDS = ("title", "description", "date", "time", "location", "capacity", "sponsor", "is_active")


@dataclass(frozen=True)
class EventRecord:
    id: int
    title: str
    description: str
    date: datetime
    location: str
    capacity: int
    participant_count: int
    time: Optional[str] = None
    sponsor: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def spots_left(self) -> int:
        return max(self.capacity - self.participant_count, 0)


class Roster(ABC):
    """One event's participants, held under mutual exclusion."""

    @property
    @abstractmethod
    def event(self) -> EventRecord:
        """The event as it stands inside this scope, count included."""

    @property
    @abstractmethod
    def participants(self) -> FrozenSet[int]:
        ...

    @abstractmethod
    def add(self, user_id: int) -> None:
        ...

    @abstractmethod
    def remove(self, user_id: int) -> None:
        ...

    @abstractmethod
    def update(self, fields: Dict[str, Any]) -> None:
        """Change event columns listed in ``EVENT_FIELDS``."""


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def create_event(self, fields: Dict[str, Any], created_by: Optional[int] = None) -> EventRecord:
        ...

    @abstractmethod
    def get_event(self, event_id: int) -> Optional[EventRecord]:
        """Return an event by ID, or None if not found."""

    @abstractmethod
    def list_events(
        self,
        limit: int = 100,
        offset: int = 0,
        upcoming_after: Optional[datetime] = None,
        active: Optional[bool] = None,
    ) -> List[EventRecord]:
        """Return events ordered by date ascending, then id."""

    @abstractmethod
    def delete_event(self, event_id: int) -> bool:
        """Delete an event and its participant set.  Returns False if absent."""

    @abstractmethod
    def list_events_for_user(self, user_id: int) -> List[EventRecord]:
        """Return events whose participant set contains ``user_id``, by date ascending."""

    @abstractmethod
    def list_participants(self, event_id: int) -> Optional[List[int]]:
        """Return participant ids in registration order, or None if the event is missing."""

    @abstractmethod
    def titles(self) -> Set[str]:
        ...

    @abstractmethod
    def roster(self, event_id: int) -> AbstractContextManager[Optional[Roster]]:
        """Open a roster scope; yields None if the event does not exist."""
