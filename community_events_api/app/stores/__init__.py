"""
Event persistence.

``base`` defines the ``EventStore`` interface, ``sqlite`` the store the
application runs on and ``memory`` a dependency‑free store for tests.
"""

from .base import EventRecord, EventStore, Roster
from .memory import InMemoryEventStore
from .sqlite import SQLiteEventStore

__all__ = ["EventRecord", "EventStore", "Roster", "InMemoryEventStore", "SQLiteEventStore"]
