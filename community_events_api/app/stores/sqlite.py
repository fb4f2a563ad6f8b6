"""SQLite implementation of ``EventStore``.

Events live in the ``events`` table and their participant sets in
``event_participants``.  The participant count is always computed from
``event_participants`` with ``COUNT(*)``; there is no counter column
that could drift from the set.

A roster scope is a ``BEGIN IMMEDIATE`` transaction (see
``core.db.transaction``).  SQLite grants the reserved lock to one
connection at a time, so concurrent scopes for any event are
serialised by the database itself, across threads and processes.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Set

from ..core.db import from_db_datetime, get_connection, to_db_datetime, transaction, utcnow_text
from .base import EVENT_FIELDS, EventRecord, EventStore, Roster

_EVENT_COLUMNS = (
    "e.id, e.title, e.description, e.date, e.time, e.location, e.capacity, "
    "e.sponsor, e.is_active, e.created_at, "
    "(SELECT COUNT(*) FROM event_participants p WHERE p.event_id = e.id) AS participant_count"
)


def _row_to_event(row: sqlite3.Row) -> EventRecord:
    return EventRecord(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        date=from_db_datetime(row["date"]),
        time=row["time"],
        location=row["location"],
        capacity=row["capacity"],
        sponsor=row["sponsor"],
        is_active=bool(row["is_active"]),
        created_at=from_db_datetime(row["created_at"]),
        participant_count=row["participant_count"],
    )


def _column_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key in EVENT_FIELDS:
        if key not in fields:
            continue
        value = fields[key]
        if key == "date":
            value = to_db_datetime(value)
        elif key == "is_active":
            value = int(bool(value))
        values[key] = value
    return values


def _fetch_event(conn: sqlite3.Connection, event_id: int) -> Optional[EventRecord]:
    row = conn.execute(
        f"SELECT {_EVENT_COLUMNS} FROM events e WHERE e.id = ?", (event_id,)
    ).fetchone()
    return _row_to_event(row) if row else None


class SQLiteRoster(Roster):
    """Roster bound to an open ``BEGIN IMMEDIATE`` transaction."""

    def __init__(self, conn: sqlite3.Connection, event: EventRecord):
        self._conn = conn
        self._event = event
        rows = conn.execute(
            "SELECT user_id FROM event_participants WHERE event_id = ?", (event.id,)
        ).fetchall()
        self._participants: Set[int] = {row["user_id"] for row in rows}

    @property
    def event(self) -> EventRecord:
        return _fetch_event(self._conn, self._event.id)

    @property
    def participants(self) -> FrozenSet[int]:
        return frozenset(self._participants)

    def add(self, user_id: int) -> None:
        self._conn.execute(
            "INSERT INTO event_participants (event_id, user_id, registered_at) VALUES (?, ?, ?)",
            (self._event.id, user_id, utcnow_text()),
        )
        self._participants.add(user_id)

    def remove(self, user_id: int) -> None:
        self._conn.execute(
            "DELETE FROM event_participants WHERE event_id = ? AND user_id = ?",
            (self._event.id, user_id),
        )
        self._participants.discard(user_id)

    def update(self, fields: Dict[str, Any]) -> None:
        values = _column_values(fields)
        if not values:
            return
        assignments = ", ".join(f"{key} = ?" for key in values)
        self._conn.execute(
            f"UPDATE events SET {assignments} WHERE id = ?",
            (*values.values(), self._event.id),
        )


class SQLiteEventStore(EventStore):
    """Event store backed by the application's SQLite database."""

    def create_event(self, fields: Dict[str, Any], created_by: Optional[int] = None) -> EventRecord:
        values = _column_values(fields)
        values["created_by"] = created_by
        values["created_at"] = utcnow_text()
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        with transaction() as conn:
            cursor = conn.execute(
                f"INSERT INTO events ({columns}) VALUES ({placeholders})",
                tuple(values.values()),
            )
            return _fetch_event(conn, cursor.lastrowid)

    def get_event(self, event_id: int) -> Optional[EventRecord]:
        conn = get_connection()
        try:
            return _fetch_event(conn, event_id)
        finally:
            conn.close()

    def list_events(
        self,
        limit: int = 100,
        offset: int = 0,
        upcoming_after: Optional[datetime] = None,
        active: Optional[bool] = None,
    ) -> List[EventRecord]:
        conditions = []
        params: list = []
        if upcoming_after is not None:
            conditions.append("e.date >= ?")
            params.append(to_db_datetime(upcoming_after))
        if active is not None:
            conditions.append("e.is_active = ?")
            params.append(int(active))
        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        params.extend([limit, offset])
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events e {where} "
                "ORDER BY e.date ASC, e.id ASC LIMIT ? OFFSET ?",
                tuple(params),
            ).fetchall()
            return [_row_to_event(row) for row in rows]
        finally:
            conn.close()

    def delete_event(self, event_id: int) -> bool:
        with transaction() as conn:
            conn.execute("DELETE FROM event_participants WHERE event_id = ?", (event_id,))
            cursor = conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
            return cursor.rowcount > 0

    def list_events_for_user(self, user_id: int) -> List[EventRecord]:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events e "
                "JOIN event_participants mine ON mine.event_id = e.id AND mine.user_id = ? "
                "ORDER BY e.date ASC, e.id ASC",
                (user_id,),
            ).fetchall()
            return [_row_to_event(row) for row in rows]
        finally:
            conn.close()

    def list_participants(self, event_id: int) -> Optional[List[int]]:
        conn = get_connection()
        try:
            if not conn.execute("SELECT 1 FROM events WHERE id = ?", (event_id,)).fetchone():
                return None
            rows = conn.execute(
                "SELECT user_id FROM event_participants WHERE event_id = ? "
                "ORDER BY registered_at ASC, rowid ASC",
                (event_id,),
            ).fetchall()
            return [row["user_id"] for row in rows]
        finally:
            conn.close()

    def titles(self) -> Set[str]:
        conn = get_connection()
        try:
            return {row["title"] for row in conn.execute("SELECT title FROM events").fetchall()}
        finally:
            conn.close()

    @contextmanager
    def roster(self, event_id: int) -> Iterator[Optional[SQLiteRoster]]:
        with transaction() as conn:
            event = _fetch_event(conn, event_id)
            yield SQLiteRoster(conn, event) if event else None
