"""
Business logic for the event catalog.

``EventService`` creates, lists, updates and deletes events through an
injected ``EventStore``.  It never touches participant sets directly:
registration goes through ``RegistrationLedger``.  Two catalog
operations still interact with the roster:

* ``update_event`` runs inside a roster scope so that lowering the
  capacity below the number of registered participants is refused
  atomically.
* ``delete_event`` removes the participant set together with the event.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.errors import CapacityBelowParticipants, EventNotFound
from ..schemas.event import EventCreate, EventRead
from ..stores.base import EventRecord, EventStore

logger = logging.getLogger(__name__)

# Events created by ``seed_events``.  Seeding skips titles that already exist.
DEFAULT_EVENTS: List[Dict[str, Any]] = [
    {
        "title": "Bowling Night",
        "description": (
            "Join us for a fun evening of bowling! A great opportunity to socialize, "
            "have fun, and connect with fellow members. Whether you're a bowling pro "
            "or a complete beginner, everyone is welcome!"
        ),
        "date": datetime(2025, 10, 16, 17, 0, tzinfo=timezone.utc),
        "time": "5:00 PM",
        "location": "Fountain Park, Dundee St, Edinburgh EH11 1AW",
        "capacity": 30,
        "sponsor": "To be announced",
        "is_active": True,
    },
    {
        "title": "24HR HACKATHON 2026",
        "description": (
            "Work in teams of 5 to collaborate, code, and innovate! Inspiring talks on "
            "career journeys, networking with industry professionals, prizes and free pizza."
        ),
        "date": datetime(2026, 2, 7, 10, 30, tzinfo=timezone.utc),
        "time": "10:30 AM - 10:30 AM (24 hours)",
        "location": "Heriot-Watt Campus, Robotarium",
        "capacity": 100,
        "sponsor": "To be announced",
        "is_active": True,
    },
    {
        "title": "Coding Workshop: Introduction to React",
        "description": (
            "Learn the fundamentals of React development in this hands-on workshop. "
            "Perfect for beginners and those looking to refresh their skills."
        ),
        "date": datetime(2024, 9, 22, 10, 0, tzinfo=timezone.utc),
        "time": "10:00 AM - 4:00 PM",
        "location": "Computer Lab 1, Heriot-Watt University",
        "capacity": 30,
        "sponsor": None,
        "is_active": False,
    },
    {
        "title": "Career Panel: Breaking into Tech",
        "description": (
            "Hear from successful women who have built careers in technology. Learn "
            "about different paths, challenges, and opportunities in the industry."
        ),
        "date": datetime(2024, 10, 5, 14, 0, tzinfo=timezone.utc),
        "time": "2:00 PM - 4:00 PM",
        "location": "Lecture Hall A, Heriot-Watt University",
        "capacity": 80,
        "sponsor": None,
        "is_active": False,
    },
    {
        "title": "Mentorship Program Launch",
        "description": (
            "Kickoff event for our mentorship program connecting students with "
            "industry professionals."
        ),
        "date": datetime(2024, 10, 20, 15, 0, tzinfo=timezone.utc),
        "time": "3:00 PM - 5:00 PM",
        "location": "Student Union Building, Heriot-Watt University",
        "capacity": 50,
        "sponsor": None,
        "is_active": False,
    },
]


def to_event_read(record: EventRecord) -> EventRead:
    return EventRead(
        id=record.id,
        title=record.title,
        description=record.description,
        date=record.date,
        time=record.time,
        location=record.location,
        capacity=record.capacity,
        sponsor=record.sponsor,
        is_active=record.is_active,
        created_at=record.created_at,
        participant_count=record.participant_count,
        spots_left=record.spots_left,
    )


class EventService:
    """Event catalog operations on top of an ``EventStore``."""

    def __init__(self, store: EventStore):
        self.store = store

    def create_event(self, data: EventCreate, current_user: Optional[dict] = None) -> EventRead:
        """Create a new event and return it.

        ``current_user`` is the authenticated administrator; their id is
        stored as the event's creator.
        """
        creator = current_user.get("user_id") if current_user else None
        logger.info("User %s is creating event '%s'", creator, data.title)
        record = self.store.create_event(data.model_dump(), created_by=creator)
        return to_event_read(record)

    def list_events(
        self,
        limit: int = 100,
        offset: int = 0,
        upcoming: bool = False,
        active: Optional[bool] = None,
    ) -> List[EventRead]:
        """List events ordered by date ascending.

        ``upcoming`` restricts the list to events dated from now on;
        ``active`` filters on the active flag when given.
        """
        after = datetime.now(timezone.utc) if upcoming else None
        records = self.store.list_events(limit=limit, offset=offset, upcoming_after=after, active=active)
        return [to_event_read(record) for record in records]

    def get_event(self, event_id: int) -> EventRead:
        record = self.store.get_event(event_id)
        if record is None:
            raise EventNotFound(event_id)
        return to_event_read(record)

    def update_event(self, event_id: int, updates: Dict[str, Any]) -> EventRead:
        """Apply a partial update.

        Raises ``EventNotFound`` for unknown ids and
        ``CapacityBelowParticipants`` if the new capacity could not hold
        the participants already registered.
        """
        with self.store.roster(event_id) as roster:
            if roster is None:
                raise EventNotFound(event_id)
            capacity = updates.get("capacity")
            count = len(roster.participants)
            if capacity is not None and capacity < count:
                raise CapacityBelowParticipants(capacity, count)
            roster.update(updates)
            record = roster.event
        logger.info("Event %s updated: %s", event_id, sorted(updates))
        return to_event_read(record)

    def delete_event(self, event_id: int) -> None:
        if not self.store.delete_event(event_id):
            raise EventNotFound(event_id)
        logger.info("Event %s deleted with its participant list", event_id)

    def seed_events(self) -> int:
        """Insert the default events that are not present yet.

        Returns the number of events created.
        """
        existing = self.store.titles()
        created = 0
        for fields in DEFAULT_EVENTS:
            if fields["title"] in existing:
                continue
            self.store.create_event(fields)
            created += 1
        logger.info("Seeded %s default events", created)
        return created
