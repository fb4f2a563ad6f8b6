"""
Registration ledger: the only writer of event participant sets.

``register`` and ``unregister`` perform their checks and their write
inside a single roster scope of the injected ``EventStore``.  The store
serialises scopes per event id and reads state fresh when a scope
opens, so two callers can never both pass the capacity check for the
last seat, and a double‑clicked "register" can never add the same user
twice.

Preconditions for ``register`` are checked in this order:

1. the event exists (``EventNotFound``)
2. the event is active (``EventInactive``)
3. the user is not already a participant (``AlreadyRegistered``)
4. there is a free seat (``EventFull``)

``unregister`` only requires the event to exist.  Withdrawing from an
inactive event is allowed, and withdrawing when not registered is an
idempotent success reported with ``changed=False``.

Participant counts are always the size of the participant set read
inside the scope; nothing increments or decrements a counter.
"""

import logging
from typing import List

from ..core.errors import (
    AlreadyRegistered,
    EventFull,
    EventInactive,
    EventNotFound,
    Unauthenticated,
)
from ..schemas.registration import ParticipantList, RegistrationRead
from ..stores.base import EventRecord, EventStore

logger = logging.getLogger(__name__)


def canonical_id(value: object) -> int:
    """Return ``value`` as a positive ``int`` user id or raise ``Unauthenticated``.

    User ids come from the authenticated session, so anything else here
    means no verified identity was supplied.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise Unauthenticated("A verified user identity is required")
    return value


class RegistrationLedger:
    """Register and unregister users for events.

    Methods are synchronous: they block on the store while the roster
    lock is held.  FastAPI runs the calling endpoints in its threadpool.
    """

    def __init__(self, store: EventStore):
        self.store = store

    def register(self, event_id: int, user_id: object) -> RegistrationRead:
        """Add ``user_id`` to the participants of ``event_id``.

        Raises
        ------
        Unauthenticated
            If ``user_id`` is not a verified identifier.
        EventNotFound, EventInactive, AlreadyRegistered, EventFull
            If a precondition fails.  The event is left unchanged.
        """
        user_id = canonical_id(user_id)
        with self.store.roster(event_id) as roster:
            if roster is None:
                raise EventNotFound(event_id)
            event = roster.event
            if not event.is_active:
                logger.info("Rejected registration of user %s: event %s inactive", user_id, event_id)
                raise EventInactive(event_id)
            participants = roster.participants
            if user_id in participants:
                logger.info("Rejected registration of user %s: already on event %s", user_id, event_id)
                raise AlreadyRegistered(event_id, user_id)
            if len(participants) >= event.capacity:
                logger.info("Rejected registration of user %s: event %s full (%s)", user_id, event_id, event.capacity)
                raise EventFull(event_id, event.capacity)
            roster.add(user_id)
            count = len(roster.participants)
        logger.info("User %s registered for event %s (%s/%s)", user_id, event_id, count, event.capacity)
        return RegistrationRead(
            event_id=event_id,
            user_id=user_id,
            participant_count=count,
            registered=True,
            changed=True,
            message="Successfully registered for the event!",
        )

    def unregister(self, event_id: int, user_id: object) -> RegistrationRead:
        """Remove ``user_id`` from the participants of ``event_id``.

        Succeeds whether or not the user was registered; ``changed``
        tells the two cases apart.  Raises ``EventNotFound`` if the
        event does not exist.
        """
        user_id = canonical_id(user_id)
        with self.store.roster(event_id) as roster:
            if roster is None:
                raise EventNotFound(event_id)
            changed = user_id in roster.participants
            if changed:
                roster.remove(user_id)
            count = len(roster.participants)
        if changed:
            logger.info("User %s unregistered from event %s (%s left)", user_id, event_id, count)
            message = "Successfully unregistered from the event!"
        else:
            logger.info("User %s was not registered for event %s; nothing to do", user_id, event_id)
            message = "You were not registered for this event"
        return RegistrationRead(
            event_id=event_id,
            user_id=user_id,
            participant_count=count,
            registered=False,
            changed=changed,
            message=message,
        )

    def list_for_user(self, user_id: object) -> List[EventRecord]:
        """Events the user is registered for, ordered by date ascending."""
        return self.store.list_events_for_user(canonical_id(user_id))

    def participants(self, event_id: int) -> ParticipantList:
        """Admin view of an event roster in registration order."""
        event = self.store.get_event(event_id)
        user_ids = self.store.list_participants(event_id)
        if event is None or user_ids is None:
            raise EventNotFound(event_id)
        return ParticipantList(
            event_id=event_id,
            capacity=event.capacity,
            participant_count=len(user_ids),
            user_ids=user_ids,
        )
