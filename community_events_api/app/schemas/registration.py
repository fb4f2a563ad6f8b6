"""
Pydantic models for event registrations.

A registration is not stored as an entity of its own: it is the
membership of a user id in an event's participant set.  These schemas
describe the outcome of a register/unregister call and the admin view
of an event roster.
"""

from typing import List

from pydantic import BaseModel, Field


class RegistrationRead(BaseModel):
    """Outcome of a register or unregister call."""

    event_id: int
    user_id: int
    participant_count: int = Field(..., ge=0, examples=[12])
    # Whether the user is a participant after the call.
    registered: bool
    # False when the call found the roster already in the requested state.
    changed: bool
    message: str = ""


class ParticipantList(BaseModel):
    event_id: int
    capacity: int
    participant_count: int
    user_ids: List[int]
