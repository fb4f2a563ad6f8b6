"""
Domain errors raised by the service layer.

Every error here is an expected, user‑facing outcome.  Services raise
them; endpoints translate them to ``HTTPException`` using the
``status_code`` carried by each class.  None of them is retried and
none leaves partial state behind.
"""

from fastapi import status


class AppError(Exception):
    """Base class for domain errors."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(AppError):
    """A referenced event or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class EventNotFound(NotFound):
    def __init__(self, event_id: int):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class UserNotFound(NotFound):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class Conflict(AppError):
    """The request collides with the current state of a resource."""

    status_code = status.HTTP_409_CONFLICT


class AlreadyRegistered(Conflict):
    def __init__(self, event_id: int, user_id: int):
        super().__init__("You are already registered for this event")
        self.event_id = event_id
        self.user_id = user_id


class EventFull(Conflict):
    def __init__(self, event_id: int, capacity: int):
        super().__init__("Event is full")
        self.event_id = event_id
        self.capacity = capacity


class EmailAlreadyRegistered(Conflict):
    def __init__(self, email: str):
        super().__init__("User with this email already exists")
        self.email = email


class CapacityBelowParticipants(Conflict):
    def __init__(self, capacity: int, participant_count: int):
        super().__init__(
            f"Capacity {capacity} is below the current participant count {participant_count}"
        )


class InvalidState(AppError):
    """The resource exists but is not in a state that allows the action."""

    status_code = status.HTTP_410_GONE


class EventInactive(InvalidState):
    def __init__(self, event_id: int):
        super().__init__("Event is no longer active")
        self.event_id = event_id


class Unauthenticated(AppError):
    """No verified user identity is available."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidResetToken(AppError):
    def __init__(self):
        super().__init__("Invalid or expired reset token")
