"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new domains are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import (
    auth,
    contact,
    events,
    feedback,
    registrations,
    status,
    users,
)

router = APIRouter()

# Registration routes span ``/events/...`` and ``/users/...`` and define
# their full paths.  They are included first so ``/users/me/events`` is
# matched before any ``/users/{user_id}`` route.
router.include_router(registrations.router, tags=["registrations"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(contact.router, prefix="/contact", tags=["contact"])
router.include_router(feedback.router, prefix="/feedback", tags=["feedback"])
router.include_router(status.router, prefix="/status", tags=["status"])
