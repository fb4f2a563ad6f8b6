"""
Pydantic schema definitions for API payloads.

Each domain (events, registrations, users, contact, feedback) defines
its own request and response models.  Schemas are separate from the
stores so the API representation can change without touching storage.
"""
