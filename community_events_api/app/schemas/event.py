"""
Pydantic models for event data.

``EventBase`` contains the fields an administrator sets; ``EventCreate``
is the request body for new events, ``EventUpdate`` a partial update
and ``EventRead`` the response, which adds the identifier and the
participant count derived from the roster.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Bowling Night"])
    description: str = Field(..., min_length=1, examples=["A fun evening of bowling"])
    date: datetime = Field(..., examples=["2025-10-16T17:00:00Z"])
    # Free‑text display time, e.g. "5:00 PM" or "Friday 6:00 PM - Sunday 6:00 PM".
    time: Optional[str] = Field(None, examples=["5:00 PM"])
    location: str = Field(..., min_length=1, examples=["Fountain Park, Dundee St, Edinburgh"])
    capacity: int = Field(50, gt=0, examples=[30])
    sponsor: Optional[str] = Field("To be announced", examples=["To be announced"])
    is_active: bool = Field(True, examples=[True])


class EventCreate(EventBase):
    """Schema for creating an event."""
    pass


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    id: int
    participant_count: int = Field(..., ge=0)
    spots_left: int = Field(..., ge=0)
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class EventUpdate(BaseModel):
    """Schema for updating an event.

    All fields are optional; only provided fields will be updated.
    """
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    time: Optional[str] = None
    location: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, gt=0)
    sponsor: Optional[str] = None
    is_active: Optional[bool] = None
