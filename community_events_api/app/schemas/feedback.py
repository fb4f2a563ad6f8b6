"""
Pydantic models for member feedback.

``student_status`` and ``rating`` are required; the free‑text answers
are optional.  ``event_participation`` accepts an empty string for
"not answered", as the public form submits it.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .user import StudentStatus

EventParticipation = Literal["hackathon", "workshops", "networking", "mentorship", "multiple", "none", ""]


class FeedbackCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    university: Optional[str] = None
    student_status: StudentStatus
    event_participation: Optional[EventParticipation] = ""
    rating: int = Field(..., ge=1, le=5)
    overall_experience: Optional[str] = None
    technical_skills: Optional[str] = None
    networking_value: Optional[str] = None
    suggestions: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class FeedbackRead(FeedbackCreate):
    id: int
    submitted_at: datetime
