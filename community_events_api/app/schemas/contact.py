"""
Pydantic models for the contact form.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Grace Hopper"])
    email: str = Field(..., min_length=3, examples=["grace@example.com"])
    subject: str = Field(..., min_length=1, examples=["Sponsorship"])
    message: str = Field(..., min_length=1, examples=["We would love to sponsor the hackathon."])

    @field_validator("name", "subject", "message")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class ContactRead(ContactCreate):
    id: int
    submitted_at: datetime
