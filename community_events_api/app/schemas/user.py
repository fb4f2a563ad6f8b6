"""
Pydantic models for user data.

Defines schemas for signing up, logging in, the password reset flow
and reading user information.  Password hashes and reset tokens are
never part of a response schema.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

StudentStatus = Literal["current", "recent", "prospective", "other"]
Role = Literal["member", "admin"]


def _normalise_email(value: str) -> str:
    value = value.strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Please provide a valid email address")
    return value


class UserBase(BaseModel):
    email: str = Field(..., examples=["ada@example.com"])
    first_name: str = Field(..., min_length=1, examples=["Ada"])
    last_name: str = Field(..., min_length=1, examples=["Lovelace"])
    university: Optional[str] = Field(None, examples=["Heriot-Watt University"])
    student_status: Optional[StudentStatus] = Field(None, examples=["current"])

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _normalise_email(value)

    @field_validator("first_name", "last_name", "university")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if isinstance(value, str) else value


class UserCreate(UserBase):
    """Schema for signing up."""

    password: str = Field(..., min_length=6, examples=["strongpassword"])


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    role: Role = "member"
    is_active: bool = True

    model_config = {
        "from_attributes": True,
    }


class UserUpdate(BaseModel):
    """Administrative update of a user account.  Omitted fields stay unchanged."""

    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    university: Optional[str] = None
    student_status: Optional[StudentStatus] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
    message: str = ""


class ForgotPasswordRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
    # Only populated in debug mode by the forgot‑password endpoint.
    reset_url: Optional[str] = None
