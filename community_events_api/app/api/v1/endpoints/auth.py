"""
Authentication endpoints for API v1.

Sign‑up, login, logout and the password reset flow.  Tokens are
stateless bearer JWTs, so logout only tells the client to drop its
token.  Reset links are returned in the response only when ``DEBUG``
is on and are never written to the log; delivering them by email is
outside this service.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from community_events_api.app.core.config import settings
from community_events_api.app.core.errors import AppError
from community_events_api.app.core.security import create_access_token, get_current_user
from community_events_api.app.schemas.user import (
    ForgotPasswordRequest,
    MessageResponse,
    ResetPasswordRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserRead,
)
from community_events_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent."


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate) -> TokenResponse:
    """Create an account and log the new user in."""
    try:
        created = await UserService.create_user(user)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    token = create_access_token({"sub": created.email})
    return TokenResponse(access_token=token, user=created, message="Account created successfully!")


@router.post("/login", response_model=TokenResponse)
async def login_user(credentials: UserLogin) -> TokenResponse:
    """Exchange email and password for an access token."""
    try:
        user = await UserService.authenticate(credentials.email, credentials.password)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    if not user:
        logger.info("Failed login for %s", credentials.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    token = create_access_token({"sub": user.email})
    return TokenResponse(access_token=token, user=user, message="Login successful!")


@router.post("/logout", response_model=MessageResponse)
async def logout_user() -> MessageResponse:
    return MessageResponse(message="Logged out successfully!")


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(payload: ForgotPasswordRequest) -> MessageResponse:
    """Start a password reset.

    The response is identical whether or not the address belongs to an
    account.
    """
    token = await UserService.create_password_reset(payload.email)
    reset_url = None
    if token and settings.debug:
        reset_url = f"{settings.client_url.rstrip('/')}/reset-password?token={token}"
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE, reset_url=reset_url)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(payload: ResetPasswordRequest) -> MessageResponse:
    """Set a new password using a token from ``/forgot-password``."""
    try:
        await UserService.reset_password(payload.token, payload.password)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(
        message="Password has been reset successfully! You can now log in with your new password."
    )


@router.get("/me", response_model=UserRead)
async def read_me(current_user: dict = Depends(get_current_user)) -> UserRead:
    user = await UserService.get_user_by_id(current_user["user_id"])
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User no longer exists")
    return user
