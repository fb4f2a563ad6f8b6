"""
User administration endpoints for API v1.

Listing accounts and changing roles or the active flag is reserved to
administrators.  Sign‑up and login live in ``auth``; a user's event
list lives in ``registrations``.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from community_events_api.app.core.errors import AppError
from community_events_api.app.core.security import require_roles
from community_events_api.app.schemas.user import UserRead, UserUpdate
from community_events_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/", response_model=List[UserRead])
async def list_users(current_user: dict = Depends(require_roles("admin"))) -> List[UserRead]:
    """List all users (admin only)."""
    return await UserService.list_users()


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    updates: UserUpdate,
    current_user: dict = Depends(require_roles("admin")),
) -> UserRead:
    """Update a user's profile, role or active flag (admin only).

    Administrators cannot demote or deactivate themselves, so an
    installation always keeps at least one working administrator.
    """
    update_dict = {k: v for k, v in updates.model_dump().items() if v is not None}
    if current_user.get("user_id") == user_id and (
        update_dict.get("role", "admin") != "admin" or update_dict.get("is_active", True) is False
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot demote or deactivate your own account",
        )
    try:
        return await UserService.update_user(user_id, update_dict)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
