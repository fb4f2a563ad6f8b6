"""
Contact form endpoints for API v1.

Anyone may send a message; only administrators can read them.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from community_events_api.app.core.security import require_roles
from community_events_api.app.schemas.contact import ContactCreate, ContactRead
from community_events_api.app.services.contact_service import ContactService


router = APIRouter()


@router.post("/", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
async def submit_contact(message: ContactCreate) -> ContactRead:
    return await ContactService.submit(message)


@router.get("/", response_model=List[ContactRead])
async def list_contact_messages(current_user: dict = Depends(require_roles("admin"))) -> List[ContactRead]:
    """List contact messages, newest first (admin only)."""
    return await ContactService.list_messages()
