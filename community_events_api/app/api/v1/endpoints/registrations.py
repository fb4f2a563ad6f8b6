"""
Event registration endpoints for API v1.

The user being registered is always the authenticated caller: the id
comes from ``get_current_user``, never from the request body or query
string.  Register and unregister are plain ``def`` so that FastAPI runs
them in its threadpool while the ledger holds the event's roster lock.
``list_user_events`` awaits the user lookup and hands the ledger read
to the threadpool itself.

Status codes:

* ``200`` success (also for unregistering when not registered)
* ``401`` no valid session
* ``404`` event does not exist (or, for admins, the user)
* ``409`` already registered, or the event is full
* ``410`` event is no longer active
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.concurrency import run_in_threadpool

from community_events_api.app.api.deps import get_ledger
from community_events_api.app.core.errors import AppError, UserNotFound
from community_events_api.app.core.security import get_current_user
from community_events_api.app.schemas.event import EventRead
from community_events_api.app.schemas.registration import RegistrationRead
from community_events_api.app.services.event_service import to_event_read
from community_events_api.app.services.registration_service import RegistrationLedger
from community_events_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/events/{event_id}/register", response_model=RegistrationRead)
def register_for_event(
    event_id: int = Path(..., description="ID of the event"),
    current_user: dict = Depends(get_current_user),
    ledger: RegistrationLedger = Depends(get_ledger),
) -> RegistrationRead:
    """Register the caller for an event."""
    try:
        return ledger.register(event_id, current_user.get("user_id"))
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.post("/events/{event_id}/unregister", response_model=RegistrationRead)
def unregister_from_event(
    event_id: int = Path(..., description="ID of the event"),
    current_user: dict = Depends(get_current_user),
    ledger: RegistrationLedger = Depends(get_ledger),
) -> RegistrationRead:
    """Withdraw the caller from an event.

    Succeeds for inactive events too.  If the caller was not
    registered the response has ``changed: false``.
    """
    try:
        return ledger.unregister(event_id, current_user.get("user_id"))
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


# Declared before ``/users/{user_id}/events`` so that "me" is not parsed as an id.
@router.get("/users/me/events", response_model=List[EventRead])
def list_my_events(
    current_user: dict = Depends(get_current_user),
    ledger: RegistrationLedger = Depends(get_ledger),
) -> List[EventRead]:
    """Events the caller is registered for, ordered by date ascending."""
    try:
        return [to_event_read(event) for event in ledger.list_for_user(current_user.get("user_id"))]
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/users/{user_id}/events", response_model=List[EventRead])
async def list_user_events(
    user_id: int = Path(..., gt=0, description="ID of the user"),
    current_user: dict = Depends(get_current_user),
    ledger: RegistrationLedger = Depends(get_ledger),
) -> List[EventRead]:
    """Events a user is registered for, ordered by date ascending.

    Members may only read their own list; administrators may read any
    and get 404 for an unknown user id.
    """
    if current_user.get("role") != "admin" and current_user.get("user_id") != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    try:
        if not await UserService.get_user_by_id(user_id):
            raise UserNotFound(user_id)
        events = await run_in_threadpool(ledger.list_for_user, user_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return [to_event_read(event) for event in events]
