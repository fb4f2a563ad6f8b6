"""
Event catalog endpoints for API v1.

Anyone may list and read events.  Creating, updating, deleting and
seeding events, and reading the participant roster, require an
administrator.  Registration routes live in ``registrations``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from community_events_api.app.api.deps import get_event_service, get_ledger
from community_events_api.app.core.errors import AppError
from community_events_api.app.core.security import require_roles
from community_events_api.app.schemas.event import EventCreate, EventRead, EventUpdate
from community_events_api.app.schemas.registration import ParticipantList
from community_events_api.app.services.event_service import EventService
from community_events_api.app.services.registration_service import RegistrationLedger


router = APIRouter()


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(
    event: EventCreate,
    current_user: dict = Depends(require_roles("admin")),
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Create a new event (admin only)."""
    return service.create_event(event, current_user)


@router.get("/", response_model=List[EventRead])
def list_events(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    upcoming: bool = Query(False, description="Only events dated from now on"),
    active: Optional[bool] = Query(None, description="Filter on the active flag"),
    service: EventService = Depends(get_event_service),
) -> List[EventRead]:
    """List events ordered by date ascending."""
    return service.list_events(limit=limit, offset=offset, upcoming=upcoming, active=active)


@router.post("/seed")
def seed_events(
    current_user: dict = Depends(require_roles("admin")),
    service: EventService = Depends(get_event_service),
) -> dict:
    """Insert the default community events that do not exist yet."""
    created = service.seed_events()
    return {"success": True, "created": created}


@router.get("/{event_id}", response_model=EventRead)
def get_event(event_id: int, service: EventService = Depends(get_event_service)) -> EventRead:
    """Retrieve a single event by its ID.  Raises 404 if it does not exist."""
    try:
        return service.get_event(event_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.put("/{event_id}", response_model=EventRead)
def update_event(
    event_id: int,
    updates: EventUpdate,
    current_user: dict = Depends(require_roles("admin")),
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Update an existing event (admin only).

    Partial updates are supported; unspecified fields remain unchanged.
    Lowering ``capacity`` below the number of registered participants
    is refused with 409.
    """
    update_dict = {k: v for k, v in updates.model_dump().items() if v is not None}
    try:
        return service.update_event(event_id, update_dict)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    current_user: dict = Depends(require_roles("admin")),
    service: EventService = Depends(get_event_service),
) -> None:
    """Delete an event and its participant list (admin only)."""
    try:
        service.delete_event(event_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return None


@router.get("/{event_id}/participants", response_model=ParticipantList)
def list_event_participants(
    event_id: int,
    current_user: dict = Depends(require_roles("admin")),
    ledger: RegistrationLedger = Depends(get_ledger),
) -> ParticipantList:
    """List the user ids registered for an event (admin only)."""
    try:
        return ledger.participants(event_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
