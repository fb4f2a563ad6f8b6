"""
Feedback form endpoints for API v1.

Submitting feedback is public; reading it requires an administrator.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from community_events_api.app.core.security import require_roles
from community_events_api.app.schemas.feedback import FeedbackCreate, FeedbackRead
from community_events_api.app.services.feedback_service import FeedbackService


router = APIRouter()


@router.post("/", response_model=FeedbackRead, status_code=status.HTTP_201_CREATED)
async def submit_feedback(feedback: FeedbackCreate) -> FeedbackRead:
    return await FeedbackService.submit(feedback)


@router.get("/", response_model=List[FeedbackRead])
async def list_feedback(current_user: dict = Depends(require_roles("admin"))) -> List[FeedbackRead]:
    """List feedback, newest first (admin only)."""
    return await FeedbackService.list_feedback()
