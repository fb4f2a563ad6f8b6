"""
Business logic for member feedback.
"""

import logging
from typing import List

from ..core.db import from_db_datetime, get_connection, transaction, utcnow_text
from ..schemas.feedback import FeedbackCreate, FeedbackRead

logger = logging.getLogger(__name__)

_COLUMNS = (
    "name", "email", "university", "student_status", "event_participation", "rating",
    "overall_experience", "technical_skills", "networking_value", "suggestions",
)


class FeedbackService:
    """Store and list feedback form submissions."""

    @classmethod
    async def submit(cls, data: FeedbackCreate) -> FeedbackRead:
        values = data.model_dump()
        submitted_at = utcnow_text()
        with transaction() as conn:
            cursor = conn.execute(
                f"INSERT INTO feedback ({', '.join(_COLUMNS)}, submitted_at) "
                f"VALUES ({', '.join('?' for _ in _COLUMNS)}, ?)",
                (*(values[column] for column in _COLUMNS), submitted_at),
            )
            feedback_id = cursor.lastrowid
        logger.info("Feedback %s submitted (rating %s)", feedback_id, data.rating)
        return FeedbackRead(id=feedback_id, submitted_at=from_db_datetime(submitted_at), **values)

    @classmethod
    async def list_feedback(cls) -> List[FeedbackRead]:
        """Return all feedback, newest first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT id, {', '.join(_COLUMNS)}, submitted_at FROM feedback "
                "ORDER BY submitted_at DESC, id DESC"
            ).fetchall()
        finally:
            conn.close()
        return [
            FeedbackRead(
                id=row["id"],
                submitted_at=from_db_datetime(row["submitted_at"]),
                **{column: row[column] for column in _COLUMNS},
            )
            for row in rows
        ]
