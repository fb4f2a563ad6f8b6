"""
Business logic for the contact form.

Messages are stored as submitted and listed newest first for the
committee.  Delivering them by email is left to whoever reads the
list.
"""

import logging
from typing import List

from ..core.db import from_db_datetime, get_connection, transaction, utcnow_text
from ..schemas.contact import ContactCreate, ContactRead

logger = logging.getLogger(__name__)


class ContactService:

    @classmethod
    async def submit(cls, data: ContactCreate) -> ContactRead:
        submitted_at = utcnow_text()
        with transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO contact_messages (name, email, subject, message, submitted_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (data.name, data.email, data.subject, data.message, submitted_at),
            )
            message_id = cursor.lastrowid
        logger.info("Contact message %s received from %s", message_id, data.email)
        return ContactRead(id=message_id, submitted_at=from_db_datetime(submitted_at), **data.model_dump())

    @classmethod
    async def list_messages(cls) -> List[ContactRead]:
        """Return all contact messages, newest first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, name, email, subject, message, submitted_at FROM contact_messages "
                "ORDER BY submitted_at DESC, id DESC"
            ).fetchall()
        finally:
            conn.close()
        return [
            ContactRead(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                subject=row["subject"],
                message=row["message"],
                submitted_at=from_db_datetime(row["submitted_at"]),
            )
            for row in rows
        ]
