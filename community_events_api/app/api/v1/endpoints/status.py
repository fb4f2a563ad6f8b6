"""
Health endpoint for API v1.

Reports that the API is up and whether the database answers a trivial
query.  It needs no authentication so that load balancers can poll it.
"""

import logging
import sqlite3
from datetime import datetime, timezone

from fastapi import APIRouter

from community_events_api.app.core.db import get_connection
from community_events_api.app.schemas.status import StatusRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=StatusRead)
async def get_status() -> StatusRead:
    database = "connected"
    try:
        conn = get_connection()
        try:
            conn.execute("SELECT 1").fetchone()
        finally:
            conn.close()
    except sqlite3.Error:
        logger.exception("Database health check failed")
        database = "unavailable"
    return StatusRead(
        status="working",
        message="API is functioning",
        timestamp=datetime.now(timezone.utc),
        database=database,
    )
