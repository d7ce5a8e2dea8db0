"""Health check routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from project_storage.data.db import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(response: Response) -> dict[str, str]:
    """Report whether the API can reach the storage database.

    Responds 503 with ``"database": "unavailable"`` while the database
    cannot be queried.
    """
    try:
        with get_session() as session:
            session.execute(text("SELECT 1"))
    except DBAPIError:
        logger.exception("Health check could not reach the database")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "healthy", "database": "ok"}
