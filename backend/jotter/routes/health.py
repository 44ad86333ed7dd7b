"""
Jotter Backend: Health Check Route
===================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings the note store's database with SELECT 1 and reports the result.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Depends

from jotter import __version__
from jotter.schemas.note import HealthResponse
from jotter.services.note_store import NoteStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its database.",
)
async def health_check(store: NoteStore = Depends(get_store)) -> HealthResponse:
    """Check the health of the service and the database behind the store."""
    db_status = "connected"
    overall = "healthy"

    if not await store.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
