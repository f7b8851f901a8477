"""
Notes API — Health Check Route
================================

What:  Health check endpoint for monitoring and container orchestrators.
How:   Pings MongoDB through the store connector and reports the result.

Status levels:
    - healthy:   MongoDB answers a ping
    - unhealthy: connector never connected, or the ping failed

The endpoint always answers 200; callers read the `status` field.
"""

import logging
import time

from fastapi import APIRouter, Request

from notes_api import __version__
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its MongoDB connection.",
)
async def health_check(request: Request) -> HealthResponse:
    store = request.app.state.store
    if await store.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        logger.warning("Health check: MongoDB unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
