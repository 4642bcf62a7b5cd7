"""
Notes API — Health Check Route
================================

What:  Health check endpoint for monitoring and load balancer health checks.
How:   Runs SELECT 1 through the app's engine. 200 when the database answers,
       503 otherwise. Not authenticated and not access-logged.
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from notes_api import __version__
from notes_api.database import Database
from notes_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request, response: Response) -> HealthResponse:
    database: Database = request.app.state.database
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
