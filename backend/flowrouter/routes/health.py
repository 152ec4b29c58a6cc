"""
FlowRouter Backend - Health Check Route
=======================================

What:  GET /health for container health checks and load balancers.
How:   An ordinary FastAPI path operation, registered before the flow
       router's catch-all route so it is matched first.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from flowrouter import __version__
from flowrouter.database import engine
from flowrouter.schemas.book import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    """Runs `SELECT 1` against the database and reports uptime."""
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
