"""
Help Center Backend — Health Check Route
==========================================

GET /health for Docker health checks and load balancers. The service is only
healthy when the database answers `SELECT 1`; otherwise 503 so traffic is
routed away.
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from helpcenter import __version__
from helpcenter.database import engine
from helpcenter.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
