"""
Spa Booking API - Health Check Route
=====================================

What:  GET /health for Docker health checks, load balancers and uptime probes.
How:   Pings the store (one SELECT 1) and reports connected/disconnected.

Always answers 200 while the process is up: the server is designed to stay
reachable when the store is down, so "unhealthy" is reported in the body.
"""

import logging
import time

from fastapi import APIRouter, Request

from spa_booking import __version__
from spa_booking.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request) -> HealthResponse:
    database = getattr(request.app.state, "database", None)
    connected = database is not None and await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
