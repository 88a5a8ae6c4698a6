"""
Cash Card API: Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   create_router(engine) binds the check to the engine the app was
       assembled with; each request runs `SELECT 1` on it.
Who:   Called by container health checks, load balancers and monitoring.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (the cash card lookup cannot succeed)
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from cashcard import __version__
from cashcard.schemas.cash_card import HealthResponse

logger = logging.getLogger(__name__)

_start_time = time.time()


def create_router(engine: AsyncEngine) -> APIRouter:
    """Build the /health router checking `engine`."""
    router = APIRouter(tags=["Health"])

    @router.get(
        "/health",
        response_model=HealthResponse,
        summary="Service health check",
        description="Returns the health status of the service and its database.",
    )
    async def health_check() -> HealthResponse:
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

    return router
