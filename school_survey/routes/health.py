"""
School Survey Backend — Health Check Route
============================================

What:  Health check endpoint for deploy checks and load balancer probes.
How:   Runs SELECT 1 on the pooled engine kept on app.state.

Status levels:
    healthy:    database reachable (HTTP 200)
    unhealthy:  no engine or the probe failed (HTTP 503)
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from school_survey import __version__
from school_survey.schemas.submission import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
    description="Reports whether the service can reach its database.",
)
async def health_check(request: Request):
    """
    Probe the database and report the aggregate status.

    Returns:
        HealthResponse (200) when the probe succeeds, otherwise the same
        shape with status=unhealthy and HTTP 503.
    """
    settings = request.app.state.settings
    engine = getattr(request.app.state, "engine", None)
    checked_at = datetime.now(timezone.utc)

    try:
        if engine is None:
            raise RuntimeError("Database engine is not configured")
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        body = HealthResponse(
            status="unhealthy",
            database="disconnected",
            version=__version__,
            error="Database connection failed" if settings.is_production else str(e),
            checked_at=checked_at,
        )
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))

    return HealthResponse(
        status="healthy",
        database="connected",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        checked_at=checked_at,
    )
