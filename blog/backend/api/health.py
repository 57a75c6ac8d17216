"""
Health Check Endpoints.

    GET /health         liveness: the process answers
    GET /health/ready   readiness: the database answers SELECT 1 within
                        READY_TIMEOUT_SECONDS, otherwise 503

These sit outside the response envelope so load balancers can read them
without knowing it.
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from blog.backend.core.database import get_session_factory
from blog.backend.core.logging import get_logger
from blog.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)

READY_TIMEOUT_SECONDS = 5


async def check_database() -> dict[str, Any]:
    """Run SELECT 1 and report status with latency, or the error."""
    started = time.perf_counter()
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}
    return {"status": "healthy", "latency_ms": int((time.perf_counter() - started) * 1000)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    try:
        async with asyncio.timeout(READY_TIMEOUT_SECONDS):
            database = await check_database()
    except TimeoutError:
        database = {"status": "unhealthy", "error": "timed out"}

    body = {
        "status": database["status"],
        "checks": {"database": database},
        "timestamp": utc_now().isoformat(),
    }
    if database["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": body["checks"]})
        raise HTTPException(status_code=503, detail=body)
    return body
