"""
API router for health checks

Provides liveness and readiness probes.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime, timezone
import logging
from starlette.concurrency import run_in_threadpool

from sales_api.api.dependencies import get_database
from sales_api.db.session import Database

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    summary="Liveness probe",
    description="Check if the API is running"
)
async def health_check():
    """
    Check if the API is running

    Returns:
        Dict: Liveness status
    """
    return {"status": "ok", "timestamp": utc_timestamp()}


@router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Check if the API can reach its database"
)
async def readiness_check(database: Database = Depends(get_database)):
    """
    Check if the API is ready to receive traffic

    Returns:
        Dict: Readiness status
    """
    if not await run_in_threadpool(database.check_connection):
        logger.error("Readiness check failed: database unreachable")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed"
        )

    return {"status": "ready", "timestamp": utc_timestamp()}
