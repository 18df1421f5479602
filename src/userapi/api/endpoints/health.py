"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from ...db.database import Database
from ..deps import get_database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
@router.get("/", include_in_schema=False)
async def health_check() -> dict:
    """
    Liveness check.

    Returns basic service status.
    """
    return {
        "status": "healthy",
        "service": "userapi"
    }


@router.get(
    "/ready",
    responses={
        200: {"description": "Database reachable"},
        503: {"description": "Database unreachable"},
    }
)
async def readiness_check(
    database: Database = Depends(get_database)
) -> dict:
    """
    Readiness check.

    Verifies the database answers before reporting ready.
    """
    if not await database.ping():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable"
        )

    return {
        "status": "ready",
        "service": "userapi",
        "database": database.url.get_backend_name()
    }
