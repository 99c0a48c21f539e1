# =============================================================================
# Health Check Routes
# =============================================================================
"""
Health check endpoints for monitoring.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from job_tracker import __version__
from job_tracker.api.dependencies import get_app_settings, get_database
from job_tracker.config import Settings
from job_tracker.database import DatabaseManager


# -----------------------------------------------------------------------------
# Router Setup
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/health", tags=["Health"])


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------
class HealthStatus(BaseModel):
    """
    Health check response model.

    Attributes:
        status: Current health status (healthy, unhealthy).
        timestamp: Time of the health check.
        version: Application version.
        environment: Current environment (development, staging, production).
        database: Database connectivity status.
        schema_version: Schema version reached at startup.
    """

    status: Literal["healthy", "unhealthy"] = Field(
        description="Current health status"
    )
    timestamp: datetime = Field(
        description="Time of the health check"
    )
    version: str = Field(
        description="Application version"
    )
    environment: str = Field(
        description="Current environment"
    )
    database: Literal["healthy", "unhealthy"] = Field(
        description="Database connectivity"
    )
    schema_version: Optional[int] = Field(
        None,
        description="Database schema version"
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.get(
    "",
    response_model=HealthStatus,
    summary="Health Check",
    description="Returns service and database health."
)
async def health_check(
    db: DatabaseManager = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> HealthStatus:
    """
    Perform a health check including a database round-trip.

    Returns:
        HealthStatus: Health status information.
    """
    db_healthy = await db.health_check()

    return HealthStatus(
        status="healthy" if db_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.app_env,
        database="healthy" if db_healthy else "unhealthy",
        schema_version=db.schema_version,
    )
