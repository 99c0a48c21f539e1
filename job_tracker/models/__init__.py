# =============================================================================
# Models Package
# =============================================================================
"""
Pydantic models for API requests and responses.
"""

from job_tracker.models.job import (
    LEGACY_STATUSES,
    ApplicationStatus,
    ExtractedJobResponse,
    JobCreate,
    JobResponse,
    JobUpdate,
    ScrapeRequest,
    StatusTransitionsResponse,
    StatusUpdate,
)

__all__ = [
    "LEGACY_STATUSES",
    "ApplicationStatus",
    "ExtractedJobResponse",
    "JobCreate",
    "JobResponse",
    "JobUpdate",
    "ScrapeRequest",
    "StatusTransitionsResponse",
    "StatusUpdate",
]
