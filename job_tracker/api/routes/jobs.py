# =============================================================================
# Job Application API Routes
# =============================================================================
"""
API routes for job application tracking.

Provides RESTful endpoints for:
- Scraping a job listing URL for company, title and location
- CRUD operations on job applications
- Status lifecycle transitions

All endpoints are prefixed with /jobs when registered.

Usage:
    from job_tracker.api.routes import jobs
    app.include_router(jobs.router, prefix="/api")
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from job_tracker.api.dependencies import get_job_service, get_scraper
from job_tracker.models.job import (
    ApplicationStatus,
    ExtractedJobResponse,
    JobCreate,
    JobResponse,
    JobUpdate,
    ScrapeRequest,
    StatusTransitionsResponse,
    StatusUpdate,
)
from job_tracker.services.job_service import JobApplicationService
from job_tracker.services.scraper import JobScraperService
from job_tracker.services.status_lifecycle import is_terminal, valid_transitions


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/jobs", tags=["jobs"])


# -----------------------------------------------------------------------------
# Scraping
# -----------------------------------------------------------------------------
@router.post(
    "/scrape",
    response_model=ExtractedJobResponse,
    summary="Scrape a job listing",
    description=(
        "Fetch a job listing page and extract company, title and location. "
        "Fields that could not be found are null."
    ),
)
async def scrape_job(
    data: ScrapeRequest,
    scraper: JobScraperService = Depends(get_scraper),
) -> ExtractedJobResponse:
    """
    Scrape a job listing URL.

    Scraping never fails the request: an unreachable page or one without
    recognizable job data yields null fields, and the client decides
    whether to ask the user to fill them in.

    Example:
        POST /api/jobs/scrape
        {"url": "https://www.linkedin.com/jobs/view/123456"}
    """
    info = await scraper.scrape_job(data.url)
    return ExtractedJobResponse(**info.to_dict())


# -----------------------------------------------------------------------------
# Create Operations
# -----------------------------------------------------------------------------
@router.post(
    "",
    response_model=JobResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a job application",
    responses={
        201: {"description": "Job application created"},
        422: {"description": "Invalid URL or request body"},
    },
)
async def create_job(
    data: JobCreate,
    service: JobApplicationService = Depends(get_job_service),
) -> JobResponse:
    """
    Record a new job application.

    Example:
        POST /api/jobs
        {"url": "https://www.indeed.com/viewjob?jk=abc", "company": "Acme"}
    """
    job = await service.create(data)
    return JobResponse.model_validate(job)


# -----------------------------------------------------------------------------
# Read Operations
# -----------------------------------------------------------------------------
@router.get(
    "",
    response_model=list[JobResponse],
    summary="List job applications",
    description="List applications, most recently applied first.",
)
async def list_jobs(
    status_filter: Optional[ApplicationStatus] = Query(
        None,
        alias="status",
        description="Filter by status",
    ),
    service: JobApplicationService = Depends(get_job_service),
) -> list[JobResponse]:
    """
    List job applications.

    Example:
        GET /api/jobs?status=interviewing
    """
    jobs = await service.list_all(status=status_filter)
    return [JobResponse.model_validate(job) for job in jobs]


@router.get(
    "/statuses/{current}/transitions",
    response_model=StatusTransitionsResponse,
    summary="Allowed next statuses",
)
async def get_transitions(current: ApplicationStatus) -> StatusTransitionsResponse:
    """
    List the statuses an application in `current` can move to.

    Example:
        GET /api/jobs/statuses/waiting/transitions
    """
    order = list(ApplicationStatus)
    return StatusTransitionsResponse(
        status=current,
        transitions=sorted(valid_transitions(current), key=order.index),
        is_terminal=is_terminal(current),
    )


@router.get(
    "/{job_id}",
    response_model=JobResponse,
    summary="Get a job application",
    responses={404: {"description": "Job not found"}},
)
async def get_job(
    job_id: int,
    service: JobApplicationService = Depends(get_job_service),
) -> JobResponse:
    """Get a job application by ID."""
    return JobResponse.model_validate(await service.get(job_id))


# -----------------------------------------------------------------------------
# Update Operations
# -----------------------------------------------------------------------------
@router.patch(
    "/{job_id}",
    response_model=JobResponse,
    summary="Edit a job application",
    responses={
        404: {"description": "Job not found"},
        409: {"description": "Status transition not allowed"},
    },
)
async def update_job(
    job_id: int,
    data: JobUpdate,
    service: JobApplicationService = Depends(get_job_service),
) -> JobResponse:
    """
    Edit company, title, location and/or status.

    Example:
        PATCH /api/jobs/3
        {"company": "Acme Corp"}
    """
    job = await service.update_partial(job_id, data)
    return JobResponse.model_validate(job)


@router.put(
    "/{job_id}/status",
    response_model=JobResponse,
    summary="Change application status",
    responses={
        404: {"description": "Job not found"},
        409: {"description": "Status transition not allowed"},
    },
)
async def update_status(
    job_id: int,
    data: StatusUpdate,
    service: JobApplicationService = Depends(get_job_service),
) -> JobResponse:
    """
    Move an application to a new status.

    Example:
        PUT /api/jobs/3/status
        {"status": "interview"}
    """
    job = await service.update_status(job_id, data.status)
    return JobResponse.model_validate(job)


# -----------------------------------------------------------------------------
# Delete Operations
# -----------------------------------------------------------------------------
@router.delete(
    "/{job_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a job application",
    responses={404: {"description": "Job not found"}},
)
async def delete_job(
    job_id: int,
    service: JobApplicationService = Depends(get_job_service),
) -> Response:
    """Delete a job application."""
    await service.delete(job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
