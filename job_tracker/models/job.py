# =============================================================================
# Job Application Pydantic Models
# =============================================================================
"""
Pydantic models for job application API requests and responses.

These models handle validation, serialization, and documentation
for all job-related API operations. They are separate from the
SQLAlchemy ORM models in job_tracker/database/models.py.

Usage:
    from job_tracker.models.job import ApplicationStatus, JobCreate, JobResponse

    data = JobCreate(url="https://www.indeed.com/viewjob?jk=abc123")
    response = JobResponse.model_validate(job_orm_instance)
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------
class ApplicationStatus(str, Enum):
    """
    Valid status values for job applications.

    The status follows a lifecycle:
    - applied: Application submitted (initial state)
    - interview: An interview has been scheduled
    - interviewing: In the interview process
    - waiting: Following up, waiting to hear back
    - offer: Received an offer
    - accepted: Offer accepted (terminal)
    - rejected: Application rejected (terminal)
    - withdrawn: Withdrew the application (terminal)
    """

    APPLIED = "applied"
    INTERVIEW = "interview"
    INTERVIEWING = "interviewing"
    WAITING = "waiting"
    OFFER = "offer"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


# Vocabulary of the first schema generation
LEGACY_STATUSES = frozenset(
    {
        ApplicationStatus.WAITING,
        ApplicationStatus.REJECTED,
        ApplicationStatus.INTERVIEWING,
    }
)


# -----------------------------------------------------------------------------
# Request Models
# -----------------------------------------------------------------------------
class ScrapeRequest(BaseModel):
    """Schema for a scrape request."""

    url: str = Field(
        ...,
        min_length=1,
        description="Job listing URL to scrape",
        examples=["https://www.linkedin.com/jobs/view/123456"],
    )


class JobCreate(BaseModel):
    """
    Schema for recording a new job application.

    Only the URL is required; scraped or manually entered fields are
    optional because extraction is best-effort.

    Attributes:
        url: Job listing URL (http or https).
        company: Hiring company name.
        title: Position title.
        location: Job location.
        applied_date: Date the application was sent (defaults to today).
        status: Initial status (defaults to applied).
    """

    url: str = Field(
        ...,
        min_length=1,
        description="Job listing URL",
        examples=["https://www.indeed.com/viewjob?jk=abc123"],
    )
    company: Optional[str] = Field(None, max_length=300)
    title: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=300)
    applied_date: Optional[date] = Field(
        None,
        description="Application date (defaults to today)",
    )
    status: ApplicationStatus = Field(
        ApplicationStatus.APPLIED,
        description="Initial application status",
    )


class JobUpdate(BaseModel):
    """Schema for a partial update of an existing job application."""

    company: Optional[str] = Field(None, max_length=300)
    title: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=300)
    status: Optional[ApplicationStatus] = Field(None)

    model_config = ConfigDict(extra="forbid")


class StatusUpdate(BaseModel):
    """Schema for a status transition request."""

    status: ApplicationStatus = Field(..., description="Desired status")


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------
class ExtractedJobResponse(BaseModel):
    """Schema for scrape results; any field may be null."""

    url: str
    company: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None


class JobResponse(BaseModel):
    """Schema for job application responses."""

    id: int = Field(..., description="Unique identifier")
    url: str = Field(..., description="Job listing URL")
    company: Optional[str] = Field(None, description="Company name")
    title: Optional[str] = Field(None, description="Position title")
    location: Optional[str] = Field(None, description="Job location")
    applied_date: date = Field(..., description="Application date")
    status: ApplicationStatus = Field(..., description="Application status")
    status_updated_at: Optional[date] = Field(
        None,
        description="Date of the last status change",
    )

    model_config = ConfigDict(from_attributes=True)


class StatusTransitionsResponse(BaseModel):
    """Schema listing the statuses reachable from a given status."""

    status: ApplicationStatus
    transitions: list[ApplicationStatus]
    is_terminal: bool
