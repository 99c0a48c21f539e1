# =============================================================================
# Job Application Service
# =============================================================================
"""
Service layer for job application records.

Provides business logic for creating, listing, editing, deleting and
moving applications through the status lifecycle. Every mutation touches
one row within the caller's session transaction.

Usage:
    from job_tracker.services.job_service import JobApplicationService

    async with db.session() as session:
        service = JobApplicationService(session)
        job = await service.create(JobCreate(url="https://..."))
        await service.update_status(job.id, ApplicationStatus.INTERVIEW)
"""

import logging
from datetime import date
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlparse

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from job_tracker.database.models import JobApplication
from job_tracker.models.job import ApplicationStatus, JobCreate, JobUpdate
from job_tracker.services.scraper.normalizer import normalize_text
from job_tracker.services.status_lifecycle import (
    StatusLike,
    apply_transition,
    parse_status,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


ALLOWED_UPDATE_FIELDS = frozenset({"company", "title", "location", "status"})
TEXT_FIELDS = ("company", "title", "location")


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------
class JobServiceError(Exception):
    """Base exception for job record errors."""

    pass


class InvalidJobIdError(JobServiceError):
    """Identifier is not a positive integer."""

    def __init__(self, job_id: object) -> None:
        self.job_id = job_id
        super().__init__(f"Invalid job ID: {job_id!r}")


class JobNotFoundError(JobServiceError):
    """No job exists with the given identifier."""

    def __init__(self, job_id: int) -> None:
        self.job_id = job_id
        super().__init__(f"Job with id {job_id} not found")


class InvalidFieldError(JobServiceError):
    """An update named a field that cannot be edited."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Invalid field: {field}")


class InvalidUrlError(JobServiceError):
    """The job URL is missing or not HTTP(S)."""

    pass


# -----------------------------------------------------------------------------
# Validation Helpers
# -----------------------------------------------------------------------------
def validate_job_id(job_id: object) -> int:
    """
    Ensure an identifier is a positive integer.

    Raises:
        InvalidJobIdError: For booleans, non-integers and values <= 0.
    """
    if isinstance(job_id, bool) or not isinstance(job_id, int) or job_id <= 0:
        raise InvalidJobIdError(job_id)
    return job_id


def validate_url(url: Optional[str]) -> str:
    """
    Ensure a URL is present and uses the http or https scheme.

    Args:
        url: Raw URL from the caller.

    Returns:
        The trimmed URL.

    Raises:
        InvalidUrlError: If the URL is empty or malformed.
    """
    if not url or not isinstance(url, str) or not url.strip():
        raise InvalidUrlError("URL is required")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError("Invalid URL format - must be HTTP or HTTPS")
    return url


# -----------------------------------------------------------------------------
# Job Application Service Class
# -----------------------------------------------------------------------------
class JobApplicationService:
    """
    Service class for job application operations.

    All database operations use the provided async session.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the job application service.

        Args:
            session: SQLAlchemy async session for database operations.
        """
        self.session = session

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------
    async def create(self, data: JobCreate) -> JobApplication:
        """
        Record a new job application.

        Args:
            data: Application data, typically pre-filled from a scrape.

        Returns:
            Created JobApplication ORM instance.

        Raises:
            InvalidUrlError: If the URL is not HTTP(S).
            InvalidStatusError: If the status is outside the vocabulary.
        """
        url = validate_url(data.url)
        status = parse_status(data.status)

        job = JobApplication(
            url=url,
            company=normalize_text(data.company),
            title=normalize_text(data.title),
            location=normalize_text(data.location),
            applied_date=data.applied_date or date.today(),
            status=status.value,
        )

        self.session.add(job)
        await self.session.flush()
        await self.session.refresh(job)

        logger.info(
            f"Created job {job.id}: '{job.title}' at '{job.company}' "
            f"(status={job.status})"
        )

        return job

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------
    async def get(self, job_id: int) -> JobApplication:
        """
        Get a job application by ID.

        Raises:
            InvalidJobIdError: If the ID is not a positive integer.
            JobNotFoundError: If no such job exists.
        """
        job_id = validate_job_id(job_id)
        job = await self.session.get(JobApplication, job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    async def list_all(
        self,
        status: Optional[StatusLike] = None,
    ) -> list[JobApplication]:
        """
        List job applications, most recently applied first.

        Args:
            status: Optional status filter.

        Returns:
            Applications ordered by applied date (newest first), then ID.
        """
        query = select(JobApplication).order_by(
            JobApplication.applied_date.desc(),
            JobApplication.id.desc(),
        )
        if status is not None:
            query = query.where(JobApplication.status == parse_status(status).value)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------
    async def update_status(
        self,
        job_id: int,
        status: StatusLike,
        today: Optional[date] = None,
    ) -> JobApplication:
        """
        Move an application to a new status.

        Args:
            job_id: Application ID.
            status: Desired status.
            today: Date stamped on the change (defaults to today).

        Returns:
            The updated application.

        Raises:
            InvalidStatusError: If the status is outside the vocabulary.
            InvalidJobIdError: If the ID is not a positive integer.
            JobNotFoundError: If no such job exists.
            InvalidStatusTransitionError: If the lifecycle forbids the move.
        """
        desired = parse_status(status)
        job = await self.get(job_id)

        change = apply_transition(job.status, desired, today=today)
        job.status = change.status.value
        job.status_updated_at = change.changed_on
        await self.session.flush()

        logger.info(
            f"Job {job.id} status: {change.previous.value} -> {change.status.value}"
        )
        return job

    async def update_partial(
        self,
        job_id: int,
        updates: Union[JobUpdate, Mapping[str, Any]],
        today: Optional[date] = None,
    ) -> JobApplication:
        """
        Edit a subset of company, title, location and status.

        Text values are whitespace-normalized; an explicit None clears the
        field. A status that differs from the current one goes through the
        lifecycle and refreshes `status_updated_at`.

        Args:
            job_id: Application ID.
            updates: JobUpdate model or mapping of field names to values.
            today: Date stamped on a status change (defaults to today).

        Returns:
            The updated application.

        Raises:
            InvalidFieldError: If a field outside the allowed set is named.
            InvalidStatusError: If the status is outside the vocabulary.
            InvalidJobIdError: If the ID is not a positive integer.
            JobNotFoundError: If no such job exists.
            InvalidStatusTransitionError: If the lifecycle forbids the move.
        """
        if isinstance(updates, JobUpdate):
            updates = updates.model_dump(exclude_unset=True)
        elif not isinstance(updates, Mapping):
            raise JobServiceError("Updates must be a mapping")

        for key in updates:
            if key not in ALLOWED_UPDATE_FIELDS:
                raise InvalidFieldError(key)

        desired: Optional[ApplicationStatus] = None
        if "status" in updates:
            desired = parse_status(updates["status"])

        job = await self.get(job_id)

        for key in TEXT_FIELDS:
            if key in updates:
                setattr(job, key, normalize_text(updates[key]))

        if desired is not None and desired.value != job.status:
            change = apply_transition(job.status, desired, today=today)
            job.status = change.status.value
            job.status_updated_at = change.changed_on

        await self.session.flush()
        logger.info(f"Updated job {job.id}: {sorted(updates)}")
        return job

    # -------------------------------------------------------------------------
    # Delete Operations
    # -------------------------------------------------------------------------
    async def delete(self, job_id: int) -> None:
        """
        Delete a job application.

        Raises:
            InvalidJobIdError: If the ID is not a positive integer.
            JobNotFoundError: If no such job exists.
        """
        job = await self.get(job_id)
        await self.session.delete(job)
        await self.session.flush()
        logger.info(f"Deleted job {job_id}")
