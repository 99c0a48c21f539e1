# =============================================================================
# Database ORM Models
# =============================================================================
"""
SQLAlchemy ORM models for the Job Application Tracker.

These models map to the tables created by the versioned migrations in
job_tracker/database/migrations.py.
"""

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from job_tracker.models.job import ApplicationStatus
from job_tracker.services.status_lifecycle import TERMINAL_STATUSES


STATUS_VALUES = tuple(status.value for status in ApplicationStatus)
TERMINAL_VALUES = frozenset(status.value for status in TERMINAL_STATUSES)


# -----------------------------------------------------------------------------
# Base Model
# -----------------------------------------------------------------------------
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides common functionality and type annotations.
    """

    pass


# -----------------------------------------------------------------------------
# JobApplication Model
# -----------------------------------------------------------------------------
class JobApplication(Base):
    """
    ORM model for the jobs table.

    Represents one submitted job application.

    Attributes:
        id: Auto-incrementing integer identifier.
        url: Job listing URL.
        company: Hiring company name (may be unknown).
        title: Position title (may be unknown).
        location: Job location (may be unknown).
        applied_date: Date the application was sent.
        status: Current lifecycle status.
        status_updated_at: Date of the last status change (None until the
            first transition).
    """

    __tablename__ = "jobs"
    # The table, its CHECK and its index are created by migrations.py and never
    # by metadata.create_all; these declarations mirror that schema.
    __table_args__ = (
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in STATUS_VALUES)),
            name="jobs_status_check",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    company: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    applied_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ApplicationStatus.APPLIED.value,
        doc="Current application status",
    )
    status_updated_at: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        """String representation of the job application."""
        return (
            f"<JobApplication(id={self.id}, status={self.status}, "
            f"company={self.company!r}, title={self.title!r})>"
        )

    @property
    def is_terminal(self) -> bool:
        """Check if the application has reached a final status."""
        return self.status in TERMINAL_VALUES
