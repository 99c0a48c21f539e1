# =============================================================================
# Database Package
# =============================================================================
"""
Database module for the Job Application Tracker.

Provides async connection management with versioned migrations, and the
ORM models.

Usage:

    from job_tracker.database import DatabaseManager, DatabaseConfig

    config = DatabaseConfig(url="sqlite+aiosqlite:///./jobs.db")
    async with DatabaseManager(config) as db:
        async with db.session() as session:
            result = await session.execute(query)
"""

from job_tracker.database.manager import (
    DatabaseConfig,
    DatabaseManager,
    create_database_manager,
)
from job_tracker.database.migrations import LATEST_VERSION, MIGRATIONS, apply_migrations
from job_tracker.database.models import Base, JobApplication


__all__ = [
    "DatabaseConfig",
    "DatabaseManager",
    "create_database_manager",
    "LATEST_VERSION",
    "MIGRATIONS",
    "apply_migrations",
    "Base",
    "JobApplication",
]
