# =============================================================================
# API Dependencies
# =============================================================================
"""
FastAPI dependencies resolving the resources owned by the application
lifespan (database manager, scraper service) from `app.state`.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from job_tracker.config import Settings
from job_tracker.database import DatabaseManager
from job_tracker.services.job_service import JobApplicationService
from job_tracker.services.scraper import JobScraperService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_database(request: Request) -> DatabaseManager:
    """Database manager created by the application lifespan."""
    return request.app.state.database


def get_scraper(request: Request) -> JobScraperService:
    """Scraper service created by the application lifespan."""
    return request.app.state.scraper


async def get_session(
    db: DatabaseManager = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped database session.

    Commits after the handler returns, rolls back if it raises.

    Yields:
        AsyncSession for the request lifecycle.
    """
    async with db.session() as session:
        yield session


async def get_job_service(
    session: AsyncSession = Depends(get_session),
) -> JobApplicationService:
    """
    Dependency to get a JobApplicationService bound to the request session.

    Args:
        session: Database session from dependency injection.

    Returns:
        JobApplicationService instance configured with the session.
    """
    return JobApplicationService(session)
