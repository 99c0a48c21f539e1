# =============================================================================
# Shared Test Fixtures
# =============================================================================
"""
Fixtures shared across the test-suite: temporary databases and canned job
listing pages.
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from job_tracker.database import DatabaseConfig, DatabaseManager


# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """
    URL of a fresh SQLite database file.

    Args:
        tmp_path: pytest temporary directory.

    Returns:
        SQLAlchemy async URL.
    """
    return f"sqlite+aiosqlite:///{tmp_path / 'jobs.db'}"


@pytest_asyncio.fixture
async def database(database_url: str) -> AsyncGenerator[DatabaseManager, None]:
    """
    Connected and migrated database manager.

    Yields:
        DatabaseManager instance, disconnected after the test.
    """
    db = DatabaseManager(DatabaseConfig(url=database_url))
    await db.connect()
    yield db
    await db.disconnect()


# -----------------------------------------------------------------------------
# Page Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def austin_posting() -> dict:
    """JobPosting with a full postal address."""
    return {
        "@type": "JobPosting",
        "title": "Engineer",
        "hiringOrganization": {"name": "Acme"},
        "jobLocation": {
            "address": {
                "addressLocality": "Austin",
                "addressRegion": "TX",
                "addressCountry": "US",
            }
        },
    }


@pytest.fixture
def linkedin_html() -> str:
    """LinkedIn job page without Open Graph tags or a document title."""
    return """
    <html><body>
        <section class="top-card-layout">
          <h1 class="topcard__title">Staff Engineer</h1>
          <a class="topcard__org-name-link" href="/company/initech">
            Initech
          </a>
          <span class="topcard__flavor--bullet">
            San Francisco, CA
          </span>
        </section>
    </body></html>
    """
