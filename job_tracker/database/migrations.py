# =============================================================================
# Schema Migrations
# =============================================================================
"""
Versioned schema migrations for the SQLite application database.

The applied version is tracked in SQLite's `PRAGMA user_version` marker.
Migrations run in order, each in its own transaction, and only those newer
than the stored version are applied, so running them at every startup is
safe.

A database created by earlier releases carries no marker (version 0) and
may hold any generation of the `jobs` table. Migration 1 uses
`CREATE TABLE IF NOT EXISTS` and migration 2 is skipped when the column it
adds is already present, so every generation is adopted as-is and then
rebuilt into the current schema by migration 3.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Migration Definition
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Migration:
    """
    One schema upgrade step.

    Attributes:
        version: Schema version reached after this migration.
        description: Short human-readable summary.
        statements: SQL statements executed in order.
        skip_if_column: Column of `jobs` whose presence means the step was
            already made by an unversioned release; the statements are then
            skipped and only the version marker is advanced.
    """

    version: int
    description: str
    statements: tuple[str, ...]
    skip_if_column: Optional[str] = None


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        description="create jobs table",
        statements=(
            """
            CREATE TABLE IF NOT EXISTS jobs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                url TEXT NOT NULL,
                company TEXT,
                title TEXT,
                location TEXT,
                applied_date TEXT NOT NULL,
                status TEXT DEFAULT 'waiting'
                    CHECK(status IN ('waiting', 'rejected', 'interviewing'))
            )
            """,
        ),
    ),
    Migration(
        version=2,
        description="add status_updated_at column",
        statements=(
            "ALTER TABLE jobs ADD COLUMN status_updated_at TEXT",
        ),
        skip_if_column="status_updated_at",
    ),
    Migration(
        version=3,
        description="widen status vocabulary to the full application lifecycle",
        statements=(
            # Left behind when an earlier attempt failed after the CREATE
            "DROP TABLE IF EXISTS jobs_new",
            """
            CREATE TABLE jobs_new (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                url TEXT NOT NULL,
                company TEXT,
                title TEXT,
                location TEXT,
                applied_date TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'applied'
                    CONSTRAINT jobs_status_check
                    CHECK(status IN ('applied', 'interview', 'interviewing',
                                     'waiting', 'offer', 'accepted',
                                     'rejected', 'withdrawn')),
                status_updated_at TEXT
            )
            """,
            """
            INSERT INTO jobs_new (id, url, company, title, location,
                                  applied_date, status, status_updated_at)
            SELECT id, url, company, title, location, applied_date,
                   COALESCE(status, 'waiting'), status_updated_at
            FROM jobs
            """,
            "DROP TABLE jobs",
            "ALTER TABLE jobs_new RENAME TO jobs",
            "CREATE INDEX IF NOT EXISTS ix_jobs_applied_date ON jobs (applied_date)",
        ),
    ),
)

LATEST_VERSION = MIGRATIONS[-1].version


# -----------------------------------------------------------------------------
# Version Marker
# -----------------------------------------------------------------------------
async def get_schema_version(conn: AsyncConnection) -> int:
    """Read the schema version marker of the connected database."""
    result = await conn.exec_driver_sql("PRAGMA user_version")
    return int(result.scalar_one())


async def _set_schema_version(conn: AsyncConnection, version: int) -> None:
    # PRAGMA values cannot be bound as parameters
    await conn.exec_driver_sql(f"PRAGMA user_version = {int(version)}")


async def _jobs_has_column(conn: AsyncConnection, column: str) -> bool:
    result = await conn.exec_driver_sql("PRAGMA table_info(jobs)")
    return column in {row[1] for row in result.fetchall()}


# -----------------------------------------------------------------------------
# Runner
# -----------------------------------------------------------------------------
async def apply_migrations(engine: AsyncEngine) -> int:
    """
    Bring the database schema up to the latest version.

    Args:
        engine: Connected async engine.

    Returns:
        The schema version after migrating.

    Example:
        version = await apply_migrations(db.engine)
        assert version == LATEST_VERSION
    """
    async with engine.connect() as conn:
        current = await get_schema_version(conn)

    if current > LATEST_VERSION:
        logger.warning(
            f"Database schema version {current} is newer than this release "
            f"({LATEST_VERSION}); leaving it untouched"
        )
        return current

    pending = [m for m in MIGRATIONS if m.version > current]
    if not pending:
        logger.debug(f"Database schema is up to date (version {current})")
        return current

    for migration in pending:
        logger.info(
            f"Applying migration {migration.version}: {migration.description}"
        )
        async with engine.begin() as conn:
            if migration.skip_if_column and await _jobs_has_column(
                conn, migration.skip_if_column
            ):
                logger.info(
                    f"Column {migration.skip_if_column} already present, "
                    f"skipping migration {migration.version} statements"
                )
            else:
                for statement in migration.statements:
                    await conn.execute(text(statement))
            await _set_schema_version(conn, migration.version)
        current = migration.version

    logger.info(f"Database schema migrated to version {current}")
    return current
