# =============================================================================
# Database Manager
# =============================================================================
"""
Owner of the SQLite job store's engine, schema and sessions.

Nothing here is global. Whoever needs the store (the API lifespan, a script,
a test fixture) builds a `DatabaseManager`, calls `connect()` to open the
engine and bring the schema up to date, and `disconnect()` when done.

Example:
    from job_tracker.database import DatabaseConfig, DatabaseManager

    async with DatabaseManager(DatabaseConfig(url="sqlite+aiosqlite:///./jobs.db")) as db:
        async with db.session() as session:
            jobs = await JobApplicationService(session).list_all()
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator, Optional, Self

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from job_tracker.database.migrations import apply_migrations


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """
    Settings for opening the job store.

    Attributes:
        url: SQLAlchemy async URL, e.g. sqlite+aiosqlite:///./jobs.db.
        connect_timeout: Seconds SQLite waits for a lock on the database file.
        echo: Log every SQL statement.
        migrate_on_connect: Apply pending schema migrations in connect().
    """

    url: str
    connect_timeout: int = 10
    echo: bool = False
    migrate_on_connect: bool = True

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("A database URL must be provided")
        if self.connect_timeout < 1:
            raise ValueError(
                f"connect_timeout must be a positive number of seconds, "
                f"got {self.connect_timeout}"
            )


# -----------------------------------------------------------------------------
# Manager
# -----------------------------------------------------------------------------
class DatabaseManager:
    """
    Explicit connect → migrate → disconnect lifecycle for the job store.

    Also usable as an async context manager, which connects on entry and
    always disconnects on exit.

    Attributes:
        config: The configuration the manager was built with.
        schema_version: Schema version after the last migration run.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None
        self._schema_version: Optional[int] = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------
    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def schema_version(self) -> Optional[int]:
        return self._schema_version

    @property
    def engine(self) -> AsyncEngine:
        """
        The open async engine.

        Raises:
            RuntimeError: If connect() has not been called.
        """
        return self._require_connection()[0]

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """
        Factory for sessions bound to the open engine.

        Raises:
            RuntimeError: If connect() has not been called.
        """
        return self._require_connection()[1]

    def _require_connection(
        self,
    ) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        if self._engine is None or self._sessions is None:
            raise RuntimeError("Job store is not open; call connect() first")
        return self._engine, self._sessions

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    async def connect(self) -> None:
        """
        Open the engine, check it answers and migrate the schema.

        A second call while connected only logs a warning.

        Raises:
            ConnectionError: If the database does not answer a trivial query.
        """
        if self._engine is not None:
            logger.warning("Job store already open, ignoring connect()")
            return

        logger.info(f"Opening job store at {self._config.url}")

        self._engine = create_async_engine(
            self._config.url,
            echo=self._config.echo,
            connect_args={"timeout": self._config.connect_timeout},
        )
        # Rows returned by a service stay readable after its session commits
        self._sessions = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        if not await self.health_check():
            await self.disconnect()
            raise ConnectionError(f"Could not open job store at {self._config.url}")

        if self._config.migrate_on_connect:
            await self.migrate()

        logger.info("Job store ready")

    async def migrate(self) -> int:
        """
        Apply pending schema migrations.

        Returns:
            The schema version after migrating.
        """
        self._schema_version = await apply_migrations(self.engine)
        return self._schema_version

    async def disconnect(self) -> None:
        """Dispose of the engine. Does nothing when already closed."""
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._sessions = None
        logger.info("Job store closed")

    async def health_check(self) -> bool:
        """
        Run `SELECT 1` against the store.

        Returns:
            False when not connected or when the query fails.
        """
        if self._engine is None:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Job store health check failed: {e}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------
    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One unit of work: commit when the block exits normally, roll back
        and re-raise when it raises.

        Yields:
            AsyncSession bound to the store.

        Raises:
            RuntimeError: If connect() has not been called.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    def __repr__(self) -> str:
        state = "open" if self.is_connected else "closed"
        return f"<DatabaseManager({state}, url={self._config.url!r})>"


# -----------------------------------------------------------------------------
# Factory
# -----------------------------------------------------------------------------
def create_database_manager(
    url: str,
    *,
    echo: bool = False,
    **kwargs,
) -> DatabaseManager:
    """
    Build an unconnected manager from a URL.

    Args:
        url: SQLAlchemy async URL of the job store.
        echo: Log every SQL statement.
        **kwargs: Further DatabaseConfig fields (connect_timeout,
            migrate_on_connect).

    Returns:
        DatabaseManager; call connect() before use.
    """
    return DatabaseManager(DatabaseConfig(url=url, echo=echo, **kwargs))
