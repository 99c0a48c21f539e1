# =============================================================================
# Job Tracker API Application
# =============================================================================
"""
Application factory for the Job Application Tracker HTTP API.

`create_app` wires settings, the lifespan that opens the job store and the
scraper, the routers, and the mapping from domain errors to HTTP responses.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from job_tracker import __version__
from job_tracker.api.routes import health, jobs
from job_tracker.config import Settings, get_settings
from job_tracker.database import create_database_manager
from job_tracker.services.job_service import (
    InvalidFieldError,
    InvalidJobIdError,
    InvalidUrlError,
    JobNotFoundError,
    JobServiceError,
)
from job_tracker.services.scraper import JobScraperService
from job_tracker.services.status_lifecycle import (
    InvalidStatusError,
    InvalidStatusTransitionError,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from the settings' log level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# -----------------------------------------------------------------------------
# Lifespan Management
# -----------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open and release the resources shared by all requests.

    Startup connects the database (applying pending migrations) and creates
    the shared scraper service; shutdown releases both.

    Args:
        app: Application whose `state.settings` drives the setup.
    """
    settings: Settings = app.state.settings
    logger.info(f"{settings.app_name} starting ({settings.app_env})")

    database = create_database_manager(
        settings.database_url,
        echo=settings.database_echo,
    )
    await database.connect()
    app.state.database = database
    logger.info(f"Database ready (schema version {database.schema_version})")

    scraper = JobScraperService.from_settings(settings)
    app.state.scraper = scraper

    try:
        yield
    finally:
        logger.info(f"{settings.app_name} stopping")
        await scraper.close()
        await database.disconnect()
        logger.info("Resources released")


# -----------------------------------------------------------------------------
# Exception Handlers
# -----------------------------------------------------------------------------
_ERROR_STATUS: list[tuple[type[Exception], int, str]] = [
    (InvalidJobIdError, status.HTTP_400_BAD_REQUEST, "invalid_job_id"),
    (JobNotFoundError, status.HTTP_404_NOT_FOUND, "job_not_found"),
    (InvalidStatusTransitionError, status.HTTP_409_CONFLICT, "invalid_transition"),
    (InvalidStatusError, 422, "invalid_status"),
    (InvalidFieldError, 422, "invalid_field"),
    (InvalidUrlError, 422, "invalid_url"),
    (JobServiceError, status.HTTP_400_BAD_REQUEST, "invalid_request"),
]


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    for exc_type, status_code, error in _ERROR_STATUS:

        async def domain_error_handler(
            request: Request,
            exc: Exception,
            status_code: int = status_code,
            error: str = error,
        ) -> JSONResponse:
            logger.info(f"{request.method} {request.url.path} rejected: {exc}")
            return JSONResponse(
                status_code=status_code,
                content={"error": error, "message": str(exc)},
            )

        app.add_exception_handler(exc_type, domain_error_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Answer 500 for anything the domain handlers did not claim."""
        logger.error(
            f"{request.method} {request.url.path} failed: {exc}", exc_info=True
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_server_error",
                "message": "The server could not complete the request",
                "details": str(exc) if settings.debug else None
            }
        )


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings to run with (defaults to `get_settings()`).

    Returns:
        FastAPI app; resources are opened by its lifespan, not here.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Job Application Tracker API",
        description=(
            "Track job applications: scrape listing pages for company, title "
            "and location, and manage applications through their status "
            "lifecycle."
        ),
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )
    app.state.settings = settings

    # -------------------------------------------------------------------------
    # CORS for a local frontend
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            f"http://localhost:{settings.api_port}",
            f"http://127.0.0.1:{settings.api_port}",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)

    # -------------------------------------------------------------------------
    # Route Registration
    # -------------------------------------------------------------------------
    app.include_router(health.router)
    app.include_router(jobs.router, prefix="/api")

    @app.get("/", tags=["root"])
    async def root() -> dict:
        return {
            "name": "Job Application Tracker API",
            "version": __version__,
            "status": "running",
            "docs": "/docs" if settings.debug else "disabled",
            "health": "/health"
        }

    return app
