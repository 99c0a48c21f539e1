#!/usr/bin/env python
# =============================================================================
# Application Runner
# =============================================================================
"""
Entry point script for running the Job Application Tracker API.

Usage:
    uv run python run.py
    uv run python run.py --reload
    uv run python run.py --host 127.0.0.1 --port 8000
"""

import argparse

import uvicorn

from job_tracker.config import get_settings


def main() -> None:
    """
    Parse command line arguments and start uvicorn.
    """
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run the Job Application Tracker API")
    parser.add_argument("--host", default=settings.api_host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.api_port, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    uvicorn.run(
        "job_tracker.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
