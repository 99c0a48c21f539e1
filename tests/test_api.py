# =============================================================================
# API Route Tests
# =============================================================================
"""
End-to-end tests for the FastAPI routes using TestClient.

The application runs its real lifespan against a temporary SQLite file;
only the scraper is replaced so no network access is needed.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from job_tracker.api.dependencies import get_scraper
from job_tracker.api.main import create_app
from job_tracker.config import Settings
from job_tracker.services.scraper import ExtractedJobInfo


class FakeScraper:
    """Scraper stand-in that returns canned results."""

    def __init__(self) -> None:
        self.urls: list[str] = []

    async def scrape_job(self, url: str) -> ExtractedJobInfo:
        self.urls.append(url)
        if "linkedin.com" in url:
            return ExtractedJobInfo(url=url, company="Initech", title="Staff Engineer")
        return ExtractedJobInfo.empty(url)


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def scraper() -> FakeScraper:
    return FakeScraper()


@pytest.fixture
def client(database_url: str, scraper: FakeScraper) -> Generator[TestClient, None, None]:
    """
    Test client bound to a fresh database.

    Yields:
        TestClient with the lifespan running.
    """
    app = create_app(Settings(database_url=database_url, debug=True))
    app.dependency_overrides[get_scraper] = lambda: scraper

    with TestClient(app) as test_client:
        yield test_client


def create(client: TestClient, **fields) -> dict:
    payload = {"url": "https://www.indeed.com/viewjob?jk=abc123", **fields}
    response = client.post("/api/jobs", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


# -----------------------------------------------------------------------------
# Infrastructure Endpoints
# -----------------------------------------------------------------------------
class TestInfrastructure:
    """Tests for root and health endpoints."""

    def test_root(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        body = response.json()

        assert response.status_code == 200
        assert body["status"] == "healthy"
        assert body["database"] == "healthy"
        assert body["schema_version"] == 3
        assert body["environment"] == "development"


# -----------------------------------------------------------------------------
# Scraping
# -----------------------------------------------------------------------------
class TestScrapeEndpoint:
    """Tests for POST /api/jobs/scrape."""

    def test_scrape_returns_fields(self, client: TestClient, scraper: FakeScraper) -> None:
        url = "https://www.linkedin.com/jobs/view/123456"
        response = client.post("/api/jobs/scrape", json={"url": url})

        assert response.status_code == 200
        assert response.json() == {
            "url": url,
            "company": "Initech",
            "title": "Staff Engineer",
            "location": None,
        }
        assert scraper.urls == [url]

    def test_scrape_failure_is_not_an_error(self, client: TestClient) -> None:
        response = client.post("/api/jobs/scrape", json={"url": "https://unreachable.example"})

        assert response.status_code == 200
        assert response.json()["title"] is None

    def test_scrape_requires_url(self, client: TestClient) -> None:
        assert client.post("/api/jobs/scrape", json={}).status_code == 422


# -----------------------------------------------------------------------------
# CRUD
# -----------------------------------------------------------------------------
class TestJobEndpoints:
    """Tests for job CRUD endpoints."""

    def test_create_and_get(self, client: TestClient) -> None:
        created = create(client, company=" Acme ", applied_date="2024-05-01")

        assert created["company"] == "Acme"
        assert created["status"] == "applied"
        assert created["applied_date"] == "2024-05-01"
        assert created["status_updated_at"] is None

        response = client.get(f"/api/jobs/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_create_invalid_url(self, client: TestClient) -> None:
        response = client.post("/api/jobs", json={"url": "ftp://example.com"})

        assert response.status_code == 422
        assert response.json()["error"] == "invalid_url"

    def test_create_invalid_status(self, client: TestClient) -> None:
        response = client.post(
            "/api/jobs",
            json={"url": "https://example.com/job", "status": "ghosted"},
        )
        assert response.status_code == 422

    def test_list_and_filter(self, client: TestClient) -> None:
        first = create(client, applied_date="2024-01-01")
        second = create(client, applied_date="2024-02-01")
        client.put(f"/api/jobs/{first['id']}/status", json={"status": "rejected"})

        all_jobs = client.get("/api/jobs").json()
        rejected = client.get("/api/jobs", params={"status": "rejected"}).json()

        assert [job["id"] for job in all_jobs] == [second["id"], first["id"]]
        assert [job["id"] for job in rejected] == [first["id"]]

    def test_get_missing(self, client: TestClient) -> None:
        response = client.get("/api/jobs/999")

        assert response.status_code == 404
        assert response.json() == {
            "error": "job_not_found",
            "message": "Job with id 999 not found",
        }

    def test_get_invalid_id(self, client: TestClient) -> None:
        assert client.get("/api/jobs/0").status_code == 400

    def test_patch(self, client: TestClient) -> None:
        created = create(client, company="Acme")

        response = client.patch(
            f"/api/jobs/{created['id']}",
            json={"title": "  Senior   Engineer ", "status": "interview"},
        )
        body = response.json()

        assert response.status_code == 200
        assert body["company"] == "Acme"
        assert body["title"] == "Senior Engineer"
        assert body["status"] == "interview"
        assert body["status_updated_at"] is not None

    def test_patch_unknown_field(self, client: TestClient) -> None:
        created = create(client)

        response = client.patch(f"/api/jobs/{created['id']}", json={"url": "https://other.example"})

        assert response.status_code == 422

    def test_delete(self, client: TestClient) -> None:
        created = create(client)

        assert client.delete(f"/api/jobs/{created['id']}").status_code == 204
        assert client.get(f"/api/jobs/{created['id']}").status_code == 404
        assert client.delete(f"/api/jobs/{created['id']}").status_code == 404


# -----------------------------------------------------------------------------
# Status Lifecycle
# -----------------------------------------------------------------------------
class TestStatusEndpoints:
    """Tests for status transitions over HTTP."""

    def test_valid_transition(self, client: TestClient) -> None:
        created = create(client)

        response = client.put(f"/api/jobs/{created['id']}/status", json={"status": "interview"})

        assert response.status_code == 200
        assert response.json()["status"] == "interview"

    def test_invalid_transition_conflict(self, client: TestClient) -> None:
        created = create(client)

        response = client.put(f"/api/jobs/{created['id']}/status", json={"status": "accepted"})

        assert response.status_code == 409
        assert response.json()["error"] == "invalid_transition"
        assert client.get(f"/api/jobs/{created['id']}").json()["status"] == "applied"

    def test_unknown_status_value(self, client: TestClient) -> None:
        created = create(client)

        response = client.put(f"/api/jobs/{created['id']}/status", json={"status": "ghosted"})

        assert response.status_code == 422

    def test_transitions_listing(self, client: TestClient) -> None:
        response = client.get("/api/jobs/statuses/waiting/transitions")

        assert response.status_code == 200
        assert response.json() == {
            "status": "waiting",
            "transitions": ["interview", "interviewing", "offer", "rejected", "withdrawn"],
            "is_terminal": False,
        }

    def test_terminal_transitions_listing(self, client: TestClient) -> None:
        body = client.get("/api/jobs/statuses/accepted/transitions").json()

        assert body["transitions"] == []
        assert body["is_terminal"] is True
