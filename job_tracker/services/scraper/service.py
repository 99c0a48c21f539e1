# =============================================================================
# Job Scraper Service
# =============================================================================
"""
Service for scraping company, title and location from job listing pages.

Fetches the page once and runs the extraction stages in priority order:

1. JSON-LD JobPosting structured data
2. Open Graph title / document title
3. Site-specific profiles for the URL's job board
4. Geo meta tag location

Each stage only fills fields that are still empty. Scraping is best-effort:
any failure yields a record with all fields set to None, never an exception.

Usage:
    from job_tracker.services.scraper import JobScraperService

    async with JobScraperService() as scraper:
        info = await scraper.scrape_job("https://linkedin.com/jobs/view/123456")
"""

import asyncio
import logging
from typing import Callable, Optional

import httpx

from job_tracker.config import Settings
from job_tracker.config.settings import DEFAULT_USER_AGENT
from job_tracker.services.scraper.generic import extract_location, extract_title
from job_tracker.services.scraper.models import ExtractedJobInfo, JobFields, JobPage
from job_tracker.services.scraper.sites import (
    SiteProfile,
    extract_site_specific,
    get_site_profiles,
)
from job_tracker.services.scraper.structured_data import (
    collect_json_ld_scripts,
    extract_from_json_ld,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
DEFAULT_TIMEOUT = 10.0  # seconds
DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

ExtractionStage = Callable[[JobPage], Optional[JobFields]]


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------
class ScraperError(Exception):
    """Base class for failures inside the scraper."""

    pass


class FetchError(ScraperError):
    """The job page could not be downloaded (network, deadline or non-2xx)."""

    pass


# -----------------------------------------------------------------------------
# Scraper Service
# -----------------------------------------------------------------------------
class JobScraperService:
    """
    Service for scraping job listings from arbitrary job board URLs.

    Attributes:
        http_client: Client used for page downloads.
        timeout: Overall deadline in seconds for one fetch.
        profiles: Site profiles in priority order.

    Example:
        scraper = JobScraperService(timeout=5.0)
        try:
            info = await scraper.scrape_job("https://www.indeed.com/viewjob?jk=1")
            print(f"Title: {info.title}")
        finally:
            await scraper.close()
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        profiles: Optional[list[SiteProfile]] = None,
    ) -> None:
        """
        Args:
            http_client: Client to reuse; the service creates and owns one
                when omitted.
            user_agent: Browser user agent sent with every request.
            timeout: Deadline in seconds for one page download.
            profiles: Site profiles in priority order (defaults to the registry).
        """
        self._owned_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent, **DEFAULT_HEADERS},
            follow_redirects=True,
        )
        self.timeout = timeout
        self.profiles = profiles if profiles is not None else get_site_profiles()

    @classmethod
    def from_settings(cls, settings: Settings) -> "JobScraperService":
        """Build a service using the configured timeout and user agent."""
        return cls(
            user_agent=settings.scraper_user_agent,
            timeout=settings.scraper_timeout,
        )

    async def close(self) -> None:
        """Release the HTTP client, unless it was injected by the caller."""
        if self._owned_client and not self.http_client.is_closed:
            await self.http_client.aclose()
            logger.debug("Scraper HTTP client released")

    async def __aenter__(self) -> "JobScraperService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------
    async def scrape_job(self, url: str) -> ExtractedJobInfo:
        """
        Scrape company, title and location from a job listing URL.

        Never raises: fetch failures, timeouts and parse errors all produce
        a record whose fields are None.

        Args:
            url: Listing page to read.

        Returns:
            Extracted, normalized job info.
        """
        logger.info(f"Scraping job listing: {url}")

        try:
            html = await self._fetch_html(url)
            logger.debug(f"Fetched {len(html)} characters from {url}")

            fields = self.extract(JobPage.from_html(url, html))
        except FetchError as e:
            logger.warning(f"Failed to fetch {url}: {e}")
            return ExtractedJobInfo.empty(url)
        except Exception as e:
            logger.error(f"Scraping error for {url}: {e}", exc_info=True)
            return ExtractedJobInfo.empty(url)

        info = ExtractedJobInfo.from_fields(url, fields)
        logger.info(
            f"Scraped job: '{info.title}' at '{info.company}' ({info.location})"
        )
        return info

    def extract(self, page: JobPage) -> JobFields:
        """
        Fold the extraction stages over a fetched page.

        Args:
            page: The fetched page.

        Returns:
            Merged job fields (not yet normalized for output).
        """
        fields = JobFields()
        for name, stage in self._stages():
            if fields.is_complete:
                break
            result = stage(page)
            if result is not None:
                logger.debug(f"Stage '{name}' produced {result}")
            fields = fields.merge(result)
        return fields

    def get_supported_sites(self) -> list[str]:
        """
        Get list of job sites with dedicated profiles.

        Returns:
            List of profile names.
        """
        return [profile.name for profile in self.profiles]

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------
    def _stages(self) -> list[tuple[str, ExtractionStage]]:
        """Extraction stages in priority order."""
        return [
            ("structured_data", self._structured_data),
            ("page_title", lambda page: JobFields(title=extract_title(page.soup))),
            ("site_profiles", self._site_profiles),
            ("geo_meta", lambda page: JobFields(location=extract_location(page.soup))),
        ]

    def _structured_data(self, page: JobPage) -> Optional[JobFields]:
        return extract_from_json_ld(collect_json_ld_scripts(page.soup))

    def _site_profiles(self, page: JobPage) -> JobFields:
        return extract_site_specific(page, self.profiles)

    async def _fetch_html(self, url: str) -> str:
        """
        Fetch HTML content from URL within the overall deadline.

        Args:
            url: URL to fetch.

        Returns:
            HTML content as string.

        Raises:
            FetchError: If the request fails, times out or is not a 2xx.
        """
        try:
            async with asyncio.timeout(self.timeout):
                response = await self.http_client.get(url)
        except TimeoutError as e:
            raise FetchError(f"Request timed out after {self.timeout}s") from e
        except httpx.TimeoutException as e:
            raise FetchError(f"Transport timeout: {e}") from e
        except httpx.RequestError as e:
            raise FetchError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise FetchError(
                f"Server answered {response.status_code} {response.reason_phrase}"
            )

        return response.text


# -----------------------------------------------------------------------------
# Convenience Entry Point
# -----------------------------------------------------------------------------
async def scrape_job_page(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> ExtractedJobInfo:
    """
    Scrape a single job page with a short-lived service.

    Args:
        url: Job listing URL.
        timeout: Overall request deadline in seconds.

    Returns:
        Extracted job info; all fields None on failure.
    """
    async with JobScraperService(timeout=timeout) as scraper:
        return await scraper.scrape_job(url)
