# =============================================================================
# Site-Specific Job Board Profiles
# =============================================================================
"""
Site-specific heuristics for filling gaps the generic stages leave behind.

Each profile is tied to a domain token and carries ordered selector chains
for the fields it knows how to find. A chain is an alternation: the first
selector that yields non-empty text wins.

Note: Job board HTML structures change frequently. Profiles should be
designed to degrade gracefully when selectors fail to match.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional, Pattern

from bs4 import BeautifulSoup

from job_tracker.services.scraper.models import JobFields, JobPage
from job_tracker.services.scraper.normalizer import normalize_text


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Base Profile Abstract Class
# -----------------------------------------------------------------------------
class SiteProfile(ABC):
    """
    Abstract base class for job board profiles.

    Subclasses declare the domain token they handle and implement the
    extraction, while inheriting the selector and regex helpers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the job board this profile handles."""
        pass

    @property
    @abstractmethod
    def domain_token(self) -> str:
        """Return the string whose presence in a URL selects this profile."""
        pass

    def matches(self, url: str) -> bool:
        """
        Check if this profile applies to the given URL.

        Matching is plain substring containment, not a domain parse.

        Args:
            url: The job listing URL.

        Returns:
            True if the profile should run.
        """
        return self.domain_token in url.lower()

    @abstractmethod
    def extract(self, page: JobPage) -> JobFields:
        """
        Extract whatever fields this profile knows how to find.

        Args:
            page: The fetched page.

        Returns:
            Partial job fields.
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------
    def _extract_text(
        self,
        soup: BeautifulSoup,
        selectors: list[str],
    ) -> Optional[str]:
        """
        Extract text using multiple CSS selectors with fallback.

        Args:
            soup: BeautifulSoup object to search.
            selectors: List of CSS selectors to try in order.

        Returns:
            First non-empty text among the matches of the first selector
            that has one, or None.
        """
        for selector in selectors:
            for element in soup.select(selector):
                text = normalize_text(element.get_text())
                if text:
                    return text
        return None

    def _extract_match(self, html: str, patterns: list[Pattern[str]]) -> Optional[str]:
        """
        Return the first capture group of the first matching pattern.

        Args:
            html: Raw HTML to search.
            patterns: Compiled patterns to try in order.

        Returns:
            Captured value or None.
        """
        for pattern in patterns:
            match = pattern.search(html)
            if match and match.group(1).strip():
                return match.group(1)
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(domain_token={self.domain_token!r})>"


# -----------------------------------------------------------------------------
# LinkedIn Profile
# -----------------------------------------------------------------------------
class LinkedInProfile(SiteProfile):
    """
    Profile for LinkedIn public job pages.

    Handles job URLs like:
    - https://www.linkedin.com/jobs/view/123456
    """

    TITLE_SELECTORS = [
        ".top-card-layout__title",
        "h1.topcard__title",
    ]
    COMPANY_SELECTORS = [
        ".topcard__org-name-link",
        "a.topcard__org-name-link",
        ".top-card-layout__card a.topcard__org-name-link",
    ]
    LOCATION_SELECTORS = [
        ".topcard__flavor--bullet",
        ".top-card-layout__second-subline span",
    ]

    @property
    def name(self) -> str:
        return "linkedin"

    @property
    def domain_token(self) -> str:
        return "linkedin.com"

    def extract(self, page: JobPage) -> JobFields:
        return JobFields(
            title=self._extract_text(page.soup, self.TITLE_SELECTORS),
            company=self._extract_text(page.soup, self.COMPANY_SELECTORS),
            location=self._extract_text(page.soup, self.LOCATION_SELECTORS),
        )


# -----------------------------------------------------------------------------
# Indeed Profile
# -----------------------------------------------------------------------------
class IndeedProfile(SiteProfile):
    """
    Profile for Indeed job listings.

    Handles job URLs like:
    - https://www.indeed.com/viewjob?jk=abc123
    """

    TITLE_SELECTORS = [
        "h1.jobsearch-JobInfoHeader-title",
        ".jobsearch-JobInfoHeader-title",
    ]
    COMPANY_SELECTORS = [
        '[data-company-name="true"]',
        ".jobsearch-InlineCompanyRating-companyHeader",
    ]
    LOCATION_SELECTORS = [
        '[data-testid="job-location"]',
        '[data-testid="inlineHeader-companyLocation"]',
    ]

    @property
    def name(self) -> str:
        return "indeed"

    @property
    def domain_token(self) -> str:
        return "indeed.com"

    def extract(self, page: JobPage) -> JobFields:
        return JobFields(
            title=self._extract_text(page.soup, self.TITLE_SELECTORS),
            company=self._extract_text(page.soup, self.COMPANY_SELECTORS),
            location=self._extract_text(page.soup, self.LOCATION_SELECTORS),
        )


# -----------------------------------------------------------------------------
# Glassdoor Profile
# -----------------------------------------------------------------------------
class GlassdoorProfile(SiteProfile):
    """
    Profile for Glassdoor job listings.

    Glassdoor titles are reliable in JSON-LD and Open Graph, so only company
    and location have selectors here.
    """

    COMPANY_SELECTORS = ['[data-test="employer-name"]']
    LOCATION_SELECTORS = ['[data-test="location"]']

    @property
    def name(self) -> str:
        return "glassdoor"

    @property
    def domain_token(self) -> str:
        return "glassdoor.com"

    def extract(self, page: JobPage) -> JobFields:
        return JobFields(
            company=self._extract_text(page.soup, self.COMPANY_SELECTORS),
            location=self._extract_text(page.soup, self.LOCATION_SELECTORS),
        )


# -----------------------------------------------------------------------------
# Siemens Careers Profile
# -----------------------------------------------------------------------------
class SiemensProfile(SiteProfile):
    """
    Profile for the Siemens careers portal.

    The portal renders job data from an inline JavaScript config object
    rather than markup, so most fields come from regexes over the raw HTML.
    Selectors are only a fallback for location and title.
    """

    COMPANY_NAME = "Siemens"

    TITLE_PATTERNS = [re.compile(r'"jobTitle"\s*:\s*"([^"]+)"')]
    ORGANIZATION_PATTERNS = [re.compile(r'"organization"\s*:\s*"([^"]+)"')]
    LOCATION_PATTERNS = [
        re.compile(r"""location['"]\s*:\s*['"]([^'"]+)['"]""", re.IGNORECASE),
        re.compile(r'"addressLocality"\s*:\s*"([^"]+)"'),
        re.compile(r'"addressCountry"\s*:\s*"([^"]+)"'),
    ]

    TITLE_SELECTORS = ["h1", "h3"]
    LOCATION_SELECTORS = [
        ".job-location",
        '[class*="location"]',
    ]

    @property
    def name(self) -> str:
        return "siemens"

    @property
    def domain_token(self) -> str:
        return "jobs.siemens.com"

    def extract(self, page: JobPage) -> JobFields:
        title = self._extract_match(page.html, self.TITLE_PATTERNS)
        if not title:
            title = self._extract_text(page.soup, self.TITLE_SELECTORS)

        organization = self._extract_match(page.html, self.ORGANIZATION_PATTERNS)
        company = (
            f"{self.COMPANY_NAME} - {organization}"
            if organization
            else self.COMPANY_NAME
        )

        location = (
            self._extract_match(page.html, self.LOCATION_PATTERNS)
            or self._extract_text(page.soup, self.LOCATION_SELECTORS)
            or self._labelled_location(page.soup)
        )

        return JobFields(title=title, company=company, location=location)

    def _labelled_location(self, soup: BeautifulSoup) -> Optional[str]:
        """Text of the element right after a `<span>` labelled "Location"."""
        for label in soup.select('span:-soup-contains("Location")'):
            sibling = label.find_next_sibling()
            if sibling is None:
                continue
            text = normalize_text(sibling.get_text())
            if text:
                return text
        return None


# -----------------------------------------------------------------------------
# Profile Registry
# -----------------------------------------------------------------------------
def get_site_profiles() -> list[SiteProfile]:
    """
    Get list of available site profiles in priority order.

    Returns:
        List of profile instances.
    """
    return [
        LinkedInProfile(),
        IndeedProfile(),
        GlassdoorProfile(),
        SiemensProfile(),
    ]


def extract_site_specific(
    page: JobPage,
    profiles: Optional[list[SiteProfile]] = None,
) -> JobFields:
    """
    Run every profile whose domain token appears in the page URL.

    Profiles are merged in registry order, so an earlier profile's value is
    never replaced by a later one.

    Args:
        page: The fetched page.
        profiles: Profiles to consider (defaults to the full registry).

    Returns:
        Merged partial job fields (empty if no profile matches).
    """
    fields = JobFields()
    for profile in profiles if profiles is not None else get_site_profiles():
        if not profile.matches(page.url):
            continue
        logger.debug(f"Applying site profile: {profile.name}")
        fields = fields.merge(profile.extract(page))
    return fields
