# =============================================================================
# JSON-LD Structured Data Extraction
# =============================================================================
"""
Extraction of schema.org JobPosting data embedded as JSON-LD.

Most job boards publish a JobPosting object for search engines, which makes
it the most reliable source of title, employer and location. The object can
sit at the top level, inside an array, or inside an `@graph` container, so
the search walks the parsed JSON depth-first.
"""

import json
import logging
from typing import Any, Iterable, Optional, Sequence

from bs4 import BeautifulSoup

from job_tracker.services.scraper.models import JobFields


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


JOB_POSTING_TYPE = "JobPosting"


# -----------------------------------------------------------------------------
# Script Collection
# -----------------------------------------------------------------------------
def collect_json_ld_scripts(soup: BeautifulSoup) -> list[str]:
    """
    Collect the raw contents of all JSON-LD script blocks in document order.

    Args:
        soup: Parsed HTML document.

    Returns:
        List of raw JSON strings (possibly malformed).
    """
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    return [script.string or script.get_text() for script in scripts]


# -----------------------------------------------------------------------------
# JobPosting Search
# -----------------------------------------------------------------------------
def _is_job_posting(data: dict[str, Any]) -> bool:
    type_ = data.get("@type")
    if isinstance(type_, list):
        return JOB_POSTING_TYPE in type_
    return type_ == JOB_POSTING_TYPE


def find_job_posting(data: Any) -> Optional[dict[str, Any]]:
    """
    Depth-first search for the first JobPosting object.

    Arrays are searched element by element. An object that is not itself a
    JobPosting is searched through its `@graph` property.

    Args:
        data: Parsed JSON value.

    Returns:
        The first JobPosting dictionary found, or None.
    """
    if not data:
        return None

    if isinstance(data, list):
        for item in data:
            result = find_job_posting(item)
            if result is not None:
                return result
    elif isinstance(data, dict):
        if _is_job_posting(data):
            return data
        if data.get("@graph"):
            return find_job_posting(data["@graph"])

    return None


# -----------------------------------------------------------------------------
# Field Helpers
# -----------------------------------------------------------------------------
def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value or None
    return None


def extract_company_name(org: Any) -> Optional[str]:
    """
    Get the employer name from a `hiringOrganization` value.

    Args:
        org: Either a plain string or an Organization object.

    Returns:
        Company name or None.
    """
    if not org:
        return None
    if isinstance(org, str):
        return org
    if isinstance(org, dict):
        return _as_text(org.get("name"))
    return None


def _join_address(address: dict[str, Any]) -> Optional[str]:
    parts = []
    for key in ("addressLocality", "addressRegion"):
        part = _as_text(address.get(key))
        if part:
            parts.append(part)

    country = address.get("addressCountry")
    if isinstance(country, dict):
        country = country.get("name")
    country = _as_text(country)
    if country:
        parts.append(country)

    return ", ".join(parts) or None


def extract_location(job_location: Any) -> Optional[str]:
    """
    Flatten a `jobLocation` value into a single display string.

    Handles a plain string, an array (first entry wins) and a Place object.
    A Place with a postal address yields "locality, region, country" with
    absent parts skipped; otherwise the Place name is used.

    Args:
        job_location: Raw `jobLocation` value from the JobPosting.

    Returns:
        Location string or None.
    """
    if not job_location:
        return None

    if isinstance(job_location, str):
        return job_location

    if isinstance(job_location, list):
        return extract_location(job_location[0])

    if not isinstance(job_location, dict):
        return None

    address = job_location.get("address")
    if address:
        if isinstance(address, str):
            return address
        if isinstance(address, dict):
            return _join_address(address)

    return _as_text(job_location.get("name"))


# -----------------------------------------------------------------------------
# Extraction Entry Point
# -----------------------------------------------------------------------------
def _parse_scripts(scripts: Iterable[str]) -> Iterable[Any]:
    for index, raw in enumerate(scripts):
        if not raw:
            continue
        try:
            yield json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Skipping malformed JSON-LD block #{index}: {e}")


def extract_from_json_ld(scripts: Sequence[str]) -> Optional[JobFields]:
    """
    Extract title, company and location from JSON-LD script blocks.

    Blocks are tried in document order and the first JobPosting found wins.
    A block that fails to parse is skipped without affecting the others.

    Args:
        scripts: Raw contents of the page's JSON-LD script blocks.

    Returns:
        Partial job fields, or None when no JobPosting exists on the page.

    Example:
        fields = extract_from_json_ld([
            '{"@type": "JobPosting", "title": "Engineer", '
            '"hiringOrganization": {"name": "Acme"}}'
        ])
        assert fields.company == "Acme"
    """
    for data in _parse_scripts(scripts):
        posting = find_job_posting(data)
        if posting is None:
            continue

        return JobFields(
            title=_as_text(posting.get("title")),
            company=extract_company_name(posting.get("hiringOrganization")),
            location=extract_location(posting.get("jobLocation")),
        )

    return None
