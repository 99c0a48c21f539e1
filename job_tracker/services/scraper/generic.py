# =============================================================================
# Generic Page Metadata Extraction
# =============================================================================
"""
Site-independent fallbacks based on page metadata.

Title comes from Open Graph or the document title; location from the geo
meta tags some career sites still emit.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from job_tracker.services.scraper.models import JobFields


logger = logging.getLogger(__name__)


TITLE_META_SELECTORS = [
    'meta[property="og:title"]',
    'meta[name="og:title"]',
]

LOCATION_META_SELECTORS = [
    'meta[name="geo.placename"]',
    'meta[name="geo.region"]',
    'meta[property="og:locality"]',
]


def _meta_content(soup: BeautifulSoup, selectors: list[str]) -> Optional[str]:
    """Return the first non-empty `content` attribute among the selectors."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        content = element.get("content")
        if isinstance(content, list):
            content = " ".join(content)
        if content and content.strip():
            return content
    return None


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    """
    Find the page title from Open Graph tags or the `<title>` element.

    Args:
        soup: Parsed HTML document.

    Returns:
        Title text or None.
    """
    title = _meta_content(soup, TITLE_META_SELECTORS)
    if title:
        return title

    if soup.title is not None:
        return soup.title.get_text().strip() or None
    return None


def extract_location(soup: BeautifulSoup) -> Optional[str]:
    """Find a location from the geo / Open Graph locality meta tags."""
    return _meta_content(soup, LOCATION_META_SELECTORS)


def extract_generic(soup: BeautifulSoup) -> JobFields:
    """
    Extract the generic title and location fallbacks.

    Args:
        soup: Parsed HTML document.

    Returns:
        JobFields with at most title and location set.
    """
    return JobFields(title=extract_title(soup), location=extract_location(soup))
