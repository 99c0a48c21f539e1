# =============================================================================
# Scraper Data Structures
# =============================================================================
"""
Result types shared by the extraction stages.

Every stage produces a partial `JobFields`; the orchestrator folds them in
priority order with `JobFields.merge`, then freezes the outcome into an
`ExtractedJobInfo` for the caller.
"""

from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from job_tracker.services.scraper.normalizer import normalize_text


FIELD_NAMES = ("title", "company", "location")


# -----------------------------------------------------------------------------
# Partial Result
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class JobFields:
    """
    Partial job data produced by one extraction stage.

    Attributes:
        title: Position title, if found.
        company: Hiring company name, if found.
        location: Job location, if found.
    """

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None

    @property
    def missing(self) -> tuple[str, ...]:
        """Names of the fields that are still unset."""
        return tuple(name for name in FIELD_NAMES if getattr(self, name) is None)

    @property
    def is_complete(self) -> bool:
        return not self.missing

    def merge(self, other: Optional["JobFields"]) -> "JobFields":
        """
        Fill the unset fields of this result from another one.

        Fields already set here always win. Values from `other` are
        normalized first, so whitespace-only strings never fill a gap.

        Args:
            other: Lower priority partial result (None is ignored).

        Returns:
            A new merged JobFields.
        """
        if other is None:
            return self

        return JobFields(
            **{
                name: getattr(self, name) or normalize_text(getattr(other, name))
                for name in FIELD_NAMES
            }
        )


# -----------------------------------------------------------------------------
# Page Context
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class JobPage:
    """
    A fetched job page as seen by the extraction stages.

    Attributes:
        url: URL the page was requested from.
        html: Raw HTML body (regex heuristics run against this).
        soup: Parsed document (selector heuristics run against this).
    """

    url: str
    html: str
    soup: BeautifulSoup

    @classmethod
    def from_html(cls, url: str, html: str) -> "JobPage":
        """Parse raw HTML with lxml and wrap it with its URL."""
        return cls(url=url, html=html, soup=BeautifulSoup(html, "lxml"))


# -----------------------------------------------------------------------------
# Final Result
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ExtractedJobInfo:
    """
    Normalized extraction result handed back to the caller.

    Attributes:
        url: The URL that was scraped.
        company: Hiring company name, or None.
        title: Position title, or None.
        location: Job location, or None.
    """

    url: str
    company: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def empty(cls, url: str) -> "ExtractedJobInfo":
        """Record returned when nothing could be extracted."""
        return cls(url=url)

    @classmethod
    def from_fields(cls, url: str, fields: JobFields) -> "ExtractedJobInfo":
        """Build the final record, normalizing every field."""
        return cls(
            url=url,
            company=normalize_text(fields.company),
            title=normalize_text(fields.title),
            location=normalize_text(fields.location),
        )

    @property
    def found_anything(self) -> bool:
        return any((self.company, self.title, self.location))

    def to_dict(self) -> dict[str, Optional[str]]:
        return {
            "url": self.url,
            "company": self.company,
            "title": self.title,
            "location": self.location,
        }
