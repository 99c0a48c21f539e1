# =============================================================================
# Job Scraper Service Package
# =============================================================================
"""
Job scraper service for extracting company, title and location from job
listing pages.

Provides functionality to scrape job listings from:
- Any page publishing schema.org JobPosting JSON-LD
- LinkedIn Jobs
- Indeed
- Glassdoor
- Siemens careers
- Generic websites (Open Graph / meta tag fallbacks)

Usage:
    from job_tracker.services.scraper import scrape_job_page

    info = await scrape_job_page("https://linkedin.com/jobs/view/123456")
"""

from job_tracker.services.scraper.models import ExtractedJobInfo, JobFields, JobPage
from job_tracker.services.scraper.normalizer import normalize_text
from job_tracker.services.scraper.service import JobScraperService, scrape_job_page

__all__ = [
    "ExtractedJobInfo",
    "JobFields",
    "JobPage",
    "JobScraperService",
    "normalize_text",
    "scrape_job_page",
]
