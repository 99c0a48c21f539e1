# =============================================================================
# Job Application Tracker
# =============================================================================
"""
Track job applications: scrape listing pages for company, title and location,
store the records, and move them through the application status lifecycle.
"""

__version__ = "0.1.0"
