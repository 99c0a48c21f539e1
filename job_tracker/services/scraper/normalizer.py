# =============================================================================
# Text Normalizer
# =============================================================================
"""
Whitespace cleanup for text pulled out of scraped HTML and JSON-LD.
"""

import re
from typing import Optional


_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    Collapse whitespace runs to a single space and trim the result.

    Args:
        text: Raw text to clean.

    Returns:
        Cleaned text, or None if the input was None, empty or only whitespace.

    Example:
        >>> normalize_text("  Senior\\n\\tEngineer  ")
        'Senior Engineer'
        >>> normalize_text("   ") is None
        True
    """
    if not text:
        return None

    cleaned = _WHITESPACE_RE.sub(" ", text).strip()
    return cleaned or None
