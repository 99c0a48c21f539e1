# =============================================================================
# JSON-LD Structured Data Tests
# =============================================================================
"""
Unit tests for JobPosting extraction from JSON-LD script blocks.

These tests verify that the extractor:
- Finds JobPosting objects at the top level, in arrays and in @graph
- Flattens the different jobLocation shapes
- Skips malformed blocks without losing the others
"""

import json

from bs4 import BeautifulSoup

from job_tracker.services.scraper.structured_data import (
    collect_json_ld_scripts,
    extract_company_name,
    extract_from_json_ld,
    extract_location,
    find_job_posting,
)


# -----------------------------------------------------------------------------
# JobPosting Search
# -----------------------------------------------------------------------------
class TestFindJobPosting:
    """Tests for the depth-first JobPosting search."""

    def test_top_level_object(self) -> None:
        posting = {"@type": "JobPosting", "title": "Engineer"}
        assert find_job_posting(posting) is posting

    def test_inside_array(self) -> None:
        data = [{"@type": "Organization"}, {"@type": "JobPosting", "title": "A"}]
        assert find_job_posting(data)["title"] == "A"

    def test_nested_two_levels_in_graph(self) -> None:
        """A JobPosting in a @graph within a @graph is still found."""
        data = {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "WebPage"},
                {"@graph": [{"@type": "JobPosting", "title": "Deep"}]},
            ],
        }
        assert find_job_posting(data)["title"] == "Deep"

    def test_array_within_graph(self) -> None:
        data = {"@graph": [[{"@type": "BreadcrumbList"}, {"@type": "JobPosting", "title": "B"}]]}
        assert find_job_posting(data)["title"] == "B"

    def test_type_list(self) -> None:
        data = {"@type": ["Thing", "JobPosting"], "title": "Multi"}
        assert find_job_posting(data)["title"] == "Multi"

    def test_first_match_wins(self) -> None:
        data = [
            {"@type": "JobPosting", "title": "First"},
            {"@type": "JobPosting", "title": "Second"},
        ]
        assert find_job_posting(data)["title"] == "First"

    def test_no_posting(self) -> None:
        assert find_job_posting({"@type": "Organization", "name": "Acme"}) is None
        assert find_job_posting([]) is None
        assert find_job_posting(None) is None
        assert find_job_posting("JobPosting") is None


# -----------------------------------------------------------------------------
# Field Helpers
# -----------------------------------------------------------------------------
class TestExtractCompanyName:
    """Tests for hiringOrganization handling."""

    def test_organization_object(self) -> None:
        assert extract_company_name({"@type": "Organization", "name": "Acme"}) == "Acme"

    def test_plain_string(self) -> None:
        assert extract_company_name("Acme") == "Acme"

    def test_missing_name(self) -> None:
        assert extract_company_name({"sameAs": "https://acme.example"}) is None
        assert extract_company_name(None) is None


class TestExtractLocation:
    """Tests for jobLocation flattening."""

    def test_full_address(self, austin_posting: dict) -> None:
        assert extract_location(austin_posting["jobLocation"]) == "Austin, TX, US"

    def test_partial_address_skips_missing_parts(self) -> None:
        location = {"address": {"addressLocality": "Berlin", "addressCountry": "DE"}}
        assert extract_location(location) == "Berlin, DE"

    def test_country_object(self) -> None:
        location = {
            "address": {
                "addressLocality": "Munich",
                "addressCountry": {"@type": "Country", "name": "Germany"},
            }
        }
        assert extract_location(location) == "Munich, Germany"

    def test_plain_string(self) -> None:
        assert extract_location("Remote") == "Remote"

    def test_string_address(self) -> None:
        assert extract_location({"address": "1 Main St, Springfield"}) == "1 Main St, Springfield"

    def test_array_uses_first_entry(self) -> None:
        locations = [
            {"address": {"addressLocality": "Paris"}},
            {"address": {"addressLocality": "Lyon"}},
        ]
        assert extract_location(locations) == "Paris"

    def test_place_name_fallback(self) -> None:
        assert extract_location({"@type": "Place", "name": "HQ Campus"}) == "HQ Campus"

    def test_empty_address_is_none(self) -> None:
        assert extract_location({"address": {}}) is None
        assert extract_location(None) is None


# -----------------------------------------------------------------------------
# Extraction Entry Point
# -----------------------------------------------------------------------------
class TestExtractFromJsonLd:
    """Tests for extraction across multiple script blocks."""

    def test_extracts_all_fields(self, austin_posting: dict) -> None:
        fields = extract_from_json_ld([json.dumps(austin_posting)])

        assert fields.title == "Engineer"
        assert fields.company == "Acme"
        assert fields.location == "Austin, TX, US"

    def test_malformed_block_is_skipped(self, austin_posting: dict) -> None:
        """A block that fails to parse does not prevent later blocks from matching."""
        fields = extract_from_json_ld(["{not json", json.dumps(austin_posting)])

        assert fields is not None
        assert fields.company == "Acme"

    def test_first_posting_across_blocks_wins(self) -> None:
        scripts = [
            json.dumps({"@type": "Organization", "name": "Acme"}),
            json.dumps({"@type": "JobPosting", "title": "First"}),
            json.dumps({"@type": "JobPosting", "title": "Second"}),
        ]
        assert extract_from_json_ld(scripts).title == "First"

    def test_partial_posting(self) -> None:
        fields = extract_from_json_ld([json.dumps({"@type": "JobPosting", "title": "Only Title"})])

        assert fields.title == "Only Title"
        assert fields.company is None
        assert fields.location is None

    def test_no_posting_returns_none(self) -> None:
        assert extract_from_json_ld([json.dumps({"@type": "WebSite"})]) is None
        assert extract_from_json_ld(["", "[]"]) is None
        assert extract_from_json_ld([]) is None

    def test_collect_scripts_in_document_order(self) -> None:
        html = """
        <html><head>
          <script type="application/ld+json">{"a": 1}</script>
          <script type="text/javascript">var x = 1;</script>
          <script type="application/ld+json">{"b": 2}</script>
        </head></html>
        """
        scripts = collect_json_ld_scripts(BeautifulSoup(html, "lxml"))

        assert [json.loads(s) for s in scripts] == [{"a": 1}, {"b": 2}]
