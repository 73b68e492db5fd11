"""
READER TESTS - Unit tests with mock XML, no network

Run: pytest tests/test_reader.py
"""

import logging
from datetime import datetime, timezone

import pytest

from sitemap_model import ChangeFrequency, FieldState, SitemapEntry, UrlEntry
from sitemap_model.reader import ParseResult, SitemapReader


@pytest.fixture
def reader():
    return SitemapReader()


# =============================================================================
# 1. SITEMAP INDEX
# =============================================================================

INDEX_XML = """<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
    <sitemap><loc>https://www.example.com/sitemap-1.xml</loc><lastmod>2025-12-10</lastmod></sitemap>
    <sitemap><loc>https://www.example.com/sitemap-2.xml</loc></sitemap>
    <sitemap><lastmod>2025-12-10</lastmod></sitemap>
</sitemapindex>"""


def test_sitemap_index(reader):
    result = reader.parse_sitemap(INDEX_XML, "https://www.example.com/sitemap.xml")
    assert isinstance(result, ParseResult)
    assert result.type == "sitemapindex"
    assert result.error_message is None
    assert len(result.entries) == 2
    assert result.skipped == 1
    assert all(isinstance(e, SitemapEntry) for e in result.entries)
    assert result.entries[0].loc.get().geturl() == "https://www.example.com/sitemap-1.xml"
    assert result.entries[0].lastmod.get() == datetime(2025, 12, 10, tzinfo=timezone.utc)
    assert result.entries[1].lastmod.is_absent


# =============================================================================
# 2. URL SET
# =============================================================================

URLSET_XML = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"
        xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">
   <url>
      <loc>http://www.example.com/</loc>
      <lastmod>2005-01-01</lastmod>
      <changefreq>monthly</changefreq>
      <priority>0.8</priority>
      <image:image><image:loc>http://www.example.com/logo.png</image:loc></image:image>
   </url>
   <url>
      <loc>http://www.example.com/catalog?item=12&amp;desc=vacation_hawaii</loc>
      <changefreq>Fortnightly</changefreq>
      <priority>high</priority>
   </url>
   <url>
      <loc> not a url </loc>
      <priority>0.5</priority>
   </url>
   <url>
      <lastmod>2004-12-23</lastmod>
   </url>
</urlset>"""


def test_urlset(reader):
    result = reader.parse_sitemap(URLSET_XML, "https://www.example.com/urls.xml")
    assert result.type == "urlset"
    assert len(result.entries) == 2
    assert result.skipped == 2
    assert all(isinstance(e, UrlEntry) for e in result.entries)

    first = result.entries[0]
    assert first.loc.get().geturl() == "http://www.example.com/"
    assert first.lastmod.get() == datetime(2005, 1, 1, tzinfo=timezone.utc)
    assert first.changefreq == ChangeFrequency.MONTHLY
    assert first.priority.get() == 0.8
    assert first.invalid_fields() == []


def test_urlset_keeps_invalid_optional_fields(reader):
    second = reader.parse_sitemap(URLSET_XML).entries[1]
    assert second.loc.get().query == "item=12&desc=vacation_hawaii"
    assert second.changefreq.state is FieldState.INVALID
    assert second.changefreq.raw == "Fortnightly"
    assert second.priority.state is FieldState.INVALID
    assert second.lastmod.is_absent
    assert second.invalid_fields() == ["changefreq", "priority"]


def test_skipped_entries_are_logged(reader, caplog):
    with caplog.at_level(logging.WARNING, logger="sitemap_model.reader"):
        reader.parse_sitemap(URLSET_XML)
    assert sum("Skipping entry" in r.getMessage() for r in caplog.records) == 2


def test_urlset_without_namespace(reader):
    xml = "<urlset><url><loc>https://example.com/a</loc><priority>1.0</priority></url></urlset>"
    result = reader.parse_sitemap(xml)
    assert result.type == "urlset"
    assert result.entries[0].priority.get() == 1.0


def test_empty_optional_element_is_absent(reader):
    xml = ('<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
           '<url><loc>https://example.com/</loc><lastmod></lastmod><priority/></url></urlset>')
    entry = reader.parse_sitemap(xml).entries[0]
    assert entry.lastmod.is_absent
    assert entry.priority.is_absent


def test_bytes_input(reader):
    result = reader.parse_sitemap(URLSET_XML.encode("utf-8"))
    assert result.type == "urlset"
    assert len(result.entries) == 2


def test_empty_urlset(reader):
    xml = '<?xml version="1.0"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"></urlset>'
    result = reader.parse_sitemap(xml)
    assert result.type == "urlset"
    assert result.entries == []
    assert result.skipped == 0


# =============================================================================
# 3. ODD DOCUMENTS
# =============================================================================

def test_unknown_root_with_url_tags(reader):
    xml = """
    <root xmlns:sm="http://www.sitemaps.org/schemas/sitemap/0.9">
        <sm:url>
            <sm:loc>http://www.example.com/other_root</sm:loc>
            <sm:lastmod>2023-01-01</sm:lastmod>
        </sm:url>
    </root>
    """
    result = reader.parse_sitemap(xml, "http://test.com/other_root.xml")
    assert result.type == "urlset"
    assert result.error_message == "Unknown root, but url tags found"
    assert len(result.entries) == 1


def test_unknown_root_without_entries(reader):
    result = reader.parse_sitemap("<html><body>Not found</body></html>")
    assert result.type == "error"
    assert "Unknown root element" in result.error_message


@pytest.mark.parametrize("content", ["", "   \n  ", b""])
def test_empty_content(reader, content):
    result = reader.parse_sitemap(content)
    assert result.type == "error"
    assert result.error_message == "Empty XML content"
    assert result.entries == []


def test_malformed_xml_is_handled(reader):
    result = reader.parse_sitemap("<urlset><url><loc>broken", "https://example.com/bad.xml")
    assert isinstance(result, ParseResult)
    assert result.type in ("urlset", "error")


def test_strict_parser_reports_syntax_error():
    reader = SitemapReader(config={"reader": {"recover": False}})
    result = reader.parse_sitemap("<urlset><url><loc>broken")
    assert result.type == "error"
    assert result.error_message.startswith("XMLSyntaxError")
