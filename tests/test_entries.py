"""
ENTRY BUILDER TESTS - Fast, Deterministic, No Network

Run: pytest tests/test_entries.py
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from sitemap_model import (
    ChangeFrequency,
    FieldState,
    Frequency,
    InvalidEntryError,
    LastModified,
    SitemapEntry,
    UrlEntry,
)

# =============================================================================
# 1. FRESH RECORDS
# =============================================================================

def test_new_url_entry_is_all_absent():
    entry = UrlEntry.new()
    assert entry.loc.is_absent
    assert entry.lastmod.is_absent
    assert entry.changefreq.is_absent
    assert entry.priority.is_absent
    assert entry.invalid_fields() == []


def test_new_sitemap_entry_is_all_absent():
    entry = SitemapEntry.new()
    assert entry.loc.is_absent
    assert entry.lastmod.is_absent


def test_entries_are_immutable():
    entry = UrlEntry.new()
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.loc = None


# =============================================================================
# 2. URL ENTRY BUILDER
# =============================================================================

def test_full_url_entry():
    lastmod = LastModified.from_string("2024-01-15T10:00:00+00:00").get()
    entry = (UrlEntry.builder()
             .set_location("https://example.com/page")
             .set_lastmod(lastmod)
             .set_change_frequency(ChangeFrequency.from_string("Weekly"))
             .set_priority(0.8)
             .finish())

    assert entry.loc.get().geturl() == "https://example.com/page"
    assert entry.lastmod.get() == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    assert entry.changefreq == ChangeFrequency.WEEKLY
    assert entry.priority.get() == 0.8
    assert entry.invalid_fields() == []


def test_finish_without_location_fails():
    with pytest.raises(InvalidEntryError):
        UrlEntry.builder().set_priority(0.5).finish()


def test_finish_with_unparseable_location_fails():
    builder = UrlEntry.builder().set_location("not a url").set_priority(0.5)
    with pytest.raises(InvalidEntryError, match="location is required"):
        builder.finish()


def test_set_location_never_fails_for_bad_url():
    builder = UrlEntry.builder().set_location("::::")
    with pytest.raises(InvalidEntryError):
        builder.finish()


def test_unknown_changefreq_is_carried_into_entry():
    entry = (UrlEntry.builder()
             .set_location("https://example.com/")
             .set_change_frequency_text("Biweekly")
             .finish())
    assert entry.changefreq.state is FieldState.INVALID
    assert entry.changefreq.raw == "Biweekly"
    assert entry.invalid_fields() == ["changefreq"]


def test_invalid_optional_text_fields_are_kept():
    entry = (UrlEntry.builder()
             .set_location("https://example.com/")
             .set_lastmod_text("last tuesday")
             .set_priority_text("1.5")
             .finish())
    assert entry.lastmod.is_invalid
    assert entry.priority.state is FieldState.TOO_HIGH
    assert entry.priority.value == 1.5
    assert entry.invalid_fields() == ["lastmod", "priority"]


@pytest.mark.parametrize("value", [1.5, -0.1, float("nan")])
def test_eager_priority_rejects_out_of_range(value):
    with pytest.raises(InvalidEntryError, match="priority should be between 0 and 1"):
        UrlEntry.builder().set_priority(value)


@pytest.mark.parametrize("value", [0.0, 1.0, 0, 1])
def test_eager_priority_accepts_bounds(value):
    entry = UrlEntry.builder().set_location("https://example.com/").set_priority(value).finish()
    assert entry.priority.get() == float(value)


def test_text_priority_out_of_range_does_not_raise():
    entry = UrlEntry.builder().set_location("https://example.com/").set_priority_text("-2").finish()
    assert entry.priority.state is FieldState.TOO_LOW


def test_later_setter_overrides_earlier_value():
    entry = (UrlEntry.builder()
             .set_location("not a url")
             .set_location("https://example.com/fixed")
             .finish())
    assert entry.loc.get().path == "/fixed"


def test_naive_lastmod_is_utc():
    entry = (UrlEntry.builder()
             .set_location("https://example.com/")
             .set_lastmod(datetime(2024, 1, 15))
             .finish())
    assert entry.lastmod.get().tzinfo == timezone.utc


def test_builder_is_consumed_by_finish():
    builder = UrlEntry.builder().set_location("https://example.com/")
    builder.finish()
    with pytest.raises(InvalidEntryError, match="already been finished"):
        builder.set_priority(0.5)
    with pytest.raises(InvalidEntryError):
        builder.finish()


def test_failed_finish_leaves_builder_usable():
    builder = UrlEntry.builder()
    with pytest.raises(InvalidEntryError):
        builder.finish()
    entry = builder.set_location("https://example.com/").finish()
    assert entry.loc.is_valid


def test_builders_do_not_share_state():
    first = UrlEntry.builder().set_location("https://example.com/a")
    second = UrlEntry.builder().set_location("https://example.com/b")
    assert first.finish().loc != second.finish().loc


# =============================================================================
# 3. SITEMAP ENTRY BUILDER
# =============================================================================

def test_sitemap_entry():
    entry = (SitemapEntry.builder()
             .set_location("https://example.com/sitemap-1.xml")
             .set_lastmod_text("2025-12-10")
             .finish())
    assert entry.loc.get().path == "/sitemap-1.xml"
    assert entry.lastmod.get() == datetime(2025, 12, 10, tzinfo=timezone.utc)


def test_sitemap_entry_requires_location():
    with pytest.raises(InvalidEntryError, match="sitemap entry"):
        SitemapEntry.builder().set_lastmod(datetime(2024, 1, 1, tzinfo=timezone.utc)).finish()


def test_sitemap_entry_keeps_invalid_lastmod():
    entry = (SitemapEntry.builder()
             .set_location("https://example.com/sitemap.xml")
             .set_lastmod_text("01/02/2024")
             .finish())
    assert entry.lastmod.is_invalid
    assert entry.lastmod.error.text == "01/02/2024"
    assert entry.invalid_fields() == ["lastmod"]


def test_frequency_of_constant():
    entry = (UrlEntry.builder()
             .set_location("https://example.com/")
             .set_change_frequency(ChangeFrequency.of(Frequency.DAILY))
             .finish())
    assert entry.changefreq.as_str() == "daily"
