"""
1.0 Entries Module
Records for one <url> of a urlset and one <sitemap> of a sitemap index,
plus the builders that assemble them.

A builder stores every field value it is given, valid or not. Only the
location is mandatory: finish() refuses to build an entry whose <loc> did not
parse. Invalid optional fields are carried into the entry as data.
"""

import logging
import math
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import List

from sitemap_model.errors import InvalidEntryError
from sitemap_model.fields import (
    PRIORITY_MAX,
    PRIORITY_MIN,
    Address,
    ChangeFrequency,
    LastModified,
    Priority,
)

logger = logging.getLogger(__name__)


def _invalid_field_names(entry) -> List[str]:
    return [f.name for f in fields(entry) if getattr(entry, f.name).is_invalid]


# =============================================================================
# 2.0 URL ENTRY (<urlset><url>)
# =============================================================================

@dataclass(frozen=True)
class UrlEntry:
    """Url entry. Contains url location, modification time, update frequency and priority."""
    loc: Address = Address.ABSENT
    lastmod: LastModified = LastModified.ABSENT
    changefreq: ChangeFrequency = ChangeFrequency.ABSENT
    priority: Priority = Priority.ABSENT

    @classmethod
    def new(cls) -> "UrlEntry":
        """Creates an entry with every field absent."""
        return cls()

    @classmethod
    def builder(cls) -> "UrlEntryBuilder":
        return UrlEntryBuilder()

    def invalid_fields(self) -> List[str]:
        """Names of the fields that were provided but did not parse."""
        return _invalid_field_names(self)


class _EntryBuilder:
    """Holds the working copy of an entry until finish() hands it over."""

    _kind = "entry"

    def __init__(self, entry):
        self._entry = entry
        self._finished = False

    def _update(self, **changes):
        if self._finished:
            raise InvalidEntryError(f"{self._kind} builder has already been finished")
        self._entry = replace(self._entry, **changes)
        return self

    def set_location(self, url: str):
        """Parse and store the location. Never fails here, even for a bad URL."""
        return self._update(loc=Address.from_string(url))

    def set_lastmod(self, date: datetime):
        """Store an already parsed modification time."""
        return self._update(lastmod=LastModified.of(date))

    def set_lastmod_text(self, text: str):
        """Parse and store a W3C datetime string, keeping any parse error."""
        return self._update(lastmod=LastModified.from_string(text))

    def finish(self):
        """
        Hand over the finished entry.

        Raises:
            InvalidEntryError: if the location is absent or did not parse,
                or the builder was already finished.
        """
        if self._finished:
            raise InvalidEntryError(f"{self._kind} builder has already been finished")
        loc = self._entry.loc
        if not loc.is_valid:
            logger.debug(f"Rejecting {self._kind} without a valid location (state={loc.state.value})")
            raise InvalidEntryError(f"a location is required in the {self._kind}")
        self._finished = True
        return self._entry


class UrlEntryBuilder(_EntryBuilder):
    """
    2.1 Staged constructor for UrlEntry.

    Usage:
        entry = (UrlEntry.builder()
                 .set_location("https://example.com/page")
                 .set_change_frequency(ChangeFrequency.WEEKLY)
                 .set_priority(0.8)
                 .finish())
    """

    _kind = "url entry"

    def __init__(self):
        super().__init__(UrlEntry.new())

    def set_change_frequency(self, changefreq: ChangeFrequency) -> "UrlEntryBuilder":
        return self._update(changefreq=changefreq)

    def set_change_frequency_text(self, text: str) -> "UrlEntryBuilder":
        return self._update(changefreq=ChangeFrequency.from_string(text))

    def set_priority(self, value: float) -> "UrlEntryBuilder":
        """
        2.2 Store a numeric priority, rejecting it right away if out of range.

        Unlike set_priority_text(), which keeps an out of range value as a
        TOO_LOW / TOO_HIGH variant, this raises.

        Raises:
            InvalidEntryError: if value is below 0, above 1 or NaN.
        """
        if math.isnan(value) or value > PRIORITY_MAX or value < PRIORITY_MIN:
            raise InvalidEntryError("priority should be between 0 and 1")
        return self._update(priority=Priority.of(value))

    def set_priority_text(self, text: str) -> "UrlEntryBuilder":
        return self._update(priority=Priority.from_string(text))


# =============================================================================
# 3.0 SITEMAP ENTRY (<sitemapindex><sitemap>)
# =============================================================================

@dataclass(frozen=True)
class SitemapEntry:
    """Sitemap entry. Contains url location and modification time."""
    loc: Address = Address.ABSENT
    lastmod: LastModified = LastModified.ABSENT

    @classmethod
    def new(cls) -> "SitemapEntry":
        """Creates an entry with every field absent."""
        return cls()

    @classmethod
    def builder(cls) -> "SitemapEntryBuilder":
        return SitemapEntryBuilder()

    def invalid_fields(self) -> List[str]:
        """Names of the fields that were provided but did not parse."""
        return _invalid_field_names(self)


class SitemapEntryBuilder(_EntryBuilder):
    """3.1 Staged constructor for SitemapEntry."""

    _kind = "sitemap entry"

    def __init__(self):
        super().__init__(SitemapEntry.new())
