"""
Sitemap Model - Typed entries for sitemap urlsets and sitemap indexes

Modules:
- errors: Exception types carried by field values and raised by builders
- addresses: <loc> parsing into absolute URLs
- w3c_datetime: <lastmod> parsing and formatting
- fields: Address, LastModified, ChangeFrequency and Priority value types
- entries: UrlEntry / SitemapEntry records and their builders
- config: Reader/writer configuration loading and validation
- reader: XML sitemap parsing into entries
- writer: Entries back to XML sitemaps
- frame: Entries to pandas DataFrames
"""

__version__ = "1.0.0"

from sitemap_model.entries import (
    SitemapEntry,
    SitemapEntryBuilder,
    UrlEntry,
    UrlEntryBuilder,
)
from sitemap_model.errors import (
    AddressErrorKind,
    AddressParseError,
    ChangeFrequencyParseError,
    InvalidEntryError,
    SitemapModelError,
    W3CDateTimeParseError,
)
from sitemap_model.fields import (
    Address,
    ChangeFrequency,
    FieldState,
    Frequency,
    LastModified,
    Priority,
)
