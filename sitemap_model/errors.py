"""
1.0 Errors Module
Exception types shared by the field value types, parsers and builders.

Field conversions never raise these; they are stored inside the invalid
variant of a field so the caller can inspect them later. Only the entry
builders raise (InvalidEntryError).
"""

from enum import Enum
from typing import Optional


class SitemapModelError(Exception):
    """Base class for every error raised or carried by this package."""


class InvalidEntryError(SitemapModelError):
    """An entry could not be constructed (missing location, bad priority)."""


class AddressErrorKind(Enum):
    """1.1 Why an address string was rejected."""
    EMPTY_INPUT = "empty input"
    RELATIVE_URL_WITHOUT_BASE = "relative URL without a base"
    EMPTY_HOST = "empty host"
    INVALID_DOMAIN_CHARACTER = "invalid domain character"
    INVALID_IPV6_ADDRESS = "invalid IPv6 address"
    INVALID_PORT = "invalid port number"


class AddressParseError(SitemapModelError, ValueError):
    """1.2 A location string is not an absolute URL."""

    def __init__(self, kind: AddressErrorKind, text: str):
        super().__init__(f"{kind.value}: '{text}'")
        self.kind = kind
        self.text = text


class W3CDateTimeParseError(SitemapModelError, ValueError):
    """1.3 A lastmod string is not a W3C datetime."""

    def __init__(self, text: str, reason: Optional[str] = None):
        message = f"Not a W3C datetime '{text}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.text = text
        self.reason = reason


class ChangeFrequencyParseError(SitemapModelError, ValueError):
    """1.4 A changefreq string is not one of the canonical tokens."""

    def __init__(self, text: str):
        super().__init__(f"Not recognized string '{text}'")
        self.text = text
