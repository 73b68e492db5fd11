"""
1.0 Field Value Types
Typed wrappers for the four sitemap entry attributes: <loc>, <lastmod>,
<changefreq> and <priority>.

Each value is in exactly one state:
- ABSENT: the field was never provided
- VALID: the field parsed, the payload is the typed value
- INVALID (and TOO_LOW / TOO_HIGH for priority): the field was provided but
  could not be used; the payload says why

Conversions from raw strings never raise. The failure is kept on the value
so the caller can decide what to do with it.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional
from urllib.parse import ParseResult

from sitemap_model.addresses import parse_address
from sitemap_model.errors import (
    AddressParseError,
    ChangeFrequencyParseError,
    W3CDateTimeParseError,
)
from sitemap_model.w3c_datetime import parse_w3c_datetime, to_fixed_offset


class FieldState(Enum):
    """1.1 Variant tag shared by all field value types."""
    ABSENT = "absent"
    VALID = "valid"
    INVALID = "invalid"
    # Priority only
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"


class _FieldValue:
    """State predicates shared by the field value types."""

    state: FieldState

    @property
    def is_absent(self) -> bool:
        return self.state is FieldState.ABSENT

    @property
    def is_valid(self) -> bool:
        return self.state is FieldState.VALID

    @property
    def is_invalid(self) -> bool:
        """True when the field was provided but is not usable."""
        return self.state not in (FieldState.ABSENT, FieldState.VALID)


# =============================================================================
# 2.0 ADDRESS (<loc>)
# =============================================================================

@dataclass(frozen=True)
class Address(_FieldValue):
    """URL of a page or of a child sitemap."""
    state: FieldState = FieldState.ABSENT
    url: Optional[ParseResult] = None
    error: Optional[AddressParseError] = field(default=None, compare=False)
    raw: Optional[str] = None

    ABSENT: ClassVar["Address"]

    @classmethod
    def of(cls, url: ParseResult) -> "Address":
        return cls(FieldState.VALID, url=url)

    @classmethod
    def from_string(cls, text: str) -> "Address":
        """2.1 Parse a location string; failures become the INVALID variant."""
        try:
            return cls.of(parse_address(text))
        except AddressParseError as e:
            return cls(FieldState.INVALID, error=e, raw=text)

    def get(self) -> Optional[ParseResult]:
        """Returns the parsed URL if valid."""
        return self.url if self.is_valid else None


Address.ABSENT = Address()


# =============================================================================
# 3.0 LAST MODIFIED (<lastmod>)
# =============================================================================

@dataclass(frozen=True)
class LastModified(_FieldValue):
    """The date of last modification of the resource."""
    state: FieldState = FieldState.ABSENT
    value: Optional[datetime] = None
    error: Optional[W3CDateTimeParseError] = field(default=None, compare=False)
    raw: Optional[str] = None

    ABSENT: ClassVar["LastModified"]

    @classmethod
    def of(cls, value: datetime) -> "LastModified":
        """
        3.1 Wrap an already parsed timestamp.

        Naive datetimes are taken as UTC; offsets that are not whole minutes
        are converted to UTC so the value can be written back as W3C text.
        """
        return cls(FieldState.VALID, value=to_fixed_offset(value))

    @classmethod
    def from_string(cls, text: str) -> "LastModified":
        """3.2 Parse a W3C datetime string; failures become the INVALID variant."""
        try:
            return cls.of(parse_w3c_datetime(text))
        except W3CDateTimeParseError as e:
            return cls(FieldState.INVALID, error=e, raw=text)

    def get(self) -> Optional[datetime]:
        """Returns the modification time if valid."""
        return self.value if self.is_valid else None


LastModified.ABSENT = LastModified()


# =============================================================================
# 4.0 CHANGE FREQUENCY (<changefreq>)
# =============================================================================

class Frequency(Enum):
    """The seven canonical <changefreq> tokens."""
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dataclass(frozen=True)
class ChangeFrequency(_FieldValue):
    """
    How frequently the page is likely to change.

    The INVALID variant keeps the original text exactly as it was given,
    not the lower-cased form used for matching.
    """
    state: FieldState = FieldState.ABSENT
    frequency: Optional[Frequency] = None
    raw: Optional[str] = None

    ABSENT: ClassVar["ChangeFrequency"]
    ALWAYS: ClassVar["ChangeFrequency"]
    HOURLY: ClassVar["ChangeFrequency"]
    DAILY: ClassVar["ChangeFrequency"]
    WEEKLY: ClassVar["ChangeFrequency"]
    MONTHLY: ClassVar["ChangeFrequency"]
    YEARLY: ClassVar["ChangeFrequency"]
    NEVER: ClassVar["ChangeFrequency"]

    @classmethod
    def of(cls, frequency: Frequency) -> "ChangeFrequency":
        return cls(FieldState.VALID, frequency=frequency)

    @classmethod
    def from_string(cls, text: str) -> "ChangeFrequency":
        """4.1 Case-insensitive exact match against the canonical tokens."""
        lowered = text.lower()
        for frequency in Frequency:
            if lowered == frequency.value:
                return cls.of(frequency)
        return cls(FieldState.INVALID, raw=text)

    @property
    def error(self) -> Optional[ChangeFrequencyParseError]:
        if self.state is FieldState.INVALID:
            return ChangeFrequencyParseError(self.raw)
        return None

    def get(self) -> Optional[Frequency]:
        """Returns the frequency if valid."""
        return self.frequency if self.is_valid else None

    def as_str(self) -> str:
        """4.2 Canonical token, or "" for absent and invalid values."""
        return self.frequency.value if self.is_valid else ""


ChangeFrequency.ABSENT = ChangeFrequency()
ChangeFrequency.ALWAYS = ChangeFrequency.of(Frequency.ALWAYS)
ChangeFrequency.HOURLY = ChangeFrequency.of(Frequency.HOURLY)
ChangeFrequency.DAILY = ChangeFrequency.of(Frequency.DAILY)
ChangeFrequency.WEEKLY = ChangeFrequency.of(Frequency.WEEKLY)
ChangeFrequency.MONTHLY = ChangeFrequency.of(Frequency.MONTHLY)
ChangeFrequency.YEARLY = ChangeFrequency.of(Frequency.YEARLY)
ChangeFrequency.NEVER = ChangeFrequency.of(Frequency.NEVER)


# =============================================================================
# 5.0 PRIORITY (<priority>)
# =============================================================================

PRIORITY_MIN = 0.0
PRIORITY_MAX = 1.0

# Plain ASCII decimal or exponent notation, plus inf/infinity/nan
_PRIORITY_RE = re.compile(
    r"^[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)\Z",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Priority(_FieldValue):
    """
    The priority of this URL relative to other URLs on the site.

    VALID always holds a value in [0.0, 1.0]. Out of range numbers are kept
    under TOO_LOW / TOO_HIGH with the offending value; text that is not a
    number is kept under INVALID with a ValueError (the one raised by float()
    when float() itself rejects the text).
    """
    state: FieldState = FieldState.ABSENT
    value: Optional[float] = None
    error: Optional[ValueError] = field(default=None, compare=False)
    raw: Optional[str] = None

    ABSENT: ClassVar["Priority"]

    def __post_init__(self):
        if self.state is FieldState.VALID and not PRIORITY_MIN <= self.value <= PRIORITY_MAX:
            raise ValueError(f"valid priority must be between 0 and 1, got {self.value}")

    @classmethod
    def of(cls, value: float) -> "Priority":
        return cls(FieldState.VALID, value=float(value))

    @classmethod
    def from_string(cls, text: str) -> "Priority":
        """
        5.1 Parse a priority string.

        Both bounds are inclusive: "0.0" and "1.0" are valid.
        """
        try:
            value = float(text)
        except ValueError as e:
            return cls(FieldState.INVALID, error=e, raw=text)

        if not _PRIORITY_RE.match(text):
            # float() also takes underscores, whitespace and non-ASCII digits
            error = ValueError(f"could not convert string to float: {text!r}")
            return cls(FieldState.INVALID, error=error, raw=text)

        if math.isnan(value):
            error = ValueError(f"priority is not a number: '{text}'")
            return cls(FieldState.INVALID, error=error, raw=text)
        if value < PRIORITY_MIN:
            return cls(FieldState.TOO_LOW, value=value, raw=text)
        if value > PRIORITY_MAX:
            return cls(FieldState.TOO_HIGH, value=value, raw=text)
        return cls.of(value)

    def get(self) -> Optional[float]:
        """Returns the priority if valid."""
        return self.value if self.is_valid else None


Priority.ABSENT = Priority()
