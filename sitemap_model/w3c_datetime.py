"""
1.0 W3C Datetime Module
Parses and formats <lastmod> values in the W3C datetime profile of ISO 8601.

Accepted forms (https://www.w3.org/TR/NOTE-datetime):
- YYYY
- YYYY-MM
- YYYY-MM-DD
- YYYY-MM-DDThh:mmTZD
- YYYY-MM-DDThh:mm:ssTZD
- YYYY-MM-DDThh:mm:ss.sTZD

TZD is "Z" or +hh:mm / -hh:mm. Date-only values resolve to midnight UTC, so
every parsed value is timezone-aware.
"""

import re
from datetime import datetime, timedelta, timezone

from sitemap_model.errors import W3CDateTimeParseError


_W3C_RE = re.compile(
    r"^(?P<year>\d{4})"
    r"(?:-(?P<month>\d{2})"
    r"(?:-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
    r"(?P<tzd>Z|[+-]\d{2}:\d{2}))?"
    r")?)?$",
    re.ASCII,
)


def _parse_tzd(tzd: str, text: str) -> timezone:
    if tzd == "Z":
        return timezone.utc
    sign = -1 if tzd[0] == "-" else 1
    hours, minutes = int(tzd[1:3]), int(tzd[4:6])
    if hours > 23 or minutes > 59:
        raise W3CDateTimeParseError(text, f"offset out of range '{tzd}'")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_w3c_datetime(text: str) -> datetime:
    """
    1.1 Parse a W3C datetime string into a timezone-aware datetime.

    Raises:
        W3CDateTimeParseError: if the text does not match one of the
            profiles or names an impossible date/time.
    """
    match = _W3C_RE.match(text.strip())
    if not match:
        raise W3CDateTimeParseError(text, "unrecognized format")

    parts = match.groupdict()
    tzinfo = timezone.utc
    if parts["tzd"]:
        tzinfo = _parse_tzd(parts["tzd"], text)

    microsecond = 0
    if parts["fraction"]:
        # Digits past microseconds are truncated
        microsecond = int(parts["fraction"][:6].ljust(6, "0"))

    try:
        return datetime(
            int(parts["year"]),
            int(parts["month"] or 1),
            int(parts["day"] or 1),
            int(parts["hour"] or 0),
            int(parts["minute"] or 0),
            int(parts["second"] or 0),
            microsecond,
            tzinfo=tzinfo,
        )
    except ValueError as e:
        raise W3CDateTimeParseError(text, str(e))


def to_fixed_offset(value: datetime) -> datetime:
    """
    1.2 Make a datetime expressible with a TZD.

    Naive values are taken as UTC. Offsets with a seconds part have no TZD
    form, so those values are converted to UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    if value.utcoffset() % timedelta(minutes=1):
        return value.astimezone(timezone.utc)
    return value


def format_w3c_datetime(value: datetime) -> str:
    """1.3 Render a datetime as YYYY-MM-DDThh:mm:ss[.ffffff]+hh:mm (naive means UTC)."""
    value = to_fixed_offset(value)
    timespec = "microseconds" if value.microsecond else "seconds"
    return value.isoformat(timespec=timespec)
