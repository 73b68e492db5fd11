"""
1.0 Address Parsing Module
Turns a <loc> string into a parsed absolute URL or a typed AddressParseError.

The heavy lifting is done by urllib.parse; this module adds the checks
urlparse() is lenient about (missing scheme, missing host, bad host
characters, bad port) so a location is only accepted when it is an absolute URL.
"""

import ipaddress
import logging
import re
from urllib.parse import ParseResult, unquote, urlparse

from sitemap_model.errors import AddressErrorKind, AddressParseError

logger = logging.getLogger(__name__)

# 1.1 Schemes that must carry a host (file:// may have an empty one)
SPECIAL_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_FORBIDDEN_HOST_CHARS = set(" #%/:<>?@[\\]^|")
# C0 controls and space
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))


def _has_scheme(text: str) -> bool:
    scheme, sep, _ = text.partition(":")
    return bool(sep) and bool(_SCHEME_RE.match(scheme))


def _normalize_special(text: str) -> str:
    """
    Browser-style cleanup for http(s)/ftp/ws(s) URLs: backslashes before the
    query count as slashes, and any run of slashes after the scheme (including
    none, as in "https:example.com") introduces the host.
    """
    scheme, _, rest = text.partition(":")
    if scheme.lower() not in SPECIAL_SCHEMES:
        return text
    cut = min((i for i in (rest.find("?"), rest.find("#")) if i >= 0), default=len(rest))
    head = rest[:cut].replace("\\", "/")
    return f"{scheme}://{head.lstrip('/')}{rest[cut:]}"


def _check_host(parsed: ParseResult, text: str) -> None:
    """Validate the host part of an already split URL."""
    hostname = parsed.hostname
    if not hostname:
        if parsed.scheme in SPECIAL_SCHEMES:
            raise AddressParseError(AddressErrorKind.EMPTY_HOST, text)
        return

    if "[" in parsed.netloc:
        try:
            ipaddress.IPv6Address(hostname)
        except ValueError:
            raise AddressParseError(AddressErrorKind.INVALID_IPV6_ADDRESS, text)
        return

    host = unquote(hostname)
    if any(ch in _FORBIDDEN_HOST_CHARS or ord(ch) < 0x20 for ch in host):
        raise AddressParseError(AddressErrorKind.INVALID_DOMAIN_CHARACTER, text)


def parse_address(text: str) -> ParseResult:
    """
    1.2 Parse an absolute URL.

    Args:
        text: The raw location string (surrounding whitespace is ignored).

    Returns:
        The urllib.parse.ParseResult of the trimmed string (http-like URLs
        are first cleaned up by _normalize_special).

    Raises:
        AddressParseError: with the AddressErrorKind describing the failure.
    """
    trimmed = text.strip(_TRIM_CHARS)
    if not trimmed:
        raise AddressParseError(AddressErrorKind.EMPTY_INPUT, text)

    if not _has_scheme(trimmed):
        raise AddressParseError(AddressErrorKind.RELATIVE_URL_WITHOUT_BASE, text)

    try:
        parsed = urlparse(_normalize_special(trimmed))
    except ValueError:
        # urlparse only raises for unbalanced IPv6 brackets
        raise AddressParseError(AddressErrorKind.INVALID_IPV6_ADDRESS, text)

    _check_host(parsed, text)

    try:
        parsed.port
    except ValueError:
        raise AddressParseError(AddressErrorKind.INVALID_PORT, text)

    logger.debug(f"Parsed address {parsed.geturl()}")
    return parsed
