"""
Well-Known URL Resolution

Pure string transformations that turn a seed URL into the document URL to
fetch. No network access happens here.

Trailing-slash handling goes through strip_trailing_slash() everywhere a URL
is compared or built, so "https://op.example.com/" and
"https://op.example.com" always resolve identically.

References:
- RFC 8615: Well-Known Uniform Resource Identifiers
- OpenID Connect Discovery 1.0, Section 4
- SMART App Launch: Conformance (/.well-known/smart-configuration)
"""

import logging
from urllib.parse import urlsplit, urlunsplit

from smart_discovery.errors import MalformedInputError

logger = logging.getLogger(__name__)

WELL_KNOWN_SEGMENT = "/.well-known/"


def strip_trailing_slash(url: str) -> str:
    """
    Remove exactly one trailing slash, if present.

    Examples:
        "https://op.example.com/"  -> "https://op.example.com"
        "https://op.example.com"   -> "https://op.example.com"
        "https://op.example.com//" -> "https://op.example.com/"
    """
    return url[:-1] if url.endswith("/") else url


def issuers_match(first: str, second: str) -> bool:
    """Compare two issuer identifiers, tolerating one trailing slash on either."""
    return strip_trailing_slash(first) == strip_trailing_slash(second)


def validate_url(url: object) -> str:
    """
    Ensure url is an absolute http(s) URL.

    Args:
        url: Candidate URL

    Returns:
        str: The URL, unchanged

    Raises:
        MalformedInputError: If url is not a string, has no host, or is not http(s)
    """
    if not isinstance(url, str) or not url.strip():
        raise MalformedInputError(f"Invalid URL: {url!r}", url=url)

    try:
        parsed = urlsplit(url)
        # Accessing port validates it (raises ValueError for "host:abc")
        _ = parsed.port
    except ValueError as e:
        raise MalformedInputError(f"Invalid URL: {url!r} ({e})", url=url) from e

    if parsed.scheme.lower() not in ("http", "https"):
        raise MalformedInputError(f"URL must use http or https (got: {url})", url=url)
    if not parsed.hostname:
        raise MalformedInputError(f"URL must have a host component (got: {url})", url=url)

    return url


def is_well_known_url(url: str) -> bool:
    """Check whether the URL path already points at a well-known document."""
    path = urlsplit(url).path
    if WELL_KNOWN_SEGMENT not in path:
        return False
    # Require a document name after the segment ("/.well-known/" alone is not one)
    document = path.rsplit(WELL_KNOWN_SEGMENT, 1)[1]
    return bool(document.strip("/"))


def well_known_url(url: str, document: str) -> str:
    """
    Build the well-known URL for document below url.

    One trailing slash is stripped from the path before appending, and any
    query string is kept in place. A path that already ends in a bare
    /.well-known segment gets only the document name.

    Examples:
        ("https://op.example.com", "smart-configuration")
            -> "https://op.example.com/.well-known/smart-configuration"
        ("https://op.example.com/tenant/", "openid-configuration")
            -> "https://op.example.com/tenant/.well-known/openid-configuration"
        ("https://op.example.com/.well-known/", "smart-configuration")
            -> "https://op.example.com/.well-known/smart-configuration"
    """
    parsed = urlsplit(validate_url(url))
    base = strip_trailing_slash(parsed.path)
    bare_segment = WELL_KNOWN_SEGMENT.rstrip("/")
    if base.endswith(bare_segment):
        base = base[: -len(bare_segment)]
    path = f"{base}{WELL_KNOWN_SEGMENT}{document}"
    return urlunsplit((parsed.scheme, parsed.netloc, path, parsed.query, ""))


def resolve_document_url(seed_url: str, document: str) -> str:
    """
    Resolve the URL to fetch for a well-known document.

    A seed that already points at a well-known document is used unchanged;
    anything else gets document appended.

    Args:
        seed_url: Bare issuer/origin URL or a full well-known document URL
        document: Default well-known document name (e.g. "smart-configuration")

    Returns:
        str: URL to fetch

    Raises:
        MalformedInputError: If seed_url is not a valid http(s) URL
    """
    validate_url(seed_url)

    if is_well_known_url(seed_url):
        logger.debug(f"Seed URL already targets a well-known document: {seed_url}")
        return seed_url

    resolved = well_known_url(seed_url, document)
    logger.debug(f"Resolved {seed_url} -> {resolved}")
    return resolved


def openid_configuration_url(issuer: str, document: str = "openid-configuration") -> str:
    """
    Derive the OpenID Connect discovery URL for an issuer identifier.

    Per OIDC Discovery 1.0 the document lives at the issuer path with one
    trailing slash removed, followed by /.well-known/openid-configuration.
    An issuer that already points at a well-known document is used unchanged.
    """
    return resolve_document_url(issuer, document)
