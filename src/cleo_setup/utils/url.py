"""
URL parsing utilities.

This module provides the small amount of URL handling the setup string
needs: validating embedded URLs, normalizing their textual form and
extracting host and port for the CARL connection.
"""

from typing import Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit


def parse_url(value: str) -> SplitResult:
    """
    Parse and validate an absolute URL.

    Args:
        value: URL text (e.g. https://carl.example.com:8443/)

    Returns:
        The split URL

    Raises:
        ValueError: If the URL is empty, has no scheme or has an invalid port
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("URL must be a non-empty string")

    parsed = urlsplit(value.strip())
    if not parsed.scheme:
        raise ValueError(f"URL '{value}' has no scheme")

    try:
        parsed.port
    except ValueError as e:
        raise ValueError(f"URL '{value}' has an invalid port") from e

    return parsed


def normalize_url(value: str) -> str:
    """
    Return the canonical text of a URL.

    A URL with an authority but no path gets the root path, so
    https://auth:1234 and https://auth:1234/ render the same.
    """
    parsed = parse_url(value)
    path = parsed.path
    if not path and parsed.netloc:
        path = "/"
    return urlunsplit(
        (parsed.scheme, parsed.netloc, path, parsed.query, parsed.fragment)
    )


def url_host(url: str) -> Optional[str]:
    """Host component of a URL, or None when it has none"""
    return urlsplit(url).hostname or None


def url_port(url: str, default: int) -> int:
    """Explicit port of a URL, falling back to the given default"""
    port = urlsplit(url).port
    return port if port is not None else default
