"""Input validation utilities for MercadoLibre API parameters."""

from typing import Any
from urllib.parse import urlparse

from ..constants import AUTH_URLS


def validate_positive_integer(value: Any) -> bool:
    """Validate that a value is an integer greater than zero.

    Booleans are rejected even though ``bool`` subclasses ``int``.

    Args:
        value: The value to validate

    Returns:
        True if value is a positive integer
    """
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_non_empty_string(value: Any) -> bool:
    """Validate that a value is a string with visible content.

    Args:
        value: The value to validate

    Returns:
        True if value is a non-blank string
    """
    return isinstance(value, str) and len(value.strip()) > 0


def validate_url(url: Any) -> bool:
    """Validate an absolute http(s) URL such as an OAuth redirect URI.

    Args:
        url: The URL to validate

    Returns:
        True if URL has an http or https scheme and a host
    """
    if not isinstance(url, str) or not url:
        return False

    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_site_id(site_id: str) -> bool:
    """Validate a MercadoLibre site ID (MLA, MLB, ...).

    Args:
        site_id: The site ID to validate

    Returns:
        True if the site has a known login page
    """
    return site_id in AUTH_URLS
