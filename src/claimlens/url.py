"""URL handling utilities."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def extract_domain(url: str) -> str:
    """Extract the canonical hostname from a URL.

    Args:
        url: The URL to extract the domain from.

    Returns:
        The lower-cased hostname without its 'www.' prefix, or "Unknown" if
        the URL has no host.
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None
    if not hostname:
        logger.warning(f"Could not get domain from url {url}")
        return "Unknown"
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname


def is_http_url(text: str) -> bool:
    """Whether ``text`` looks like an absolute http(s) URL."""
    try:
        parsed = urlparse(text.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
