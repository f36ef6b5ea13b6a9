"""Classify documentation locations as remote URLs or local files."""

import os
from urllib.parse import urlparse


class InvalidUrlError(ValueError):
    """Raised when a string cannot be parsed into a scheme and host."""


def is_http_or_https(url: str) -> bool:
    """Check if the URL is an HTTP or HTTPS URL."""
    return url.startswith(("http:", "https:"))


def normalize_path(path: str) -> str:
    """Accept paths in file:/// or relative format and map to absolute paths."""
    return (
        os.path.abspath(path[7:])
        if path.startswith("file://")
        else os.path.abspath(path)
    )


def extract_domain(url: str) -> str:
    """Extract domain from URL.

    Args:
        url: Full URL

    Returns:
        Domain with scheme and trailing slash (e.g., https://example.com/)

    Raises:
        InvalidUrlError: If the URL has no scheme or no host.
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrlError(f"Invalid URL: {url}") from e
    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrlError(f"Invalid URL: {url}")
    return f"{parsed.scheme}://{parsed.netloc}/"
