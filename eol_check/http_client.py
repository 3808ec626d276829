"""HTTP client utilities with consistent user agent."""

from typing import Optional

import requests

from . import __version__

DEFAULT_TIMEOUT = 30

USER_AGENT = f"eol-check/{__version__} (python-requests)"


def get_default_headers(accept: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        accept: Optional Accept header value (e.g., "application/json")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if accept:
        headers["Accept"] = accept
    return headers


def create_session() -> requests.Session:
    """Create a requests session carrying the eol-check User-Agent."""
    session = requests.Session()
    session.headers.update(get_default_headers())
    return session
