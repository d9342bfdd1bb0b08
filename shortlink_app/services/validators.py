"""Validation helpers run before the link service touches the store."""

from typing import Optional
from urllib.parse import urlsplit

from shortlink_app.exceptions import InvalidURLError

ALLOWED_SCHEMES = frozenset({"http", "https", "ftp"})


def validate_long_url(long_url) -> Optional[InvalidURLError]:
    """Check that a value is a well-formed absolute http(s)/ftp URL.

    Returns the error instead of raising it; None means the URL is valid.
    The URL is only inspected, never normalized.
    """
    if not isinstance(long_url, str) or not long_url.strip():
        return InvalidURLError("URL cannot be empty")

    if any(ch.isspace() for ch in long_url):
        return InvalidURLError()

    try:
        parts = urlsplit(long_url)
        # Accessing port validates it (raises ValueError when out of range)
        parts.port
    except ValueError:
        return InvalidURLError()

    # urlsplit lowercases the scheme, so HTTPS:// is accepted
    if parts.scheme not in ALLOWED_SCHEMES:
        return InvalidURLError()

    if not parts.netloc or not parts.hostname:
        return InvalidURLError()

    return None
