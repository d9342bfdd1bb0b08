import pytest

from shortlink_app.exceptions import InvalidURLError
from shortlink_app.services.validators import validate_long_url


@pytest.mark.parametrize("url", [
    "https://example.com",
    "http://example.com/",
    "https://www.example.com/path?b=2&a=1#frag",
    "http://localhost:8080/x",
    "ftp://files.example.org/pub/file.txt",
    "https://user:pw@example.com",
    "HTTPS://EXAMPLE.COM",
])
def test_valid_urls(url):
    assert validate_long_url(url) is None


@pytest.mark.parametrize("url", [
    "not-a-url",
    "example.com",
    "/relative/path",
    "http://",
    "https://exa mple.com",
    " https://example.com",
    "mailto:someone@example.com",
    "1http://example.com",
    "javascript://example.com/%0Aalert(1)",
    "file://host.example/etc/passwd",
    "data://example.com/text",
    "ws://example.com/socket",
    "http://example.com:99999",
])
def test_invalid_urls(url):
    error = validate_long_url(url)
    assert isinstance(error, InvalidURLError)
    assert error.status_code == 400


@pytest.mark.parametrize("value", ["", "   ", None, 42])
def test_empty_or_non_string(value):
    error = validate_long_url(value)
    assert isinstance(error, InvalidURLError)
    assert error.message == "URL cannot be empty"


def test_returns_instead_of_raising():
    """The validator hands back the error; raising is the caller's choice"""
    assert validate_long_url("not-a-url") is not None
