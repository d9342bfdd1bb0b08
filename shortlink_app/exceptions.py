"""
Error types raised by the link service and its storage backends.

Each service error carries the HTTP status code the API answers with,
so routes translate them without a lookup table.
"""


class ShortenerError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidURLError(ShortenerError):
    """The submitted long URL is not a well-formed absolute URL (client error)."""

    status_code = 400
    default_message = (
        "Invalid URL format. Please provide a valid URL including http:// or https://"
    )


class ShortCodeNotFoundError(ShortenerError):
    """No link exists for the requested short code."""

    status_code = 404
    default_message = "Short URL not found"

    def __init__(self, short_code: str = None, message: str = None):
        self.short_code = short_code
        super().__init__(message)


class AllocationExhaustedError(ShortenerError):
    """No unique short code could be minted within the attempt limit."""

    status_code = 500
    default_message = "Failed to generate unique short code after multiple attempts"

    def __init__(self, attempts: int = None, message: str = None):
        self.attempts = attempts
        super().__init__(message)


class DuplicateShortCodeError(Exception):
    """The store's uniqueness constraint rejected a short code on insert."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code already exists: {short_code}")
