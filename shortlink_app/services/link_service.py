import logging
from datetime import datetime, timezone
from typing import List, Optional

from shortlink_app.exceptions import (
    AllocationExhaustedError,
    DuplicateShortCodeError,
    ShortCodeNotFoundError,
)
from shortlink_app.schemas.link import LinkView
from shortlink_app.services.short_code_strategies import (
    RandomShortCodeStrategy,
    ShortCodeStrategy,
)
from shortlink_app.services.validators import validate_long_url
from shortlink_app.storage.models import LinkRecord
from shortlink_app.storage.strategies import LinkStorageStrategy

logger = logging.getLogger("shortlink.service")


class LinkService:
    """
    Link service with dependency injection for storage and code generation.

    Allocates short codes, resolves them (counting clicks), and exposes
    stats, listing and deletion. Everything it needs is passed in at
    construction; it reads no global settings.
    """

    def __init__(
        self,
        storage: LinkStorageStrategy,
        base_url: str,
        code_strategy: Optional[ShortCodeStrategy] = None,
        max_attempts: int = 10
    ):
        """
        Initialize link service with dependencies.

        Args:
            storage: Link storage backend
            base_url: Public base URL that short codes are appended to
            code_strategy: Short code generator (random, 7 chars by default)
            max_attempts: Codes to try before giving up on allocation
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self.storage = storage
        self.base_url = base_url.rstrip("/")
        self.code_strategy = code_strategy or RandomShortCodeStrategy()
        self.max_attempts = max_attempts

    def short_url_for(self, short_code: str) -> str:
        return f"{self.base_url}/{short_code}"

    def _to_view(self, record: LinkRecord) -> LinkView:
        return LinkView(
            long_url=record.long_url,
            short_code=record.short_code,
            short_url=self.short_url_for(record.short_code),
            clicks=record.clicks,
            created_at=record.created_at,
        )

    def shorten(self, long_url: str) -> LinkView:
        """Return the link for long_url, creating it if needed.

        Deduplication is on the exact string: no trailing-slash, case or
        query-order normalization.

        Process:
        1. Validate the URL
        2. Return the existing link for this exact URL, if any
        3. Draw candidate codes, skipping ones the store already has
        4. Insert; a duplicate-key conflict from a concurrent writer
           costs one attempt and generation starts over

        Raises:
            InvalidURLError: long_url is not a well-formed absolute URL
            AllocationExhaustedError: no unique code within max_attempts
        """
        error = validate_long_url(long_url)
        if error is not None:
            raise error

        existing = self.storage.find_by_long_url(long_url)
        if existing:
            logger.debug("Returning existing link %s for %s", existing.short_code, long_url)
            return self._to_view(existing)

        for attempt in range(1, self.max_attempts + 1):
            short_code = self.code_strategy.generate()

            if self.storage.find_by_short_code(short_code):
                logger.debug("Short code collision on attempt %d: %s", attempt, short_code)
                continue

            try:
                record = self.storage.insert(
                    long_url=long_url,
                    short_code=short_code,
                    created_at=datetime.now(timezone.utc),
                )
            except DuplicateShortCodeError:
                logger.warning(
                    "Short code %s taken concurrently (attempt %d/%d)",
                    short_code, attempt, self.max_attempts,
                )
                # Another request may have shortened the same URL meanwhile
                existing = self.storage.find_by_long_url(long_url)
                if existing:
                    return self._to_view(existing)
                continue

            logger.info("Created short link %s -> %s", record.short_code, record.long_url)
            return self._to_view(record)

        logger.error(
            "Could not allocate a unique short code after %d attempts", self.max_attempts
        )
        raise AllocationExhaustedError(attempts=self.max_attempts)

    def resolve(self, short_code: str) -> str:
        """
        Return the long URL for a short code and count the visit.

        The increment happens inside the store in the same operation as the
        lookup, so concurrent resolutions never lose a click.

        Raises:
            ShortCodeNotFoundError: Unknown short code
        """
        long_url = self.storage.increment_clicks(short_code)
        if long_url is None:
            raise ShortCodeNotFoundError(short_code)
        return long_url

    def stats(self, short_code: str) -> LinkView:
        """Get a link's view without touching its click count"""
        record = self.storage.find_by_short_code(short_code)
        if not record:
            raise ShortCodeNotFoundError(short_code)
        return self._to_view(record)

    def list_all(self) -> List[LinkView]:
        """All links, most recently created first (unpaginated)"""
        return [self._to_view(record) for record in self.storage.list_all()]

    def delete(self, short_code: str) -> bool:
        """
        Delete a link (hard delete).

        Returns False for an unknown short code instead of raising.
        """
        deleted = self.storage.delete(short_code)
        if deleted:
            logger.info("Deleted short link %s", short_code)
        return deleted
