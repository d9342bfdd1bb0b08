"""
Link storage strategies using Strategy Pattern.

Allows switching between different link stores:
- SQLAlchemy: SQLite / PostgreSQL through one code path (production)
- In-memory: development and tests, no database needed
"""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import DuplicateShortCodeError
from shortlink_app.models.link import Link
from shortlink_app.storage.models import LinkRecord


class LinkStorageStrategy(ABC):
    """
    Abstract base class for link storage strategies.

    Every backend must provide two guarantees the service relies on:
    - insert() rejects a short code that already exists
    - increment_clicks() is a single atomic read-modify-write
    """

    @abstractmethod
    def find_by_long_url(self, long_url: str) -> Optional[LinkRecord]:
        """Return the link stored for this exact long URL, if any"""
        pass

    @abstractmethod
    def find_by_short_code(self, short_code: str) -> Optional[LinkRecord]:
        """Return the link for a short code, if any"""
        pass

    @abstractmethod
    def insert(self, long_url: str, short_code: str, created_at: datetime) -> LinkRecord:
        """
        Persist a new link with zero clicks.

        Raises:
            DuplicateShortCodeError: If the short code is already taken
        """
        pass

    @abstractmethod
    def increment_clicks(self, short_code: str) -> Optional[str]:
        """
        Atomically add one click and return the long URL.

        Returns:
            The long URL, or None if the short code is unknown
        """
        pass

    @abstractmethod
    def list_all(self) -> List[LinkRecord]:
        """Return all links, newest first"""
        pass

    @abstractmethod
    def delete(self, short_code: str) -> bool:
        """
        Delete a link by short code.

        Returns:
            True if a link was removed, False if it did not exist
        """
        pass


class SQLAlchemyLinkStorage(LinkStorageStrategy):
    """
    SQLAlchemy implementation over the links table.

    The unique index on short_code settles races between concurrent
    inserts; UPDATE ... RETURNING keeps the click increment in one statement.
    """

    def __init__(self, db: Session):
        """
        Args:
            db: Database session (one per request)
        """
        self.db = db

    def find_by_long_url(self, long_url: str) -> Optional[LinkRecord]:
        link = self.db.execute(
            select(Link).where(Link.long_url == long_url).order_by(Link.id).limit(1)
        ).scalar_one_or_none()
        return LinkRecord.model_validate(link) if link else None

    def find_by_short_code(self, short_code: str) -> Optional[LinkRecord]:
        link = self.db.execute(
            select(Link).where(Link.short_code == short_code)
        ).scalar_one_or_none()
        return LinkRecord.model_validate(link) if link else None

    def insert(self, long_url: str, short_code: str, created_at: datetime) -> LinkRecord:
        link = Link(long_url=long_url, short_code=short_code, clicks=0, created_at=created_at)
        self.db.add(link)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateShortCodeError(short_code) from e
        self.db.refresh(link)
        return LinkRecord.model_validate(link)

    def increment_clicks(self, short_code: str) -> Optional[str]:
        stmt = (
            update(Link)
            .where(Link.short_code == short_code)
            .values(clicks=Link.clicks + 1)
            .returning(Link.long_url)
        )
        long_url = self.db.execute(stmt).scalar_one_or_none()
        self.db.commit()
        return long_url

    def list_all(self) -> List[LinkRecord]:
        links = self.db.execute(
            select(Link).order_by(Link.created_at.desc(), Link.id.desc())
        ).scalars().all()
        return [LinkRecord.model_validate(link) for link in links]

    def delete(self, short_code: str) -> bool:
        result = self.db.execute(delete(Link).where(Link.short_code == short_code))
        self.db.commit()
        return result.rowcount > 0


class InMemoryLinkStorage(LinkStorageStrategy):
    """
    In-memory implementation for development and tests.

    A single lock guards both indexes so insert and increment behave
    atomically across FastAPI's worker threads. Data is lost on restart.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_code: Dict[str, LinkRecord] = {}
        self._next_id = 1

    def find_by_long_url(self, long_url: str) -> Optional[LinkRecord]:
        with self._lock:
            matches = [r for r in self._by_code.values() if r.long_url == long_url]
            if not matches:
                return None
            return min(matches, key=lambda r: r.id).model_copy()

    def find_by_short_code(self, short_code: str) -> Optional[LinkRecord]:
        with self._lock:
            record = self._by_code.get(short_code)
            return record.model_copy() if record else None

    def insert(self, long_url: str, short_code: str, created_at: datetime) -> LinkRecord:
        with self._lock:
            if short_code in self._by_code:
                raise DuplicateShortCodeError(short_code)
            record = LinkRecord(
                id=self._next_id,
                long_url=long_url,
                short_code=short_code,
                clicks=0,
                created_at=created_at,
            )
            self._next_id += 1
            self._by_code[short_code] = record
            return record.model_copy()

    def increment_clicks(self, short_code: str) -> Optional[str]:
        with self._lock:
            record = self._by_code.get(short_code)
            if record is None:
                return None
            record.clicks += 1
            return record.long_url

    def list_all(self) -> List[LinkRecord]:
        with self._lock:
            records = sorted(
                self._by_code.values(),
                key=lambda r: (r.created_at, r.id),
                reverse=True,
            )
            return [r.model_copy() for r in records]

    def delete(self, short_code: str) -> bool:
        with self._lock:
            return self._by_code.pop(short_code, None) is not None

    def clear(self) -> None:
        """Drop every stored link"""
        with self._lock:
            self._by_code.clear()
            self._next_id = 1
