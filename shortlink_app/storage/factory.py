"""
Factory for creating link storage instances.
"""

import logging
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from .strategies import LinkStorageStrategy, SQLAlchemyLinkStorage, InMemoryLinkStorage

logger = logging.getLogger("shortlink.storage")


class LinkStorageBackend(Enum):
    """Available link storage backends"""
    SQL = "sql"
    MEMORY = "memory"


class LinkStorageFactory:
    """
    Simple factory for creating link storage instances.

    The SQL backend wraps the request's session, so a new one is built per
    call. The in-memory backend holds all data itself and is created once.
    """

    _memory_instance: Optional[InMemoryLinkStorage] = None

    @classmethod
    def create(
        cls,
        backend: LinkStorageBackend,
        db: Optional[Session] = None
    ) -> LinkStorageStrategy:
        """
        Create a storage instance for the given backend.

        Args:
            backend: Type of storage backend (from enum)
            db: Database session, required for the SQL backend

        Returns:
            LinkStorageStrategy instance

        Raises:
            ValueError: If the backend is unknown or a session is missing
        """
        if backend == LinkStorageBackend.SQL:
            if db is None:
                raise ValueError("SQL link storage needs a database session")
            return SQLAlchemyLinkStorage(db)

        if backend == LinkStorageBackend.MEMORY:
            if cls._memory_instance is None:
                cls._memory_instance = InMemoryLinkStorage()
                logger.info("In-memory link storage initialized")
            return cls._memory_instance

        raise ValueError(f"Unknown storage backend: {backend}")

    @classmethod
    def clear_instance(cls):
        """Clear cached in-memory instance (for testing)"""
        cls._memory_instance = None
