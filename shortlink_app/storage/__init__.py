"""
Storage module for the short link service.
Implements Strategy Pattern for flexible link store backends.
"""

from .models import LinkRecord
from .strategies import LinkStorageStrategy, SQLAlchemyLinkStorage, InMemoryLinkStorage
from .factory import LinkStorageFactory, LinkStorageBackend

__all__ = [
    "LinkRecord",
    "LinkStorageStrategy",
    "SQLAlchemyLinkStorage",
    "InMemoryLinkStorage",
    "LinkStorageFactory",
    "LinkStorageBackend",
]
