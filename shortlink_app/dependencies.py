"""
FastAPI dependencies for dependency injection.

Routes depend on get_link_service; the service gets its storage backend
and configuration handed in explicitly, so tests can override any layer.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from shortlink_app.config import Settings, get_settings
from shortlink_app.database.connection import get_db
from shortlink_app.services.link_service import LinkService
from shortlink_app.services.short_code_strategies import RandomShortCodeStrategy
from shortlink_app.storage.factory import LinkStorageBackend, LinkStorageFactory
from shortlink_app.storage.strategies import LinkStorageStrategy


def get_link_storage(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> LinkStorageStrategy:
    """
    Get the link storage backend selected by STORAGE_BACKEND.

    Returns:
        LinkStorageStrategy bound to this request's session (SQL)
        or the shared in-memory store
    """
    backend = LinkStorageBackend(settings.storage_backend)
    return LinkStorageFactory.create(backend, db=db)


def get_link_service(
    storage: LinkStorageStrategy = Depends(get_link_storage),
    settings: Settings = Depends(get_settings)
) -> LinkService:
    """
    Get LinkService with all dependencies injected.

    Controller depends on service, service depends on storage.
    """
    return LinkService(
        storage=storage,
        base_url=settings.base_url,
        code_strategy=RandomShortCodeStrategy(length=settings.short_code_length),
        max_attempts=settings.max_allocation_attempts,
    )
