"""
Test configuration and fixtures for the FastAPI short link service.
This centralizes all test setup, making individual tests clean.
"""

import os

# Settings are read at import time and BASE_URL is mandatory
os.environ.setdefault("BASE_URL", "http://short.test")
# In-memory SQLite: the app lifespan creates its tables without writing a file
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_BACKEND", "sql")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from shortlink_app.database.connection import Base, get_db
from shortlink_app.storage.factory import LinkStorageFactory
from shortlink_app.storage.strategies import InMemoryLinkStorage, SQLAlchemyLinkStorage


@pytest.fixture(scope="function")
def db_session(tmp_path):
    """
    Create a fresh database for each test.
    This ensures tests are isolated and don't affect each other.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'links.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def sql_storage(db_session):
    return SQLAlchemyLinkStorage(db_session)


@pytest.fixture(scope="function")
def memory_storage():
    return InMemoryLinkStorage()


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database dependency overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    LinkStorageFactory.clear_instance()
