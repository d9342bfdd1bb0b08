import pytest
from pydantic import ValidationError

from shortlink_app.config import Settings
from shortlink_app.storage.factory import LinkStorageBackend, LinkStorageFactory
from shortlink_app.storage.strategies import InMemoryLinkStorage, SQLAlchemyLinkStorage


class TestSettings:

    def test_base_url_is_required(self, monkeypatch):
        monkeypatch.delenv("BASE_URL", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_empty_base_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, base_url="  ")

    def test_trailing_slash_stripped(self):
        settings = Settings(_env_file=None, base_url="https://sho.rt/")
        assert settings.base_url == "https://sho.rt"

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "SHORT_CODE_LENGTH", "MAX_ALLOCATION_ATTEMPTS", "API_PREFIX"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None, base_url="https://sho.rt")

        assert settings.port == 5000
        assert settings.short_code_length == 7
        assert settings.max_allocation_attempts == 10
        assert settings.api_prefix == "/api/v1"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("BASE_URL", "https://env.example")
        monkeypatch.setenv("PORT", "8080")

        settings = Settings(_env_file=None)

        assert settings.base_url == "https://env.example"
        assert settings.port == 8080

    def test_unknown_storage_backend_fails_at_startup(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "mongo")

        with pytest.raises(ValidationError):
            Settings(_env_file=None, base_url="https://sho.rt")

    def test_storage_backend_case_insensitive(self):
        settings = Settings(_env_file=None, base_url="https://sho.rt", storage_backend=" Memory ")
        assert settings.storage_backend == "memory"
        assert LinkStorageBackend(settings.storage_backend) is LinkStorageBackend.MEMORY

    @pytest.mark.parametrize("raw, expected", [("api/v2/", "/api/v2"), ("/", ""), ("/x", "/x")])
    def test_prefix_normalized(self, raw, expected):
        assert Settings(_env_file=None, base_url="https://sho.rt", api_prefix=raw).api_prefix == expected


class TestLinkStorageFactory:

    def setup_method(self):
        LinkStorageFactory.clear_instance()

    def teardown_method(self):
        LinkStorageFactory.clear_instance()

    def test_sql_backend_wraps_session(self, db_session):
        storage = LinkStorageFactory.create(LinkStorageBackend.SQL, db=db_session)
        assert isinstance(storage, SQLAlchemyLinkStorage)
        assert storage.db is db_session

    def test_sql_backend_needs_session(self):
        with pytest.raises(ValueError):
            LinkStorageFactory.create(LinkStorageBackend.SQL)

    def test_memory_backend_is_shared(self):
        first = LinkStorageFactory.create(LinkStorageBackend.MEMORY)
        second = LinkStorageFactory.create(LinkStorageBackend.MEMORY)

        assert isinstance(first, InMemoryLinkStorage)
        assert first is second

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            LinkStorageBackend("mongo")
