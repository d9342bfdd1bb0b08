from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below

    BASE_URL has no default: starting without it fails immediately
    instead of handing out malformed short URLs.
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Short Link Service"
    app_version: str = "1.0.0"
    api_prefix: str = "/api/v1"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Database
    database_url: str = "sqlite:///./shortlinks.db"
    storage_backend: Literal["sql", "memory"] = "sql"

    # Short link specific
    base_url: str
    short_code_length: int = 7
    max_allocation_attempts: int = 10

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("BASE_URL must not be empty")
        return value.rstrip("/")

    @field_validator("storage_backend", mode="before")
    @classmethod
    def normalize_backend(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        value = value.strip().strip("/")
        return f"/{value}" if value else ""


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings instance (singleton).

    Raises a pydantic ValidationError when BASE_URL is missing.
    """
    return Settings()
