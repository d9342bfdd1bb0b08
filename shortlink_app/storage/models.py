"""
Data models returned by link storage backends.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkRecord(BaseModel):
    """
    Backend-neutral snapshot of a stored link.

    Built from a SQLAlchemy row (from_attributes=True) or directly by the
    in-memory backend, so the service never sees ORM objects.
    """

    id: int = Field(..., description="Store-assigned identifier")
    long_url: str = Field(..., description="Original URL, exactly as submitted")
    short_code: str = Field(..., description="Unique short code")
    clicks: int = Field(0, ge=0, description="Number of successful resolutions")
    created_at: datetime = Field(..., description="When the link was created (UTC)")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        # SQLite drops the offset; every timestamp is written in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
