from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire, snake_case in Python."""

    # Pydantic V2 style configuration
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(BaseModel):
    """Body of POST /shorten.

    long_url stays a plain string: the link service validates it so that a
    malformed URL is a 400, and the exact submitted text is what gets stored.
    Only the camelCase "longUrl" key is accepted; any other key is rejected.
    """
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    long_url: str = Field(..., description="The original URL to be shortened")


class LinkView(CamelModel):
    """Public view of a link: { longUrl, shortCode, shortUrl, clicks, createdAt }"""
    long_url: str
    short_code: str
    short_url: str
    clicks: int
    created_at: datetime


class DeleteResponse(BaseModel):
    deleted: bool
