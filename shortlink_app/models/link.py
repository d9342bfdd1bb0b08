from sqlalchemy import Column, Integer, String, DateTime
from shortlink_app.database.connection import Base


class Link(Base):
    """
    Link record: a long URL mapped to its short code.

    created_at is written by the service at creation time, never by a
    server default, so the value returned on create matches what is stored.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    long_url = Column(String, nullable=False, index=True)
    # unique=True creates the index that rejects a concurrently minted duplicate
    short_code = Column(String(16), unique=True, nullable=False, index=True)
    clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False)
