"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base shared by all models and the UTC clock
used for persisted timestamps.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Root SQLAlchemy base class."""
