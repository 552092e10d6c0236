"""Database initialization utilities."""

from typing import Optional

from sqlalchemy.engine import Engine

from app.core.logging import get_logger
from app.db.base import Base

logger = get_logger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all tables that do not exist yet.

    Suitable for development and tests; production schemas are managed
    with migrations.
    """
    if bind is None:
        from app.db.session import engine as bind

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured")
