"""SQLAlchemy Base with every model registered."""

from app.models import Base  # noqa: F401  registers all mappers on import

__all__ = ["Base"]
