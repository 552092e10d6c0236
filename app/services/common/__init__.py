"""Common service infrastructure."""

from app.services.common.unit_of_work import UnitOfWork

__all__ = ["UnitOfWork"]
