# app/services/common/unit_of_work.py
"""
Session scope for work done outside a request.

Background jobs have no request-scoped session; each run opens a
``UnitOfWork`` that owns one session from the factory, hands out
repositories bound to it and ends the transaction on exit.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError
from app.core.logging import get_logger
from app.repositories.base import BaseRepository

logger = get_logger(__name__)

TRepository = TypeVar("TRepository", bound=BaseRepository)


class UnitOfWork:
    """
    One session, one transaction.

    Usage:
        >>> with UnitOfWork(session_factory) as uow:
        ...     uow.get_repo(BookingRepository).delete_if_pending(booking_id)

    The transaction is committed when the block exits normally (unless
    ``auto_commit`` is off) and rolled back when it raises. The session is
    always closed.
    """

    def __init__(self, session_factory: Callable[[], Session], *, auto_commit: bool = True) -> None:
        self._session_factory = session_factory
        self._auto_commit = auto_commit
        self._session: Optional[Session] = None
        self._repositories: Dict[type, BaseRepository] = {}

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active")
        return self._session

    def __enter__(self) -> "UnitOfWork":
        if self._session is not None:
            raise RuntimeError("UnitOfWork is not reentrant")
        self._session = self._session_factory()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        session, self._session = self._session, None
        self._repositories.clear()
        try:
            if exc_type is not None:
                session.rollback()
                logger.debug(f"UnitOfWork rolled back after {exc_type.__name__}")
            elif self._auto_commit:
                session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise RepositoryError(f"Unit of work commit failed: {str(e)}") from e
        finally:
            session.close()
        return False

    def get_repo(self, repo_cls: Type[TRepository]) -> TRepository:
        """Repository of ``repo_cls`` bound to this unit's session, created once."""
        repo = self._repositories.get(repo_cls)
        if repo is None:
            repo = self._repositories[repo_cls] = repo_cls(self.session)
        return repo  # type: ignore[return-value]
