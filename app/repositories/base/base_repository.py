"""
Generic repository over one mapped model.

Domain repositories extend it with their own queries and conditional
writes.
"""

from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import Select

from app.core.exceptions import RepositoryError
from app.core.logging import get_logger
from app.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Persistence for ``model`` through a caller-owned session.

    Writes commit by default; pass ``commit=False`` to leave the
    transaction open for the caller.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    # ==================== Write ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        self.db.add(entity)
        self._persist(entity, commit)
        logger.debug(f"Created {self.model.__name__} {entity.id}")
        return entity

    def save(self, entity: ModelType, commit: bool = True) -> ModelType:
        self.db.add(entity)
        self._persist(entity, commit)
        return entity

    def _persist(self, entity: ModelType, commit: bool) -> None:
        try:
            if not commit:
                self.db.flush()
                return
            self.db.commit()
            self.db.refresh(entity)
        except StaleDataError:
            # the row was deleted concurrently; callers map this to not-found
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{self.model.__name__} write failed: {str(e)}")
            raise RepositoryError(f"{self.model.__name__} write failed: {str(e)}") from e

    # ==================== Read ====================

    def get_by_id(self, entity_id: Any) -> Optional[ModelType]:
        return self.db.get(self.model, entity_id)

    def find_page(self, offset: int, limit: int) -> Tuple[List[ModelType], int]:
        """One page of every row, newest first, with the total row count."""
        return self._paginate(select(self.model), offset, limit)

    def _paginate(self, stmt: Select, offset: int, limit: int) -> Tuple[List[ModelType], int]:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = self.db.scalar(count_stmt) or 0
        page_stmt = stmt.order_by(*self._default_order()).offset(offset).limit(limit)
        return list(self.db.scalars(page_stmt).all()), int(total)

    def _default_order(self) -> tuple:
        created_at = getattr(self.model, "created_at", None)
        if created_at is None:
            return (self.model.id,)
        return (created_at.desc(), self.model.id)
