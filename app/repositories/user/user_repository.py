# app/repositories/user/user_repository.py
"""
User repository.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.user.user import User
from app.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: Session):
        super().__init__(User, session)

    def find_by_full_name(self, full_name: str) -> Optional[User]:
        """First user with the given full name, used to resolve the guest account."""
        stmt = select(User).where(User.full_name == full_name).order_by(User.created_at).limit(1)
        return self.db.scalars(stmt).first()
