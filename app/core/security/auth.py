"""
Credential resolution.

Turns an opaque bearer credential into the acting principal: a user id
and a role. Authentication failures surface as ``AuthenticationError``
subclasses; an unrecognised role claim yields a principal without a role,
which every permission check denies.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from app.core.exceptions import InvalidTokenError
from app.core.security.jwt_handler import JWTManager
from app.models.base.enums import UserRole


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as seen by the service layer."""

    user_id: UUID
    role: Optional[UserRole]

    def has_role(self, role: UserRole) -> bool:
        return self.role is role


class IdentityResolver:
    """Resolves bearer tokens into principals."""

    def __init__(self, jwt_manager: JWTManager):
        self.jwt_manager = jwt_manager

    def resolve(self, token: str) -> Principal:
        if token and token.lower().startswith("bearer "):
            token = token[7:]
        if not token:
            raise InvalidTokenError(reason="missing credential")

        payload = self.jwt_manager.verify_token(token)

        raw_user_id = payload.get("user_id")
        try:
            user_id = UUID(str(raw_user_id))
        except (TypeError, ValueError) as e:
            raise InvalidTokenError(reason="malformed user_id claim") from e

        return Principal(user_id=user_id, role=UserRole.parse(payload.get("role")))
