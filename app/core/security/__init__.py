"""Security module for authentication."""

from .auth import IdentityResolver, Principal
from .jwt_handler import JWTManager

__all__ = [
    "IdentityResolver",
    "JWTManager",
    "Principal",
]
