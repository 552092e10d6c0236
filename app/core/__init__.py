"""Core application modules."""

from .security import IdentityResolver, JWTManager, Principal

__all__ = ["IdentityResolver", "JWTManager", "Principal"]
