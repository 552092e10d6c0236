"""
Bearer token encoding and decoding.

Access tokens are signed JWTs whose ``user_id`` and ``role`` claims
identify the caller.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
from uuid import UUID

import jwt

from app.core.exceptions import InvalidTokenError, TokenExpiredError
from app.core.logging import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


class JWTManager:
    """Signs and verifies access tokens with a shared secret."""

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES = 60

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_minutes: int = DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        # an ephemeral key invalidates every token on restart
        self.secret_key = secret_key or secrets.token_urlsafe(32)
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes

    def create_access_token(
        self,
        user_id: Union[UUID, str],
        role: str,
        additional_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Issue a signed token for ``user_id`` acting as ``role``.

        ``expires_delta`` overrides the configured lifetime; a negative
        delta yields an already expired token.
        """
        issued_at = datetime.now(timezone.utc)
        lifetime = expires_delta if expires_delta is not None else timedelta(minutes=self.access_token_expire_minutes)

        claims: Dict[str, Any] = dict(additional_claims or {})
        claims.update(
            user_id=str(user_id),
            role=role,
            token_type=ACCESS_TOKEN_TYPE,
            iat=issued_at,
            exp=issued_at + lifetime,
            jti=secrets.token_hex(16),
        )
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Decode ``token`` and return its claims.

        Raises:
            TokenExpiredError: the ``exp`` claim has passed
            InvalidTokenError: bad signature, malformed token or wrong type
        """
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired access token")
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected access token: {e}")
            raise InvalidTokenError(reason=str(e)) from e

        if claims.get("token_type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError(reason="not an access token")
        return claims
