"""Tests for JWT handling and credential resolution."""

from datetime import timedelta
from uuid import uuid4

import pytest

from app.core.exceptions import InvalidTokenError, TokenExpiredError
from app.core.security import IdentityResolver, JWTManager
from app.models.base import UserRole


class TestIdentityResolver:
    def test_resolves_bearer_token(self, jwt_manager, identity_resolver):
        user_id = uuid4()
        token = jwt_manager.create_access_token(user_id, "PARTNER")

        principal = identity_resolver.resolve(f"Bearer {token}")

        assert principal.user_id == user_id
        assert principal.role is UserRole.PARTNER
        assert principal.has_role(UserRole.PARTNER)

    def test_accepts_raw_token(self, jwt_manager, identity_resolver):
        token = jwt_manager.create_access_token(uuid4(), "admin")
        assert identity_resolver.resolve(token).role is UserRole.ADMIN

    def test_unknown_role_resolves_to_none(self, jwt_manager, identity_resolver):
        token = jwt_manager.create_access_token(uuid4(), "SUPERVISOR")
        assert identity_resolver.resolve(token).role is None

    @pytest.mark.parametrize("credential", ["", "Bearer "])
    def test_missing_credential(self, identity_resolver, credential):
        with pytest.raises(InvalidTokenError):
            identity_resolver.resolve(credential)

    def test_malformed_user_id(self, jwt_manager, identity_resolver):
        token = jwt_manager.create_access_token("not-a-uuid", "ADMIN")
        with pytest.raises(InvalidTokenError) as exc_info:
            identity_resolver.resolve(token)
        assert exc_info.value.details["reason"] == "malformed user_id claim"

    def test_expired_token(self, jwt_manager, identity_resolver):
        token = jwt_manager.create_access_token(uuid4(), "ADMIN", expires_delta=timedelta(seconds=-5))
        with pytest.raises(TokenExpiredError):
            identity_resolver.resolve(token)

    def test_token_signed_with_other_key(self, identity_resolver):
        foreign = JWTManager(secret_key="someone-else").create_access_token(uuid4(), "ADMIN")
        with pytest.raises(InvalidTokenError):
            identity_resolver.resolve(foreign)


def test_tokens_carry_claims(jwt_manager):
    user_id = uuid4()
    token = jwt_manager.create_access_token(user_id, "CUSTOMER", additional_claims={"hotel": "h-1"})

    payload = jwt_manager.verify_token(token)

    assert payload["user_id"] == str(user_id)
    assert payload["role"] == "CUSTOMER"
    assert payload["token_type"] == "access"
    assert payload["hotel"] == "h-1"


def test_principal_is_immutable(jwt_manager):
    principal = IdentityResolver(jwt_manager).resolve(jwt_manager.create_access_token(uuid4(), "ADMIN"))
    with pytest.raises(AttributeError):
        principal.role = UserRole.CUSTOMER
