"""
Unit tests for JWTHandler.
"""

import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt

from task_api.config import Settings
from task_api.domain.models.base import AuthenticationError
from task_api.domain.models.role import Role
from task_api.infrastructure.auth.jwt_handler import JWTHandler

SECRET = "unit-test-secret"


@pytest.fixture
def handler():
    return JWTHandler(Settings(jwt_algorithm="HS256", jwt_secret_key=SECRET))


def _token(claims, secret=SECRET, expires_in=timedelta(minutes=5)):
    payload = {"sub": "alice", "exp": datetime.now(timezone.utc) + expires_in}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


class TestJWTHandler:
    """Test cases for JWTHandler."""

    def test_authenticate_list_scope(self, handler):
        """Test numeric userId and a list scope claim."""
        token = _token({"userId": 2, "scope": ["ROLE_USER", "ROLE_ADMIN"]})

        caller = handler.authenticate(token)

        assert caller.user_id == 2
        assert caller.roles == [Role.USER, Role.ADMIN]
        assert caller.token == token

    def test_authenticate_space_separated_scope(self, handler):
        caller = handler.authenticate(_token({"userId": "7", "scope": "ROLE_USER ROLE_ADMIN"}))
        assert caller.user_id == 7
        assert caller.roles == [Role.USER, Role.ADMIN]

    def test_unprefixed_admin_scope_grants_nothing(self, handler):
        caller = handler.authenticate(_token({"userId": 7, "scope": "user admin"}))
        assert caller.roles == []

    def test_bearer_prefix_stripped(self, handler):
        token = _token({"userId": 3})
        caller = handler.authenticate(f"Bearer {token}")
        assert caller.token == token
        assert caller.roles == []

    def test_unknown_roles_ignored(self, handler):
        caller = handler.authenticate(_token({"userId": 3, "scope": ["openid", "ROLE_USER"]}))
        assert caller.roles == [Role.USER]

    @pytest.mark.parametrize("claims", [{}, {"userId": "alice"}, {"userId": True}, {"userId": 2.5}])
    def test_missing_or_non_numeric_user_id(self, handler, claims):
        with pytest.raises(AuthenticationError):
            handler.authenticate(_token(claims))

    def test_wrong_signature(self, handler):
        with pytest.raises(AuthenticationError, match="Invalid JWT token"):
            handler.authenticate(_token({"userId": 2}, secret="other-secret"))

    def test_expired_token(self, handler):
        with pytest.raises(AuthenticationError):
            handler.authenticate(_token({"userId": 2}, expires_in=timedelta(minutes=-5)))

    def test_garbage_token(self, handler):
        with pytest.raises(AuthenticationError):
            handler.authenticate("not-a-jwt")

    def test_missing_public_key(self):
        handler = JWTHandler(Settings(jwt_algorithm="RS256", jwt_public_key=None))
        with pytest.raises(AuthenticationError, match="not configured"):
            handler.authenticate(_token({"userId": 2}))
