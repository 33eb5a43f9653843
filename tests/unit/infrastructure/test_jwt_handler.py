"""
Unit tests for JWTHandler.
"""

import pytest
import jwt

from taskboard.config import Settings
from taskboard.domain.models.base import ValidationError
from taskboard.domain.models.user import UserRole, Capability
from taskboard.infrastructure.auth.jwt_handler import JWTHandler


@pytest.fixture
def handler():
    return JWTHandler(Settings(jwt_secret_key="test-secret", jwt_algorithm="HS256"))


class TestJWTHandler:
    """Test cases for token verification."""

    def test_round_trip_user_context(self, handler):
        token = handler.create_access_token("hr-viewer", "STAFF", "dept-eng", is_hr_admin=True)

        user = handler.get_user_context(f"Bearer {token}")

        assert user.user_id == "hr-viewer"
        assert user.role == UserRole.STAFF
        assert user.department_id == "dept-eng"
        assert user.can(Capability.VIEW_ALL) is True

    def test_expired_token(self, handler):
        token = handler.create_access_token("alice", "STAFF", "dept-backend", expires_minutes=-5)

        with pytest.raises(ValidationError) as exc:
            handler.verify_token(token)

        assert exc.value.reason == "token_expired"

    def test_wrong_secret(self, handler):
        other = JWTHandler(Settings(jwt_secret_key="another-secret"))
        token = other.create_access_token("alice", "STAFF", "dept-backend")

        with pytest.raises(ValidationError) as exc:
            handler.verify_token(token)

        assert exc.value.reason == "invalid_token"

    def test_missing_department_claim(self, handler):
        token = jwt.encode(
            {"sub": "alice", "role": "STAFF", "exp": 4102444800},
            "test-secret",
            algorithm="HS256",
        )

        with pytest.raises(ValidationError, match="department_id"):
            handler.verify_token(token)

    def test_unknown_role(self, handler):
        token = jwt.encode(
            {"sub": "alice", "role": "CEO", "department_id": "d1", "exp": 4102444800},
            "test-secret",
            algorithm="HS256",
        )

        with pytest.raises(ValidationError, match="Unknown role"):
            handler.get_user_context(token)
