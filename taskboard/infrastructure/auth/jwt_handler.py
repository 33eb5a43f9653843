"""
JWT token handler.
Validates bearer tokens and turns their claims into the acting-user context.
"""

import jwt
from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone

from taskboard.config import Settings, get_settings
from taskboard.domain.models.base import ValidationError
from taskboard.domain.models.user import UserContext, UserRole


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.jwt_secret = self.settings.jwt_secret_key
        self.jwt_algorithm = self.settings.jwt_algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string, with or without the 'Bearer ' prefix

        Returns:
            Dict containing token payload

        Raises:
            ValidationError: If token is invalid, expired or lacks a required claim
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"require": ["sub", "exp"]}
            )
        except jwt.ExpiredSignatureError:
            raise ValidationError("Token has expired", reason="token_expired")
        except jwt.PyJWTError as e:
            raise ValidationError(f"Invalid JWT token: {str(e)}", reason="invalid_token")

        for claim in ("role", "department_id"):
            if not payload.get(claim):
                raise ValidationError(f"Token missing {claim} claim", reason="invalid_token")

        return payload

    def get_user_context(self, token: str) -> UserContext:
        """
        Build the acting-user context from a token.

        Raises:
            ValidationError: If token is invalid or names an unknown role
        """
        payload = self.verify_token(token)

        try:
            role = UserRole(payload["role"])
        except ValueError:
            raise ValidationError(f"Unknown role: {payload['role']}", reason="invalid_token")

        return UserContext(
            user_id=payload["sub"],
            role=role,
            department_id=payload["department_id"],
            is_hr_admin=bool(payload.get("is_hr_admin", False)),
        )

    def create_access_token(
        self,
        user_id: str,
        role: str,
        department_id: str,
        is_hr_admin: bool = False,
        expires_minutes: Optional[int] = None,
    ) -> str:
        """Issue a signed token. Used by tests and local tooling."""
        now = datetime.now(timezone.utc)
        minutes = expires_minutes if expires_minutes is not None else self.settings.jwt_access_token_expire_minutes

        payload = {
            "sub": user_id,
            "role": UserRole(role).value,
            "department_id": department_id,
            "is_hr_admin": is_hr_admin,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=minutes)).timestamp()),
        }

        return jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
