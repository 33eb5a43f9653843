"""
Authentication dependencies for FastAPI.
"""

from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from taskboard.infrastructure.auth.jwt_handler import JWTHandler
from taskboard.domain.models.base import ValidationError
from taskboard.domain.models.user import UserContext


# Security scheme
security = HTTPBearer()

jwt_handler = JWTHandler()


def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    return jwt_handler


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> UserContext:
    """
    FastAPI dependency yielding the authenticated user's context.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    try:
        return jwt_handler.get_user_context(credentials.credentials)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


CurrentUser = Annotated[UserContext, Depends(get_current_user)]
