"""
Shared helpers for SQLAlchemy repositories.
"""

import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from taskboard.domain.models.base import DependencyFailure


logger = logging.getLogger(__name__)


def translate_db_errors(func):
    """Roll back and re-raise database errors as DependencyFailure."""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(
                f"{self.__class__.__name__}.{func.__name__} failed: {str(exc)}"
            )
            raise DependencyFailure(
                f"Storage error during {func.__name__}", cause=exc
            ) from exc
    return wrapper
