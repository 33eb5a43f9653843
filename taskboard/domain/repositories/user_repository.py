"""
User repository interface.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from taskboard.domain.models.user import UserProfile


class UserRepository(ABC):
    """Repository interface for user profiles."""

    @abstractmethod
    async def save(self, user: UserProfile) -> UserProfile:
        """
        Insert or update a user profile.
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[UserProfile]:
        """
        Find a user by ID.
        """
        pass

    @abstractmethod
    async def validate_assignees(self, user_ids: Iterable[str]) -> bool:
        """
        True only if every ID belongs to an existing, active user.
        """
        pass

    @abstractmethod
    async def department_ids_for(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """
        Map each known user ID to its department ID.
        """
        pass
