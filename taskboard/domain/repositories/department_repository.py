"""
Department repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from taskboard.domain.models.department import Department


class DepartmentRepository(ABC):
    """Repository interface for departments."""

    @abstractmethod
    async def save(self, department: Department) -> Department:
        """
        Insert or update a department.
        """
        pass

    @abstractmethod
    async def find_by_id(self, department_id: str) -> Optional[Department]:
        """
        Find a department by ID.
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Department]:
        """
        Every department, active or not. Used to build the hierarchy.
        """
        pass
