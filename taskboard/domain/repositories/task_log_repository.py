"""
Task log repository interface.
Log entries are append-only.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from taskboard.domain.models.task import TaskLog


class TaskLogRepository(ABC):
    """Repository interface for task audit entries."""

    @abstractmethod
    async def append(self, entry: TaskLog) -> TaskLog:
        """
        Store a new log entry.
        """
        pass

    @abstractmethod
    async def find_by_task(self, task_id: str, limit: Optional[int] = None) -> List[TaskLog]:
        """
        Entries for a task, newest first.
        """
        pass
