"""
Task repository interface.
Defines the contract for task data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import AbstractSet, List, Optional

from taskboard.domain.models.task import Task


class TaskRepository(ABC):
    """
    Repository interface for the Task aggregate.
    Assignees, tags, comments and files are persisted with the task.
    """

    @abstractmethod
    async def save(self, task: Task, acting_user_id: Optional[str] = None) -> Task:
        """
        Insert or update a task with all of its relations.
        New assignments are attributed to acting_user_id.
        Returns the saved task.
        """
        pass

    @abstractmethod
    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """
        Find a task by its ID, relations included.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def find_subtasks(self, parent_task_id: str, include_archived: bool = True) -> List[Task]:
        """
        Find the direct subtasks of a task.
        """
        pass

    @abstractmethod
    async def has_subtasks(self, task_id: str) -> bool:
        """
        Check whether any task names this one as its parent.
        """
        pass

    @abstractmethod
    async def find_in_departments(
        self,
        department_ids: AbstractSet[str],
        include_archived: bool = False
    ) -> List[Task]:
        """
        Find tasks whose department, or any assignee's department, is in the set.
        """
        pass

    @abstractmethod
    async def count_active_assignments_in_project(self, user_id: str, project_id: str) -> int:
        """
        Count non-archived tasks in the project that the user is assigned to.
        """
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """
        Delete a task by ID.
        Returns True if deleted, False if not found.
        """
        pass
