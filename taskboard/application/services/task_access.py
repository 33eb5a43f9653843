"""
Loads what authorization decisions need and applies them.
One instance serves one request; the hierarchy is memoized for its lifetime.
"""

from typing import Dict, Optional, Set

from taskboard.domain.models.base import EntityNotFoundError, UnauthorizedError
from taskboard.domain.models.task import Task
from taskboard.domain.models.user import UserContext
from taskboard.domain.repositories.department_repository import DepartmentRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.services.authorization_service import AuthorizationService
from taskboard.domain.services.department_hierarchy import DepartmentHierarchy


class TaskAccessService:
    """Bridges repositories and the pure authorization engine."""

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        department_repository: DepartmentRepository,
        authorization: Optional[AuthorizationService] = None,
    ):
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.department_repository = department_repository
        self.authorization = authorization or AuthorizationService()
        self._hierarchy: Optional[DepartmentHierarchy] = None
        self._subtrees: Dict[str, Set[str]] = {}

    async def hierarchy(self) -> DepartmentHierarchy:
        if self._hierarchy is None:
            departments = await self.department_repository.find_all()
            self._hierarchy = DepartmentHierarchy(departments)
        return self._hierarchy

    async def scope_of(self, user: UserContext) -> Set[str]:
        """Department ids at or below the user's department."""
        if user.department_id not in self._subtrees:
            hierarchy = await self.hierarchy()
            self._subtrees[user.department_id] = hierarchy.collect_subtree(user.department_id)
        return self._subtrees[user.department_id]

    async def assignee_departments(self, task: Task) -> Set[str]:
        mapping = await self.user_repository.department_ids_for(task.assignee_ids)
        return set(mapping.values())

    async def load_task(self, task_id: str) -> Task:
        task = await self.task_repository.find_by_id(task_id)
        if task is None:
            raise EntityNotFoundError("Task", task_id)
        return task

    async def can_view(self, task: Task, user: UserContext) -> bool:
        return self.authorization.can_view_task(
            task, user, await self.scope_of(user), await self.assignee_departments(task)
        )

    async def can_edit(self, task: Task, user: UserContext) -> bool:
        return self.authorization.can_edit_task(
            task, user, await self.scope_of(user), await self.assignee_departments(task)
        )

    async def can_archive(self, task: Task, user: UserContext) -> bool:
        return self.authorization.can_archive_task(
            task, user, await self.scope_of(user), await self.assignee_departments(task)
        )

    async def require_view(self, task: Task, user: UserContext) -> None:
        if not await self.can_view(task, user):
            raise UnauthorizedError("You do not have permission to view this task")

    async def require_edit(self, task: Task, user: UserContext) -> None:
        if not await self.can_edit(task, user):
            raise UnauthorizedError("You do not have permission to edit this task")

    async def require_archive(self, task: Task, user: UserContext) -> None:
        if not await self.can_archive(task, user):
            raise UnauthorizedError("Only managers can archive tasks")
