"""
Department use cases: hierarchy administration and the department dashboard.
"""

import logging
from typing import Dict, List, Optional

from taskboard.application.use_cases.base_use_case import (
    AuthorizedUseCase,
    CommandUseCase,
    QueryUseCase,
)
from taskboard.application.dto.department_dto import (
    CreateDepartmentRequestDTO,
    UpdateDepartmentRequestDTO,
    DepartmentIdRequestDTO,
    DashboardRequestDTO,
    DepartmentResponseDTO,
    DashboardResponseDTO,
    TaskMetricsDTO,
)
from taskboard.application.dto.task_dto import TaskResponseDTO
from taskboard.application.services.task_access import TaskAccessService
from taskboard.domain.models.base import (
    EntityNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from taskboard.domain.models.department import Department
from taskboard.domain.models.task import Task, TaskStatus
from taskboard.domain.models.user import Capability
from taskboard.domain.repositories.department_repository import DepartmentRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.services.authorization_service import AuthorizationService
from taskboard.domain.services.department_hierarchy import DepartmentHierarchy


logger = logging.getLogger(__name__)


class DepartmentAdminMixin:
    """Authorization and lookups shared by the department commands."""

    department_repository: DepartmentRepository
    user_repository: UserRepository

    async def _hierarchy(self) -> DepartmentHierarchy:
        return DepartmentHierarchy(await self.department_repository.find_all())

    def _require_manage(self, hierarchy: DepartmentHierarchy, department_id: Optional[str]) -> None:
        scope = hierarchy.collect_subtree(self.current_user.department_id)
        if not AuthorizationService().can_manage_department(self.current_user, department_id, scope):
            raise UnauthorizedError("You do not have permission to manage this department")

    async def _load_department(self, department_id: str) -> Department:
        department = await self.department_repository.find_by_id(department_id)
        if department is None:
            raise EntityNotFoundError("Department", department_id)
        return department

    async def _load_active_parent(self, parent_id: str) -> Department:
        parent = await self._load_department(parent_id)
        if not parent.is_active:
            raise ValidationError(
                "Parent department is inactive", "parent_id", reason="inactive_parent"
            )
        return parent

    async def _require_user(self, user_id: str) -> None:
        if await self.user_repository.find_by_id(user_id) is None:
            raise EntityNotFoundError("User", user_id)


class CreateDepartmentUseCase(
    DepartmentAdminMixin,
    AuthorizedUseCase,
    CommandUseCase[CreateDepartmentRequestDTO, DepartmentResponseDTO],
):
    """Use case for adding a department under an existing one, or as a new root."""

    def __init__(self, department_repository: DepartmentRepository, user_repository: UserRepository):
        super().__init__()
        self.department_repository = department_repository
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: CreateDepartmentRequestDTO) -> DepartmentResponseDTO:
        hierarchy = await self._hierarchy()
        self._require_manage(hierarchy, request.parent_id)

        if request.parent_id:
            await self._load_active_parent(request.parent_id)
        if request.manager_id:
            await self._require_user(request.manager_id)

        department = Department.create(
            name=request.name,
            parent_id=request.parent_id,
            manager_id=request.manager_id,
        )
        saved = await self.department_repository.save(department)

        logger.info(f"Department {saved.id} created by {self.current_user_id}")
        return DepartmentResponseDTO.from_domain(saved)


class UpdateDepartmentUseCase(
    DepartmentAdminMixin,
    AuthorizedUseCase,
    CommandUseCase[UpdateDepartmentRequestDTO, DepartmentResponseDTO],
):
    """Renames, re-parents or changes the manager of a department."""

    def __init__(self, department_repository: DepartmentRepository, user_repository: UserRepository):
        super().__init__()
        self.department_repository = department_repository
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: UpdateDepartmentRequestDTO) -> DepartmentResponseDTO:
        department = await self._load_department(request.department_id)
        hierarchy = await self._hierarchy()
        self._require_manage(hierarchy, department.id)

        if request.name is not None:
            department.rename(request.name)

        if request.move_to_root or request.parent_id is not None:
            new_parent_id = None if request.move_to_root else request.parent_id
            self._require_manage(hierarchy, new_parent_id)

            if new_parent_id is not None:
                await self._load_active_parent(new_parent_id)
                if hierarchy.would_create_cycle(department.id, new_parent_id):
                    raise ValidationError(
                        "A department cannot be moved under its own descendant",
                        "parent_id",
                        reason="department_cycle",
                    )

            department.move_under(new_parent_id)

        if request.manager_id is not None:
            await self._require_user(request.manager_id)
            department.assign_manager(request.manager_id)

        saved = await self.department_repository.save(department)
        return DepartmentResponseDTO.from_domain(saved)


class DeactivateDepartmentUseCase(
    DepartmentAdminMixin,
    AuthorizedUseCase,
    CommandUseCase[DepartmentIdRequestDTO, DepartmentResponseDTO],
):
    """Soft-deactivates a leaf department."""

    def __init__(self, department_repository: DepartmentRepository, user_repository: UserRepository):
        super().__init__()
        self.department_repository = department_repository
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: DepartmentIdRequestDTO) -> DepartmentResponseDTO:
        department = await self._load_department(request.department_id)
        hierarchy = await self._hierarchy()
        self._require_manage(hierarchy, department.id)

        if hierarchy.active_children(department.id):
            raise ValidationError(
                "Cannot deactivate a department that has active sub-departments",
                "department_id",
                reason="department_has_children",
            )

        if department.is_active:
            department.deactivate()
            department = await self.department_repository.save(department)
            logger.info(f"Department {department.id} deactivated by {self.current_user_id}")

        return DepartmentResponseDTO.from_domain(department)


class GetDepartmentDashboardUseCase(AuthorizedUseCase, QueryUseCase[DashboardRequestDTO, DashboardResponseDTO]):
    """
    Root tasks of a department subtree with their subtasks and status counts.
    A task belongs to the subtree when its department or any assignee's
    department does.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        department_repository: DepartmentRepository,
    ):
        super().__init__()
        self.task_repository = task_repository
        self.access = TaskAccessService(task_repository, user_repository, department_repository)

    async def _execute_business_logic(self, request: DashboardRequestDTO) -> DashboardResponseDTO:
        user = self.current_user
        target_id = request.department_id or user.department_id
        hierarchy = await self.access.hierarchy()

        if target_id not in hierarchy:
            raise EntityNotFoundError("Department", target_id)

        if target_id not in await self.access.scope_of(user) and not user.can(Capability.VIEW_ALL):
            raise UnauthorizedError("You do not have access to this department")

        subtree = hierarchy.collect_subtree(target_id)
        tasks = await self.task_repository.find_in_departments(subtree)

        roots = [task for task in tasks if not task.is_subtask]
        metrics = TaskMetricsDTO()
        entries: List[TaskResponseDTO] = []

        for root in roots:
            subtasks = await self.task_repository.find_subtasks(root.id, include_archived=False)
            subtask_entries = []
            for subtask in subtasks:
                _count(metrics, subtask)
                subtask_entries.append(TaskResponseDTO.from_domain(
                    subtask, can_edit=await self.access.can_edit(subtask, user)
                ))

            _count(metrics, root)
            entries.append(TaskResponseDTO.from_domain(
                root,
                can_edit=await self.access.can_edit(root, user),
                subtasks=subtask_entries,
            ))

        return DashboardResponseDTO(
            department_id=target_id,
            department_ids=sorted(subtree),
            tasks=entries,
            metrics=metrics,
        )


_METRIC_FIELDS: Dict[TaskStatus, str] = {
    TaskStatus.TO_DO: "to_do",
    TaskStatus.IN_PROGRESS: "in_progress",
    TaskStatus.COMPLETED: "completed",
    TaskStatus.BLOCKED: "blocked",
}


def _count(metrics: TaskMetricsDTO, task: Task) -> None:
    name = _METRIC_FIELDS[task.status]
    setattr(metrics, name, getattr(metrics, name) + 1)
    metrics.total += 1
