"""
Department administration and dashboard use cases.
"""

import pytest
from datetime import date

from taskboard.application.dto.department_dto import (
    CreateDepartmentRequestDTO,
    UpdateDepartmentRequestDTO,
    DepartmentIdRequestDTO,
    DashboardRequestDTO,
)
from taskboard.application.dto.task_dto import CreateTaskRequestDTO, CreateSubtaskRequestDTO, UpdateStatusRequestDTO
from taskboard.application.use_cases.department_use_cases import (
    CreateDepartmentUseCase,
    UpdateDepartmentUseCase,
    DeactivateDepartmentUseCase,
    GetDepartmentDashboardUseCase,
)
from taskboard.application.use_cases.task_use_cases import (
    CreateTaskUseCase,
    CreateSubtaskUseCase,
    UpdateStatusUseCase,
)
from taskboard.domain.models.task import TaskStatus


def admin(use_case_class, repos, user):
    use_case = use_case_class(repos.departments, repos.users)
    use_case.set_current_user(user)
    return use_case


def dashboard(repos, user):
    use_case = GetDepartmentDashboardUseCase(repos.tasks, repos.users, repos.departments)
    use_case.set_current_user(user)
    return use_case


async def run_task_command(use_case_class, repos, user, request):
    use_case = use_case_class(repos.tasks, repos.users, repos.departments, repos.task_logs, repos.projects)
    use_case.set_current_user(user)
    result = await use_case.execute(request)
    assert result.success, result.error
    return result.data


class TestDepartmentAdministration:
    """Creating, moving and deactivating departments."""

    @pytest.mark.asyncio
    async def test_manager_creates_department_in_subtree(self, repos, as_user):
        result = await admin(CreateDepartmentUseCase, repos, as_user("mgr-eng")).execute(
            CreateDepartmentRequestDTO(name="Frontend", parent_id="dept-eng", manager_id="mgr-eng")
        )

        assert result.success is True
        assert result.data.parent_id == "dept-eng"
        stored = await repos.departments.find_by_id(result.data.id)
        assert stored.name == "Frontend"

    @pytest.mark.asyncio
    async def test_manager_cannot_create_outside_subtree(self, repos, as_user):
        result = await admin(CreateDepartmentUseCase, repos, as_user("mgr-eng")).execute(
            CreateDepartmentRequestDTO(name="Field Sales", parent_id="dept-sales")
        )

        assert result.error_code == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_root_department_needs_hr_admin(self, repos, as_user):
        denied = await admin(CreateDepartmentUseCase, repos, as_user("mgr-eng")).execute(
            CreateDepartmentRequestDTO(name="Holding")
        )
        allowed = await admin(CreateDepartmentUseCase, repos, as_user("hr-admin")).execute(
            CreateDepartmentRequestDTO(name="Holding")
        )

        assert denied.error_code == "UNAUTHORIZED"
        assert allowed.success is True
        assert allowed.data.parent_id is None

    @pytest.mark.asyncio
    async def test_view_all_flag_grants_no_administration(self, repos, as_user):
        viewer = as_user("hr-viewer")

        created = await admin(CreateDepartmentUseCase, repos, viewer).execute(
            CreateDepartmentRequestDTO(name="Holding")
        )
        moved = await admin(UpdateDepartmentUseCase, repos, viewer).execute(
            UpdateDepartmentRequestDTO(department_id="dept-sales", parent_id="dept-backend")
        )
        deactivated = await admin(DeactivateDepartmentUseCase, repos, viewer).execute(
            DepartmentIdRequestDTO(department_id="dept-sales")
        )

        assert created.error_code == "UNAUTHORIZED"
        assert moved.error_code == "UNAUTHORIZED"
        assert deactivated.error_code == "UNAUTHORIZED"
        stored = await repos.departments.find_by_id("dept-sales")
        assert stored.parent_id == "dept-root"
        assert stored.is_active is True

    @pytest.mark.asyncio
    async def test_move_under_descendant_rejected(self, repos, as_user):
        result = await admin(UpdateDepartmentUseCase, repos, as_user("hr-admin")).execute(
            UpdateDepartmentRequestDTO(department_id="dept-eng", parent_id="dept-backend")
        )

        assert result.reason == "department_cycle"
        stored = await repos.departments.find_by_id("dept-eng")
        assert stored.parent_id == "dept-root"

    @pytest.mark.asyncio
    async def test_rename_and_move(self, repos, as_user):
        result = await admin(UpdateDepartmentUseCase, repos, as_user("hr-admin")).execute(
            UpdateDepartmentRequestDTO(department_id="dept-backend", name="Platform", parent_id="dept-sales")
        )

        assert result.success is True
        assert result.data.name == "Platform"
        assert result.data.parent_id == "dept-sales"

    @pytest.mark.asyncio
    async def test_deactivate_requires_leaf(self, repos, as_user):
        use_case = admin(DeactivateDepartmentUseCase, repos, as_user("mgr-eng"))

        blocked = await use_case.execute(DepartmentIdRequestDTO(department_id="dept-eng"))
        leaf = await use_case.execute(DepartmentIdRequestDTO(department_id="dept-backend"))

        assert blocked.reason == "department_has_children"
        assert leaf.success is True
        assert leaf.data.is_active is False


class TestDashboard:
    """Department dashboard scoping and metrics."""

    @pytest.mark.asyncio
    async def test_manager_dashboard_lists_subtree_tasks(self, repos, as_user):
        alice = as_user("alice")
        root = await run_task_command(CreateTaskUseCase, repos, alice, CreateTaskRequestDTO(
            title="Migrate database", due_date=date(2025, 3, 1), assignee_ids=["alice"]
        ))
        await run_task_command(CreateSubtaskUseCase, repos, alice, CreateSubtaskRequestDTO(
            parent_task_id=root.id, title="Backup", due_date=date(2025, 2, 1), assignee_ids=["alice"]
        ))
        await run_task_command(UpdateStatusUseCase, repos, alice, UpdateStatusRequestDTO(
            task_id=root.id, status=TaskStatus.IN_PROGRESS
        ))
        await run_task_command(CreateTaskUseCase, repos, as_user("carol"), CreateTaskRequestDTO(
            title="Sales forecast", due_date=date(2025, 3, 1), assignee_ids=["carol"]
        ))

        result = await dashboard(repos, as_user("mgr-eng")).execute(DashboardRequestDTO())

        assert result.success is True
        data = result.data
        assert data.department_id == "dept-eng"
        assert data.department_ids == ["dept-backend", "dept-eng"]
        assert [t.title for t in data.tasks] == ["Migrate database"]
        assert len(data.tasks[0].subtasks) == 1
        assert data.tasks[0].can_edit is True
        assert data.metrics.total == 2
        assert data.metrics.in_progress == 1
        assert data.metrics.to_do == 1

    @pytest.mark.asyncio
    async def test_other_department_requires_view_all(self, repos, as_user):
        denied = await dashboard(repos, as_user("bob")).execute(DashboardRequestDTO(department_id="dept-sales"))
        allowed = await dashboard(repos, as_user("hr-viewer")).execute(DashboardRequestDTO(department_id="dept-sales"))

        assert denied.error_code == "UNAUTHORIZED"
        assert allowed.success is True

    @pytest.mark.asyncio
    async def test_unknown_department(self, repos, as_user):
        result = await dashboard(repos, as_user("hr-admin")).execute(DashboardRequestDTO(department_id="nope"))
        assert result.error_code == "NOT_FOUND"
