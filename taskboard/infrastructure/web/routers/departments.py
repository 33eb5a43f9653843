"""
Department router: hierarchy administration and the department dashboard.
"""

from typing import Optional
from fastapi import APIRouter, Body, Query, status

from taskboard.application.dto.department_dto import (
    CreateDepartmentRequestDTO,
    UpdateDepartmentRequestDTO,
    DepartmentIdRequestDTO,
    DashboardRequestDTO,
    DepartmentResponseDTO,
    DashboardResponseDTO,
)
from taskboard.application.use_cases.department_use_cases import (
    CreateDepartmentUseCase,
    UpdateDepartmentUseCase,
    DeactivateDepartmentUseCase,
    GetDepartmentDashboardUseCase,
)
from taskboard.infrastructure.auth import CurrentUser
from taskboard.infrastructure.web.dependencies import Repos
from taskboard.infrastructure.web.results import unwrap


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=DepartmentResponseDTO)
async def create_department(request: CreateDepartmentRequestDTO, user: CurrentUser, repos: Repos):
    """
    Create a department.

    - **parent_id**: Existing active department; omit for a new root (HR admins only)
    - **manager_id**: Optional managing user
    """
    use_case = CreateDepartmentUseCase(repos.departments, repos.users)
    use_case.set_current_user(user)
    return unwrap(await use_case.execute(request))


@router.get("/dashboard", response_model=DashboardResponseDTO)
async def get_dashboard(
    user: CurrentUser,
    repos: Repos,
    department_id: Optional[str] = Query(None, description="Defaults to your own department"),
):
    """Root tasks of the department subtree with subtasks and status counts."""
    use_case = GetDepartmentDashboardUseCase(repos.tasks, repos.users, repos.departments)
    use_case.set_current_user(user)
    return unwrap(await use_case.execute(DashboardRequestDTO(department_id=department_id)))


@router.patch("/{department_id}", response_model=DepartmentResponseDTO)
async def update_department(
    department_id: str,
    user: CurrentUser,
    repos: Repos,
    name: Optional[str] = Body(None),
    parent_id: Optional[str] = Body(None),
    move_to_root: bool = Body(False),
    manager_id: Optional[str] = Body(None),
):
    request = UpdateDepartmentRequestDTO(
        department_id=department_id,
        name=name,
        parent_id=parent_id,
        move_to_root=move_to_root,
        manager_id=manager_id,
    )
    use_case = UpdateDepartmentUseCase(repos.departments, repos.users)
    use_case.set_current_user(user)
    return unwrap(await use_case.execute(request))


@router.post("/{department_id}/deactivate", response_model=DepartmentResponseDTO)
async def deactivate_department(department_id: str, user: CurrentUser, repos: Repos):
    """Deactivate a department that has no active sub-departments."""
    use_case = DeactivateDepartmentUseCase(repos.departments, repos.users)
    use_case.set_current_user(user)
    return unwrap(await use_case.execute(DepartmentIdRequestDTO(department_id=department_id)))
