"""
Department DTOs for the application layer.
"""

from typing import List, Optional
from pydantic import Field

from taskboard.domain.models.department import Department
from .base_dto import RequestDTO, ResponseDTO, BaseDTO
from .task_dto import TaskResponseDTO


class CreateDepartmentRequestDTO(RequestDTO):
    name: str = Field(..., min_length=1, max_length=255)
    parent_id: Optional[str] = None
    manager_id: Optional[str] = None


class UpdateDepartmentRequestDTO(RequestDTO):
    department_id: str
    name: Optional[str] = None
    parent_id: Optional[str] = None
    move_to_root: bool = Field(default=False, description="Detach from the current parent")
    manager_id: Optional[str] = None


class DepartmentIdRequestDTO(RequestDTO):
    department_id: str


class DashboardRequestDTO(RequestDTO):
    department_id: Optional[str] = Field(
        default=None, description="Defaults to the requesting user's department"
    )


class DepartmentResponseDTO(ResponseDTO):
    name: str
    parent_id: Optional[str] = None
    manager_id: Optional[str] = None
    is_active: bool

    @classmethod
    def from_domain(cls, department: Department) -> "DepartmentResponseDTO":
        return cls(
            id=department.id,
            name=department.name,
            parent_id=department.parent_id,
            manager_id=department.manager_id,
            is_active=department.is_active,
            created_at=department.created_at,
            updated_at=department.updated_at,
        )


class TaskMetricsDTO(BaseDTO):
    to_do: int = 0
    in_progress: int = 0
    completed: int = 0
    blocked: int = 0
    total: int = 0


class DashboardResponseDTO(BaseDTO):
    department_id: str
    department_ids: List[str]
    tasks: List[TaskResponseDTO]
    metrics: TaskMetricsDTO
