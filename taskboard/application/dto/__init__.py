"""
Data transfer objects for the application layer.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO
from .task_dto import (
    CreateTaskRequestDTO,
    CreateSubtaskRequestDTO,
    TaskIdRequestDTO,
    UpdateTitleRequestDTO,
    UpdateDescriptionRequestDTO,
    UpdatePriorityRequestDTO,
    UpdateDeadlineRequestDTO,
    UpdateStatusRequestDTO,
    UpdateRecurringRequestDTO,
    TagRequestDTO,
    AssigneeRequestDTO,
    AddCommentRequestDTO,
    UpdateCommentRequestDTO,
    AddFileRequestDTO,
    RemoveFileRequestDTO,
    TaskResponseDTO,
    CommentResponseDTO,
    FileResponseDTO,
    TaskLogResponseDTO,
    DeleteTaskResponseDTO,
)
from .department_dto import (
    CreateDepartmentRequestDTO,
    UpdateDepartmentRequestDTO,
    DepartmentIdRequestDTO,
    DashboardRequestDTO,
    DepartmentResponseDTO,
    TaskMetricsDTO,
    DashboardResponseDTO,
)
