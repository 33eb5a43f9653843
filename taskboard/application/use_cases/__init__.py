"""
Application layer use cases.
"""

from .base_use_case import (
    UseCaseResult,
    BaseUseCase,
    QueryUseCase,
    CommandUseCase,
    AuthorizedUseCase,
)
from .task_use_cases import *
from .department_use_cases import *

__all__ = [
    # Base Use Cases
    "UseCaseResult",
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "AuthorizedUseCase",

    # Task Use Cases
    "TaskCommandUseCase",
    "CreateTaskUseCase",
    "CreateSubtaskUseCase",
    "GetTaskUseCase",
    "GetTaskLogsUseCase",
    "UpdateTitleUseCase",
    "UpdateDescriptionUseCase",
    "UpdatePriorityUseCase",
    "UpdateDeadlineUseCase",
    "UpdateStatusUseCase",
    "UpdateRecurringUseCase",
    "AddTagUseCase",
    "RemoveTagUseCase",
    "AddAssigneeUseCase",
    "RemoveAssigneeUseCase",
    "AddCommentUseCase",
    "UpdateCommentUseCase",
    "AddFileUseCase",
    "RemoveFileUseCase",
    "ArchiveTaskUseCase",
    "UnarchiveTaskUseCase",
    "DeleteTaskUseCase",

    # Department Use Cases
    "CreateDepartmentUseCase",
    "UpdateDepartmentUseCase",
    "DeactivateDepartmentUseCase",
    "GetDepartmentDashboardUseCase",
]
