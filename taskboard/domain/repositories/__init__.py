"""
Repository interfaces for the domain layer.
These define contracts for data persistence without implementation details.
"""

from .task_repository import TaskRepository
from .task_log_repository import TaskLogRepository
from .user_repository import UserRepository
from .department_repository import DepartmentRepository
from .project_repository import ProjectRepository

__all__ = [
    "TaskRepository",
    "TaskLogRepository",
    "UserRepository",
    "DepartmentRepository",
    "ProjectRepository",
]
