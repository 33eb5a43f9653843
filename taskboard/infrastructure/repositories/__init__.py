"""
SQLAlchemy implementations of the domain repository interfaces.
"""

from .task_repository import SQLAlchemyTaskRepository
from .task_log_repository import SQLAlchemyTaskLogRepository
from .user_repository import SQLAlchemyUserRepository
from .department_repository import SQLAlchemyDepartmentRepository
from .project_repository import SQLAlchemyProjectRepository

__all__ = [
    "SQLAlchemyTaskRepository",
    "SQLAlchemyTaskLogRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyDepartmentRepository",
    "SQLAlchemyProjectRepository",
]
