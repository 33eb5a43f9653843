"""
Mappers between domain entities and SQLAlchemy models.
"""

from .task_mapper import TaskMapper, TaskLogMapper
from .organization_mapper import DepartmentMapper, UserMapper, ProjectMapper

__all__ = [
    "TaskMapper",
    "TaskLogMapper",
    "DepartmentMapper",
    "UserMapper",
    "ProjectMapper",
]
