"""
Domain models for the task manager.
This module exports all domain entities and value objects.
"""

from .base import (
    BaseEntity,
    AggregateRoot,
    ValueObject,
    DomainException,
    ValidationError,
    UnauthorizedError,
    EntityNotFoundError,
    NotFoundError,
    DependencyFailure,
)
from .user import UserRole, Capability, UserContext, UserProfile
from .department import Department
from .project import Project, ProjectCollaborator
from .task import (
    Task,
    TaskStatus,
    Priority,
    TaskComment,
    TaskFile,
    TaskLog,
    TaskLogAction,
)

__all__ = [
    "BaseEntity",
    "AggregateRoot",
    "ValueObject",
    "DomainException",
    "ValidationError",
    "UnauthorizedError",
    "EntityNotFoundError",
    "NotFoundError",
    "DependencyFailure",
    "UserRole",
    "Capability",
    "UserContext",
    "UserProfile",
    "Department",
    "Project",
    "ProjectCollaborator",
    "Task",
    "TaskStatus",
    "Priority",
    "TaskComment",
    "TaskFile",
    "TaskLog",
    "TaskLogAction",
]
