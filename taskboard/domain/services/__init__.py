"""
Domain services for the task manager.
Pure business logic that does not belong to a single entity.
"""

from .department_hierarchy import DepartmentHierarchy
from .authorization_service import AuthorizationService
from .recurrence_service import RecurrenceService
from .subtask_constraints import SubtaskConstraints, MAX_SUBTASK_DEPTH
from .notification_service import NotificationService

__all__ = [
    "DepartmentHierarchy",
    "AuthorizationService",
    "RecurrenceService",
    "SubtaskConstraints",
    "MAX_SUBTASK_DEPTH",
    "NotificationService",
]
