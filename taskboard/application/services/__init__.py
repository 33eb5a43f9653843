"""
Application services that coordinate repositories around domain logic.
"""

from .task_access import TaskAccessService
from .task_log_writer import TaskLogWriter
from .collaborator_reconciler import ProjectCollaboratorReconciler
from .recurring_task_generator import RecurringTaskGenerator
from .cascade_archive import CascadeArchiveOrchestrator, CascadeResult

__all__ = [
    "TaskAccessService",
    "TaskLogWriter",
    "ProjectCollaboratorReconciler",
    "RecurringTaskGenerator",
    "CascadeArchiveOrchestrator",
    "CascadeResult",
]
