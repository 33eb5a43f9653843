"""
Domain events for the task manager.
"""

from .base import DomainEvent, EventHandler, EventDispatcher, FailedDelivery
from .task_events import (
    TaskStatusChanged,
    RecurrenceDue,
    TaskAssigneeAdded,
    TaskAssigneeRemoved,
    TaskCommentAdded,
    TaskCommentUpdated,
)

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "FailedDelivery",
    "TaskStatusChanged",
    "RecurrenceDue",
    "TaskAssigneeAdded",
    "TaskAssigneeRemoved",
    "TaskCommentAdded",
    "TaskCommentUpdated",
]
