"""
Domain events raised by the task aggregate.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Any

from .base import DomainEvent


@dataclass(kw_only=True)
class TaskStatusChanged(DomainEvent):
    """Event fired when a task moves between workflow states."""

    task_id: str
    old_status: str
    new_status: str
    changed_by: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "old_status": self.old_status,
            "new_status": self.new_status,
            "changed_by": self.changed_by
        }


@dataclass(kw_only=True)
class RecurrenceDue(DomainEvent):
    """
    Event fired when a recurring task is completed.
    The next occurrence is produced by a handler, never inline.
    """

    task_id: str
    interval_days: int
    due_date: date
    completed_by: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "interval_days": self.interval_days,
            "due_date": self.due_date.isoformat(),
            "completed_by": self.completed_by
        }


@dataclass(kw_only=True)
class TaskAssigneeAdded(DomainEvent):
    """Event fired when a user is assigned to a task."""

    task_id: str
    task_title: str
    assignee_id: str
    assigned_by: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "task_title": self.task_title,
            "assignee_id": self.assignee_id,
            "assigned_by": self.assigned_by
        }


@dataclass(kw_only=True)
class TaskAssigneeRemoved(DomainEvent):
    """Event fired when a user is unassigned from a task."""

    task_id: str
    task_title: str
    assignee_id: str
    removed_by: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "task_title": self.task_title,
            "assignee_id": self.assignee_id,
            "removed_by": self.removed_by
        }


@dataclass(kw_only=True)
class TaskCommentAdded(DomainEvent):
    """Event fired when a comment is posted on a task."""

    task_id: str
    task_title: str
    comment_id: str
    author_id: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "task_title": self.task_title,
            "comment_id": self.comment_id,
            "author_id": self.author_id
        }


@dataclass(kw_only=True)
class TaskCommentUpdated(DomainEvent):
    """Event fired when a comment author edits their comment."""

    task_id: str
    task_title: str
    comment_id: str
    author_id: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "task_title": self.task_title,
            "comment_id": self.comment_id,
            "author_id": self.author_id
        }
