"""
Subtask and assignment constraint enforcer.
Checks applied when a subtask is created; the task aggregate mirrors the
per-field rules in its own mutators.
"""

from datetime import date
from typing import Iterable, List, Optional

from taskboard.domain.models.base import ValidationError, UnauthorizedError
from taskboard.domain.models.task import Task, MIN_ASSIGNEES, MAX_ASSIGNEES


MAX_SUBTASK_DEPTH = 2


class SubtaskConstraints:
    """Validates a subtask request against its parent."""

    def check_depth(self, parent: Task) -> None:
        if parent.parent_task_id is not None:
            raise ValidationError(
                f"maximum subtask depth is {MAX_SUBTASK_DEPTH} levels",
                "parent_task_id",
                reason="subtask_depth_exceeded",
            )

    def check_creator_assigned(self, parent: Task, creator_id: str) -> None:
        if not parent.is_assigned(creator_id):
            raise UnauthorizedError("You must be assigned to the parent task to create subtasks")

    def check_deadline(self, parent: Task, due_date: date) -> None:
        if due_date > parent.due_date:
            raise ValidationError(
                "Subtask deadline cannot be after parent task deadline",
                "due_date",
                reason="deadline_after_parent",
            )

    def check_not_recurring(self, recurring_interval: Optional[int]) -> None:
        if recurring_interval is not None:
            raise ValidationError(
                "Subtasks cannot be set as recurring",
                "recurring_interval",
                reason="recurring_subtask",
            )

    def check_assignee_count(self, assignee_ids: Iterable[str]) -> List[str]:
        unique = list(dict.fromkeys(assignee_ids))
        if len(unique) < MIN_ASSIGNEES:
            raise ValidationError(
                "Task must have at least 1 assignee", "assignee_ids", reason="min_assignees"
            )
        if len(unique) > MAX_ASSIGNEES:
            raise ValidationError(
                f"Maximum of {MAX_ASSIGNEES} assignees allowed per task",
                "assignee_ids",
                reason="max_assignees",
            )
        return unique

    def validate(
        self,
        parent: Task,
        creator_id: str,
        due_date: date,
        assignee_ids: Iterable[str],
        recurring_interval: Optional[int] = None,
    ) -> List[str]:
        """
        Run every subtask check in order. Returns the de-duplicated assignee ids.
        Assignee existence is verified by the caller against the user store.
        """
        self.check_depth(parent)
        self.check_creator_assigned(parent, creator_id)
        self.check_deadline(parent, due_date)
        self.check_not_recurring(recurring_interval)
        return self.check_assignee_count(assignee_ids)
