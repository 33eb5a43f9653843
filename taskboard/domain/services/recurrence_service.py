"""
Recurrence computation for recurring tasks.
"""

from datetime import datetime, date, timedelta
from typing import Optional

from taskboard.domain.models.base import ValidationError
from taskboard.domain.models.task import Task, TaskStatus


class RecurrenceService:
    """
    Builds the next occurrence of a completed recurring task.

    Dates are shifted by whole calendar days on the date component only, so a
    task due every Monday keeps landing on Mondays regardless of clock changes.
    """

    @staticmethod
    def shift_date(value: date, days: int) -> date:
        if isinstance(value, datetime):
            value = value.date()
        return value + timedelta(days=days)

    @staticmethod
    def shift_datetime(value: datetime, days: int) -> datetime:
        """Shift the calendar day and keep the wall-clock time."""
        shifted_day = value.date() + timedelta(days=days)
        return datetime.combine(shifted_day, value.time(), tzinfo=value.tzinfo)

    def next_occurrence(self, source: Task, interval_days: Optional[int] = None) -> Task:
        """Clone the source into a fresh TO_DO task, interval days later."""
        interval = interval_days if interval_days is not None else source.recurring_interval
        if interval is None or interval <= 0:
            raise ValidationError(
                "Recurrence days must be greater than 0 when recurring is enabled",
                "recurring_interval",
                reason="invalid_recurrence",
            )

        next_task = Task.create(
            title=source.title,
            description=source.description,
            priority=source.priority,
            due_date=self.shift_date(source.due_date, interval),
            status=TaskStatus.TO_DO,
            owner_id=source.owner_id,
            department_id=source.department_id,
            project_id=source.project_id,
            parent_task_id=source.parent_task_id,
            recurring_interval=source.recurring_interval,
            assignee_ids=set(source.assignee_ids),
            tags=set(source.tags),
            created_at=self.shift_datetime(source.created_at, interval),
        )
        next_task.start_date = None
        return next_task
