"""
Creates the next occurrence of a completed recurring task.
"""

import logging
from typing import Optional

from taskboard.domain.models.base import EntityNotFoundError, ValidationError
from taskboard.domain.models.task import Task, TaskLogAction
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.services.recurrence_service import RecurrenceService
from .collaborator_reconciler import ProjectCollaboratorReconciler
from .task_log_writer import TaskLogWriter


logger = logging.getLogger(__name__)


class RecurringTaskGenerator:
    """
    Runs after the completion has been persisted. Any error raised here is
    the generator's own; the completed task is never rolled back.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        log_writer: TaskLogWriter,
        reconciler: ProjectCollaboratorReconciler,
        recurrence: Optional[RecurrenceService] = None,
    ):
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.log_writer = log_writer
        self.reconciler = reconciler
        self.recurrence = recurrence or RecurrenceService()

    async def generate(self, source_task_id: str, acting_user_id: str) -> Task:
        source = await self.task_repository.find_by_id(source_task_id)
        if source is None:
            raise EntityNotFoundError("Task", source_task_id)

        if not source.is_recurring:
            raise ValidationError(
                "Task is not recurring", "recurring_interval", reason="not_recurring"
            )

        if not await self.user_repository.validate_assignees(source.assignee_ids):
            raise ValidationError(
                "Cannot generate recurring task: one or more assignees are invalid",
                "assignee_ids",
                reason="invalid_assignees",
            )

        next_task = self.recurrence.next_occurrence(source)
        await self.task_repository.save(next_task, acting_user_id)

        await self.log_writer.record(
            next_task.id, acting_user_id, TaskLogAction.CREATED, "Task",
            changes={"from": None, "to": next_task.title},
            metadata={"sourceTaskId": source.id},
        )
        await self.log_writer.record(
            source.id, acting_user_id, TaskLogAction.RECURRING_TASK_GENERATED, "Recurring Task",
            changes={"from": None, "to": next_task.id},
            metadata={
                "nextTaskId": next_task.id,
                "nextDueDate": next_task.due_date.isoformat(),
                "sourceTaskId": source.id,
            },
        )

        await self.reconciler.on_assigned(next_task.project_id, next_task.assignee_ids)

        logger.info(
            f"Generated recurring task {next_task.id} from {source.id} due {next_task.due_date}"
        )
        return next_task
