"""
Event handlers for task side effects.
Both handlers raise on failure; the dispatcher records and logs the failure
so it can be retried, and the command that raised the event is unaffected.
"""

import logging
from typing import List

from taskboard.application.services.recurring_task_generator import RecurringTaskGenerator
from taskboard.domain.events.base import EventHandler, DomainEvent
from taskboard.domain.events.task_events import (
    RecurrenceDue,
    TaskStatusChanged,
    TaskAssigneeAdded,
    TaskAssigneeRemoved,
    TaskCommentAdded,
    TaskCommentUpdated,
)
from taskboard.domain.models.user import display_name
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.services.notification_service import NotificationService


logger = logging.getLogger(__name__)


class RecurringTaskHandler(EventHandler):
    """Creates the next occurrence when a recurring task is completed."""

    def __init__(self, generator: RecurringTaskGenerator):
        self.generator = generator

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, RecurrenceDue)

    async def handle(self, event: DomainEvent) -> None:
        logger.info(f"Generating next occurrence of task {event.task_id}")
        await self.generator.generate(event.task_id, event.completed_by)


class TaskNotificationHandler(EventHandler):
    """Forwards assignment, comment and status events to the notification service."""

    def __init__(
        self,
        notification_service: NotificationService,
        task_repository: TaskRepository,
        user_repository: UserRepository,
    ):
        self.notification_service = notification_service
        self.task_repository = task_repository
        self.user_repository = user_repository

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(
            event,
            (TaskAssigneeAdded, TaskAssigneeRemoved, TaskCommentAdded, TaskCommentUpdated, TaskStatusChanged),
        )

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, TaskAssigneeAdded):
            actor = await self._actor_name(event.assigned_by)
            await self.notification_service.notify_assigned(
                event.assignee_id, event.task_id, event.task_title, actor
            )
        elif isinstance(event, TaskAssigneeRemoved):
            actor = await self._actor_name(event.removed_by)
            await self.notification_service.notify_unassigned(
                event.assignee_id, event.task_id, event.task_title, actor
            )
        elif isinstance(event, TaskCommentAdded):
            recipients = await self._recipients(event.task_id, exclude=event.author_id)
            if recipients:
                actor = await self._actor_name(event.author_id)
                await self.notification_service.notify_comment(
                    recipients, event.task_id, event.task_title, actor
                )
        elif isinstance(event, TaskCommentUpdated):
            recipients = await self._recipients(event.task_id, exclude=event.author_id)
            if recipients:
                actor = await self._actor_name(event.author_id)
                await self.notification_service.notify_comment_updated(
                    recipients, event.task_id, event.task_title, actor
                )
        elif isinstance(event, TaskStatusChanged):
            recipients = await self._recipients(event.task_id, exclude=event.changed_by)
            if recipients:
                await self.notification_service.notify_status_change(
                    recipients, event.task_id, event.old_status, event.new_status
                )

    async def _recipients(self, task_id: str, exclude: str) -> List[str]:
        task = await self.task_repository.find_by_id(task_id)
        if task is None:
            logger.warning(f"Task {task_id} vanished before notifications were sent")
            return []
        return sorted(uid for uid in task.assignee_ids if uid != exclude)

    async def _actor_name(self, user_id: str) -> str:
        return display_name(await self.user_repository.find_by_id(user_id), user_id)
