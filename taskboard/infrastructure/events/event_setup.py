"""
Event system setup.
Builds a dispatcher bound to one request's repositories.
"""

import logging
from typing import Optional

from taskboard.application.services.collaborator_reconciler import ProjectCollaboratorReconciler
from taskboard.application.services.recurring_task_generator import RecurringTaskGenerator
from taskboard.application.services.task_log_writer import TaskLogWriter
from taskboard.config import get_settings
from taskboard.domain.events.base import EventDispatcher
from taskboard.domain.repositories.project_repository import ProjectRepository
from taskboard.domain.repositories.task_log_repository import TaskLogRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.services.notification_service import NotificationService
from taskboard.infrastructure.notifications.logging_notification_service import LoggingNotificationService
from .task_handlers import RecurringTaskHandler, TaskNotificationHandler


logger = logging.getLogger(__name__)


def build_event_dispatcher(
    task_repository: TaskRepository,
    user_repository: UserRepository,
    task_log_repository: TaskLogRepository,
    project_repository: ProjectRepository,
    notification_service: Optional[NotificationService] = None,
    notifications_enabled: Optional[bool] = None,
) -> EventDispatcher:
    """Register the task handlers on a fresh dispatcher."""
    dispatcher = EventDispatcher()

    generator = RecurringTaskGenerator(
        task_repository,
        user_repository,
        TaskLogWriter(task_log_repository),
        ProjectCollaboratorReconciler(project_repository, task_repository, user_repository),
    )
    dispatcher.register_handler("RecurrenceDue", RecurringTaskHandler(generator))

    if notifications_enabled is None:
        notifications_enabled = get_settings().notifications_enabled

    if notifications_enabled:
        notifier = TaskNotificationHandler(
            notification_service or LoggingNotificationService(),
            task_repository,
            user_repository,
        )
        for event_type in (
            "TaskAssigneeAdded",
            "TaskAssigneeRemoved",
            "TaskCommentAdded",
            "TaskCommentUpdated",
            "TaskStatusChanged",
        ):
            dispatcher.register_handler(event_type, notifier)

    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.debug(f"Event {event_type}: {', '.join(handlers)} handlers")

    return dispatcher
