"""
Notification service that writes to the application log.
Stands in for email and realtime delivery, which run outside this service.
"""

import logging
from typing import List

from taskboard.domain.services.notification_service import NotificationService


logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):

    async def notify_assigned(self, user_id: str, task_id: str, task_title: str, assigned_by: str) -> None:
        logger.info(f"Notify {user_id}: assigned to '{task_title}' ({task_id}) by {assigned_by}")

    async def notify_unassigned(self, user_id: str, task_id: str, task_title: str, removed_by: str) -> None:
        logger.info(f"Notify {user_id}: removed from '{task_title}' ({task_id}) by {removed_by}")

    async def notify_comment(self, recipient_ids: List[str], task_id: str, task_title: str, author_id: str) -> None:
        logger.info(
            f"Notify {', '.join(recipient_ids)}: new comment on '{task_title}' ({task_id}) by {author_id}"
        )

    async def notify_comment_updated(
        self, recipient_ids: List[str], task_id: str, task_title: str, author_id: str
    ) -> None:
        logger.info(
            f"Notify {', '.join(recipient_ids)}: comment edited on '{task_title}' ({task_id}) by {author_id}"
        )

    async def notify_status_change(
        self, recipient_ids: List[str], task_id: str, old_status: str, new_status: str
    ) -> None:
        logger.info(
            f"Notify {', '.join(recipient_ids)}: task {task_id} moved {old_status} -> {new_status}"
        )
