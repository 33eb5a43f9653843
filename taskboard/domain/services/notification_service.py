"""
Notification service interface.
Delivery is best-effort; callers never depend on the outcome.
"""

from abc import ABC, abstractmethod
from typing import List


class NotificationService(ABC):
    """
    Notification service interface.
    Defines how task activity reaches users.
    """

    @abstractmethod
    async def notify_assigned(self, user_id: str, task_id: str, task_title: str, assigned_by: str) -> None:
        """
        Tell a user they were assigned to a task.
        """
        pass

    @abstractmethod
    async def notify_unassigned(self, user_id: str, task_id: str, task_title: str, removed_by: str) -> None:
        """
        Tell a user they were removed from a task.
        """
        pass

    @abstractmethod
    async def notify_comment(self, recipient_ids: List[str], task_id: str, task_title: str, author_id: str) -> None:
        """
        Tell assignees a comment was posted.
        """
        pass

    @abstractmethod
    async def notify_comment_updated(
        self, recipient_ids: List[str], task_id: str, task_title: str, author_id: str
    ) -> None:
        """
        Tell assignees a comment was edited.
        """
        pass

    @abstractmethod
    async def notify_status_change(
        self, recipient_ids: List[str], task_id: str, old_status: str, new_status: str
    ) -> None:
        """
        Tell assignees a task changed state.
        """
        pass
