"""
Notification handler wiring through the event dispatcher.
"""

import pytest
from datetime import date

from taskboard.application.dto.task_dto import (
    CreateTaskRequestDTO,
    AddCommentRequestDTO,
    UpdateCommentRequestDTO,
)
from taskboard.application.use_cases.task_use_cases import (
    CreateTaskUseCase,
    AddCommentUseCase,
    UpdateCommentUseCase,
)
from taskboard.domain.services.notification_service import NotificationService
from taskboard.infrastructure.events import build_event_dispatcher


class RecordingNotificationService(NotificationService):
    def __init__(self):
        self.sent = []

    async def notify_assigned(self, user_id, task_id, task_title, assigned_by):
        self.sent.append(("assigned", [user_id], task_title, assigned_by))

    async def notify_unassigned(self, user_id, task_id, task_title, removed_by):
        self.sent.append(("unassigned", [user_id], task_title, removed_by))

    async def notify_comment(self, recipient_ids, task_id, task_title, author_id):
        self.sent.append(("comment", recipient_ids, task_title, author_id))

    async def notify_comment_updated(self, recipient_ids, task_id, task_title, author_id):
        self.sent.append(("comment_updated", recipient_ids, task_title, author_id))

    async def notify_status_change(self, recipient_ids, task_id, old_status, new_status):
        self.sent.append(("status", recipient_ids, old_status, new_status))


def command(use_case_class, repos, user, dispatcher):
    use_case = use_case_class(
        repos.tasks,
        repos.users,
        repos.departments,
        repos.task_logs,
        repos.projects,
        event_dispatcher=dispatcher,
    )
    use_case.set_current_user(user)
    return use_case


class TestCommentNotifications:
    """Comment activity reaches the other assignees."""

    @pytest.mark.asyncio
    async def test_edited_comment_notifies_other_assignees(self, repos, as_user):
        notifier = RecordingNotificationService()
        dispatcher = build_event_dispatcher(
            repos.tasks, repos.users, repos.task_logs, repos.projects,
            notification_service=notifier,
            notifications_enabled=True,
        )

        created = await command(CreateTaskUseCase, repos, as_user("alice"), dispatcher).execute(
            CreateTaskRequestDTO(title="Release notes", due_date=date(2025, 2, 1), assignee_ids=["alice", "bob"])
        )
        assert created.success, created.error
        task_id = created.data.id

        added = await command(AddCommentUseCase, repos, as_user("bob"), dispatcher).execute(
            AddCommentRequestDTO(task_id=task_id, content="Draft is up")
        )
        comment_id = added.data.comments[0].id
        notifier.sent.clear()

        edited = await command(UpdateCommentUseCase, repos, as_user("bob"), dispatcher).execute(
            UpdateCommentRequestDTO(task_id=task_id, comment_id=comment_id, content="Final draft is up")
        )

        assert edited.success is True
        assert notifier.sent == [("comment_updated", ["alice"], "Release notes", "Bob")]
        assert dispatcher.failed_deliveries == []
