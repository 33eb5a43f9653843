"""
Unit tests for the Task aggregate.
"""

import pytest
from datetime import date

from taskboard.domain.models.base import ValidationError, UnauthorizedError, EntityNotFoundError
from taskboard.domain.models.task import Task, TaskStatus, Priority, MAX_FILE_SIZE_BYTES, MAX_TAG_LENGTH
from taskboard.domain.models.user import UserContext, UserRole
from taskboard.domain.events.task_events import (
    TaskStatusChanged,
    RecurrenceDue,
    TaskAssigneeAdded,
    TaskAssigneeRemoved,
    TaskCommentUpdated,
)


MANAGER = UserContext(user_id="mgr", role=UserRole.MANAGER, department_id="d1")
STAFF = UserContext(user_id="u1", role=UserRole.STAFF, department_id="d1")


def make_task(**overrides) -> Task:
    fields = dict(
        title="Quarterly report",
        due_date=date(2025, 3, 31),
        owner_id="u1",
        department_id="d1",
        assignee_ids=["u1"],
    )
    fields.update(overrides)
    return Task.create(**fields)


class TestTaskCreation:
    """Test cases for creating tasks."""

    def test_create_task_defaults(self):
        task = make_task()

        assert task.id is not None
        assert task.status == TaskStatus.TO_DO
        assert task.priority == 5
        assert task.start_date is None
        assert task.is_archived is False
        assert task.assignee_ids == {"u1"}

    def test_title_is_trimmed(self):
        task = make_task(title="  Spaced  ")
        assert task.title == "Spaced"

    @pytest.mark.parametrize("title", ["", "   ", "x" * 256])
    def test_invalid_title_rejected(self, title):
        with pytest.raises(ValidationError) as exc:
            make_task(title=title)
        assert exc.value.reason == "invalid_title"

    def test_no_assignees_rejected(self):
        with pytest.raises(ValidationError) as exc:
            make_task(assignee_ids=[])
        assert exc.value.reason == "min_assignees"

    def test_six_assignees_rejected(self):
        with pytest.raises(ValidationError, match="Maximum of 5 assignees"):
            make_task(assignee_ids=[f"u{i}" for i in range(6)])

    def test_created_in_progress_gets_start_date(self):
        task = make_task(status=TaskStatus.IN_PROGRESS)
        assert task.start_date is not None

    def test_recurring_subtask_rejected(self):
        with pytest.raises(ValidationError) as exc:
            make_task(parent_task_id="parent", recurring_interval=7)
        assert exc.value.reason == "recurring_subtask"


class TestPriority:
    """Test cases for the priority value object."""

    @pytest.mark.parametrize("value,label", [(1, "Low"), (3, "Low"), (4, "Medium"), (6, "Medium"),
                                             (7, "High"), (8, "High"), (9, "Critical"), (10, "Critical")])
    def test_labels(self, value, label):
        assert Priority(value).label == label

    @pytest.mark.parametrize("value", [0, 11, -1])
    def test_out_of_range(self, value):
        with pytest.raises(ValidationError, match="Priority must be between 1 and 10"):
            Priority(value)

    def test_update_priority_out_of_range_keeps_old_value(self):
        task = make_task(priority=4)
        with pytest.raises(ValidationError):
            task.update_priority(11)
        assert task.priority == 4


class TestAssignees:
    """Assignee cardinality and owner immutability."""

    def test_add_sixth_assignee_fails(self):
        task = make_task(assignee_ids=["a", "b", "c", "d", "e"])

        with pytest.raises(ValidationError) as exc:
            task.add_assignee("f", MANAGER)

        assert exc.value.reason == "max_assignees"
        assert len(task.assignee_ids) == 5

    def test_add_existing_assignee_is_noop(self):
        task = make_task()
        assert task.add_assignee("u1", STAFF) is False
        assert task.pull_events() == []

    def test_add_assignee_records_event(self):
        task = make_task()
        assert task.add_assignee("u2", STAFF) is True

        events = task.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], TaskAssigneeAdded)
        assert events[0].assignee_id == "u2"

    def test_remove_last_assignee_fails(self):
        task = make_task()
        with pytest.raises(ValidationError) as exc:
            task.remove_assignee("u1", MANAGER)
        assert exc.value.reason == "min_assignees"
        assert task.assignee_ids == {"u1"}

    def test_staff_cannot_remove_assignees(self):
        task = make_task(assignee_ids=["u1", "u2"])
        with pytest.raises(UnauthorizedError):
            task.remove_assignee("u2", STAFF)

    def test_remove_unknown_assignee_fails(self):
        task = make_task(assignee_ids=["u1", "u2"])
        with pytest.raises(ValidationError) as exc:
            task.remove_assignee("nobody", MANAGER)
        assert exc.value.reason == "not_assigned"

    def test_owner_survives_assignee_changes(self):
        task = make_task(owner_id="u1", assignee_ids=["u1", "u2"])

        task.add_assignee("u3", MANAGER)
        task.remove_assignee("u1", MANAGER)
        task.add_assignee("u1", MANAGER)
        task.remove_assignee("u1", MANAGER)

        assert task.owner_id == "u1"
        assert "u1" not in task.assignee_ids
        events = task.pull_events()
        assert sum(isinstance(e, TaskAssigneeRemoved) for e in events) == 2


class TestStatus:
    """Workflow transitions."""

    def test_start_date_set_once(self):
        task = make_task()

        task.update_status(TaskStatus.IN_PROGRESS, "u1")
        first_start = task.start_date
        task.update_status(TaskStatus.BLOCKED, "u1")
        task.update_status(TaskStatus.COMPLETED, "u1")
        task.update_status(TaskStatus.IN_PROGRESS, "u1")

        assert first_start is not None
        assert task.start_date == first_start

    def test_same_status_is_noop(self):
        task = make_task()
        assert task.update_status(TaskStatus.TO_DO, "u1") is False
        assert task.pull_events() == []

    def test_completing_recurring_task_signals_recurrence(self):
        task = make_task(recurring_interval=7, due_date=date(2025, 1, 7))

        task.update_status(TaskStatus.COMPLETED, "u1")

        events = task.pull_events()
        assert [type(e) for e in events] == [TaskStatusChanged, RecurrenceDue]
        assert events[1].interval_days == 7
        assert events[1].completed_by == "u1"

    def test_completing_plain_task_does_not_signal_recurrence(self):
        task = make_task()
        task.update_status(TaskStatus.COMPLETED, "u1")
        assert not any(isinstance(e, RecurrenceDue) for e in task.pull_events())

    def test_status_accepts_plain_strings(self):
        task = make_task()
        task.update_status("BLOCKED", "u1")
        assert task.status == TaskStatus.BLOCKED


class TestDeadlineAndRecurrence:

    def test_subtask_deadline_after_parent_rejected(self):
        subtask = make_task(parent_task_id="p1", due_date=date(2025, 3, 1))

        with pytest.raises(ValidationError) as exc:
            subtask.update_deadline(date(2025, 4, 1), parent_deadline=date(2025, 3, 15))

        assert exc.value.reason == "deadline_after_parent"
        assert subtask.due_date == date(2025, 3, 1)

    def test_subtask_deadline_equal_to_parent_allowed(self):
        subtask = make_task(parent_task_id="p1", due_date=date(2025, 3, 1))
        subtask.update_deadline(date(2025, 3, 15), parent_deadline=date(2025, 3, 15))
        assert subtask.due_date == date(2025, 3, 15)

    def test_root_task_deadline_unbounded(self):
        task = make_task()
        task.update_deadline(date(2030, 1, 1))
        assert task.due_date == date(2030, 1, 1)

    def test_enable_recurring_on_subtask_rejected(self):
        subtask = make_task(parent_task_id="p1")
        with pytest.raises(ValidationError) as exc:
            subtask.update_recurring(True, 7)
        assert exc.value.reason == "recurring_subtask"

    def test_enable_without_interval_rejected(self):
        task = make_task()
        with pytest.raises(ValidationError) as exc:
            task.update_recurring(True, None)
        assert exc.value.reason == "invalid_recurrence"

    def test_disable_recurring(self):
        task = make_task(recurring_interval=7)
        task.update_recurring(False)
        assert task.recurring_interval is None


class TestTags:
    """Adding is idempotent, removing a missing tag is an error."""

    def test_add_duplicate_tag_is_noop(self):
        task = make_task(tags=["urgent"])
        assert task.add_tag("urgent") is False
        assert task.tags == {"urgent"}

    def test_remove_missing_tag_fails(self):
        task = make_task()
        with pytest.raises(ValidationError) as exc:
            task.remove_tag("urgent")
        assert exc.value.reason == "tag_not_found"

    def test_empty_tag_rejected(self):
        task = make_task()
        with pytest.raises(ValidationError):
            task.add_tag("  ")

    def test_overlong_tag_rejected(self):
        task = make_task()
        with pytest.raises(ValidationError) as exc:
            task.add_tag("x" * (MAX_TAG_LENGTH + 1))
        assert exc.value.reason == "invalid_tag"
        assert task.tags == set()

        with pytest.raises(ValidationError):
            make_task(tags=["q1", "y" * (MAX_TAG_LENGTH + 1)])

        assert task.add_tag("z" * MAX_TAG_LENGTH) is True


class TestComments:

    def test_only_author_can_edit(self):
        task = make_task(assignee_ids=["u1", "u2"])
        comment = task.add_comment("First draft attached", "u1")

        with pytest.raises(UnauthorizedError):
            task.update_comment(comment.id, "Hijacked", "u2")

        assert task.find_comment(comment.id).content == "First draft attached"

    def test_author_edits_comment(self):
        task = make_task()
        comment = task.add_comment("Typo", "u1")
        task.pull_events()

        task.update_comment(comment.id, "Fixed", "u1")

        assert task.comments[0].content == "Fixed"
        events = task.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], TaskCommentUpdated)
        assert events[0].task_title == "Quarterly report"

    def test_unknown_comment(self):
        task = make_task()
        with pytest.raises(EntityNotFoundError):
            task.update_comment("missing", "text", "u1")


class TestFiles:

    def test_uploader_must_be_assigned(self):
        task = make_task()
        with pytest.raises(UnauthorizedError):
            task.add_file("a.pdf", 100, "application/pdf", "tasks/a.pdf", uploaded_by="stranger")

    def test_owner_uploads_without_assignment(self):
        task = make_task(owner_id="u1", assignee_ids=["u2"])

        task.add_file("a.pdf", 100, "application/pdf", "tasks/a.pdf", uploaded_by="u1")
        task.add_file("b.pdf", 100, "application/pdf", "tasks/b.pdf", uploaded_by="mgr", manager_access=True)

        assert [f.uploaded_by for f in task.files] == ["u1", "mgr"]

    def test_disallowed_type(self):
        task = make_task()
        with pytest.raises(ValidationError) as exc:
            task.add_file("a.exe", 100, "application/x-msdownload", "tasks/a.exe", uploaded_by="u1")
        assert exc.value.reason == "file_type_not_allowed"

    def test_single_file_limit(self):
        task = make_task()
        with pytest.raises(ValidationError) as exc:
            task.add_file("big.pdf", MAX_FILE_SIZE_BYTES + 1, "application/pdf", "p", uploaded_by="u1")
        assert exc.value.reason == "file_too_large"

    def test_task_storage_limit(self):
        task = make_task()
        for i in range(5):
            task.add_file(f"f{i}.pdf", MAX_FILE_SIZE_BYTES, "application/pdf", f"p{i}", uploaded_by="u1")

        with pytest.raises(ValidationError) as exc:
            task.add_file("one-more.png", 1, "image/png", "p6", uploaded_by="u1")
        assert exc.value.reason == "task_storage_exceeded"
        assert len(task.files) == 5


class TestArchive:

    def test_archive_is_idempotent(self):
        task = make_task()

        assert task.archive() is True
        assert task.archive() is False
        assert task.is_archived is True

    def test_unarchive(self):
        task = make_task()
        task.archive()
        assert task.unarchive() is True
        assert task.is_archived is False
        assert task.unarchive() is False
