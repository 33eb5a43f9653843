"""
Unit tests for SubtaskConstraints.
"""

import pytest
from datetime import date

from taskboard.domain.models.base import ValidationError, UnauthorizedError
from taskboard.domain.models.task import Task
from taskboard.domain.services.subtask_constraints import SubtaskConstraints


@pytest.fixture
def parent():
    return Task.create(
        title="Launch",
        due_date=date(2025, 5, 31),
        owner_id="alice",
        department_id="backend",
        assignee_ids=["alice"],
    )


@pytest.fixture
def constraints():
    return SubtaskConstraints()


class TestSubtaskConstraints:
    """Test cases for subtask validation."""

    def test_valid_request_dedupes_assignees(self, constraints, parent):
        result = constraints.validate(parent, "alice", date(2025, 5, 1), ["bob", "alice", "bob"])
        assert result == ["bob", "alice"]

    def test_depth_limit(self, constraints, parent):
        child = Task.create(
            title="Child",
            due_date=date(2025, 5, 1),
            owner_id="alice",
            department_id="backend",
            assignee_ids=["alice"],
            parent_task_id=parent.id,
        )

        with pytest.raises(ValidationError) as exc:
            constraints.validate(child, "alice", date(2025, 4, 1), ["alice"])

        assert exc.value.reason == "subtask_depth_exceeded"
        assert "maximum subtask depth" in exc.value.message

    def test_creator_must_be_assigned(self, constraints, parent):
        with pytest.raises(UnauthorizedError):
            constraints.validate(parent, "bob", date(2025, 5, 1), ["bob"])

    def test_deadline_after_parent(self, constraints, parent):
        with pytest.raises(ValidationError) as exc:
            constraints.validate(parent, "alice", date(2025, 6, 1), ["alice"])
        assert exc.value.reason == "deadline_after_parent"

    def test_recurring_rejected(self, constraints, parent):
        with pytest.raises(ValidationError) as exc:
            constraints.validate(parent, "alice", date(2025, 5, 1), ["alice"], recurring_interval=7)
        assert exc.value.reason == "recurring_subtask"

    @pytest.mark.parametrize("assignees,reason", [
        ([], "min_assignees"),
        (["a", "b", "c", "d", "e", "f"], "max_assignees"),
    ])
    def test_assignee_count(self, constraints, parent, assignees, reason):
        with pytest.raises(ValidationError) as exc:
            constraints.validate(parent, "alice", date(2025, 5, 1), assignees)
        assert exc.value.reason == reason
