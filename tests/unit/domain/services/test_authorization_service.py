"""
Unit tests for the authorization engine.
"""

import pytest
from datetime import date

from taskboard.domain.models.task import Task
from taskboard.domain.models.user import UserContext, UserRole
from taskboard.domain.services.authorization_service import AuthorizationService


ENG_SCOPE = {"eng", "backend", "frontend"}
SALES_SCOPE = {"sales"}


def make_task(department_id="backend", assignees=("alice",)):
    return Task.create(
        title="Ship release",
        due_date=date(2025, 6, 1),
        owner_id=assignees[0],
        department_id=department_id,
        assignee_ids=assignees,
    )


@pytest.fixture
def auth():
    return AuthorizationService()


class TestViewAccess:
    """Visibility rules."""

    def test_assignee_can_view_outside_scope(self, auth):
        task = make_task(department_id="sales", assignees=("alice",))
        alice = UserContext(user_id="alice", role=UserRole.STAFF, department_id="backend")
        assert auth.can_view_task(task, alice, {"backend"}) is True

    def test_department_in_scope(self, auth):
        task = make_task(department_id="backend", assignees=("bob",))
        manager = UserContext(user_id="mgr", role=UserRole.MANAGER, department_id="eng")
        assert auth.can_view_task(task, manager, ENG_SCOPE) is True

    def test_assignee_department_in_scope(self, auth):
        task = make_task(department_id="sales", assignees=("bob",))
        manager = UserContext(user_id="mgr", role=UserRole.MANAGER, department_id="eng")
        assert auth.can_view_task(task, manager, ENG_SCOPE, {"backend"}) is True

    def test_out_of_scope_staff(self, auth):
        task = make_task(department_id="sales", assignees=("carol",))
        staff = UserContext(user_id="bob", role=UserRole.STAFF, department_id="backend")
        assert auth.can_view_task(task, staff, {"backend"}, {"sales"}) is False

    def test_view_all_flag(self, auth):
        task = make_task(department_id="sales", assignees=("carol",))
        viewer = UserContext(user_id="hr", role=UserRole.STAFF, department_id="eng", is_hr_admin=True)
        assert auth.can_view_task(task, viewer, ENG_SCOPE, {"sales"}) is True


class TestEditAccess:
    """Edit matrix across roles."""

    def test_assigned_staff_can_edit(self, auth):
        task = make_task(department_id="sales", assignees=("alice",))
        alice = UserContext(user_id="alice", role=UserRole.STAFF, department_id="backend")
        assert auth.can_edit_task(task, alice, {"backend"}, {"backend"}) is True

    def test_unassigned_staff_cannot_edit_same_department(self, auth):
        task = make_task(department_id="backend", assignees=("alice",))
        bob = UserContext(user_id="bob", role=UserRole.STAFF, department_id="backend")
        assert auth.can_edit_task(task, bob, {"backend"}, {"backend"}) is False

    def test_manager_edits_subtree(self, auth):
        task = make_task(department_id="backend", assignees=("alice",))
        manager = UserContext(user_id="mgr", role=UserRole.MANAGER, department_id="eng")
        assert auth.can_edit_task(task, manager, ENG_SCOPE, {"backend"}) is True

    def test_manager_edits_when_assignee_in_subtree(self, auth):
        task = make_task(department_id="sales", assignees=("alice",))
        manager = UserContext(user_id="mgr", role=UserRole.MANAGER, department_id="eng")
        assert auth.can_edit_task(task, manager, ENG_SCOPE, {"backend"}) is True

    def test_manager_outside_subtree(self, auth):
        task = make_task(department_id="backend", assignees=("alice",))
        manager = UserContext(user_id="mgr-sales", role=UserRole.MANAGER, department_id="sales")
        assert auth.can_edit_task(task, manager, SALES_SCOPE, {"backend"}) is False

    def test_hr_admin_needs_both_department_and_assignee_in_scope(self, auth):
        admin = UserContext(user_id="hr", role=UserRole.HR_ADMIN, department_id="eng")

        in_scope = make_task(department_id="backend", assignees=("alice",))
        assignee_elsewhere = make_task(department_id="backend", assignees=("carol",))
        department_elsewhere = make_task(department_id="sales", assignees=("alice",))

        assert auth.can_edit_task(in_scope, admin, ENG_SCOPE, {"backend"}) is True
        assert auth.can_edit_task(assignee_elsewhere, admin, ENG_SCOPE, {"sales"}) is False
        assert auth.can_edit_task(department_elsewhere, admin, ENG_SCOPE, {"backend"}) is False

    def test_view_all_never_grants_edit(self, auth):
        task = make_task(department_id="sales", assignees=("carol",))
        viewer = UserContext(user_id="hr", role=UserRole.STAFF, department_id="eng", is_hr_admin=True)
        assert auth.can_edit_task(task, viewer, ENG_SCOPE, {"sales"}) is False

    def test_empty_scope_denies(self, auth):
        task = make_task(assignees=("alice",))
        alice = UserContext(user_id="alice", role=UserRole.STAFF, department_id="gone")
        assert auth.can_edit_task(task, alice, set()) is False


class TestArchiveAndDepartments:

    def test_only_managers_archive(self, auth):
        task = make_task(department_id="backend", assignees=("alice",))
        alice = UserContext(user_id="alice", role=UserRole.STAFF, department_id="backend")
        manager = UserContext(user_id="mgr", role=UserRole.MANAGER, department_id="eng")

        assert auth.can_archive_task(task, alice, {"backend"}, {"backend"}) is False
        assert auth.can_archive_task(task, manager, ENG_SCOPE, {"backend"}) is True
        assert auth.can_delete_task(task, manager, SALES_SCOPE, {"backend"}) is False

    def test_manage_department(self, auth):
        manager = UserContext(user_id="mgr", role=UserRole.MANAGER, department_id="eng")
        admin = UserContext(user_id="hr", role=UserRole.HR_ADMIN, department_id="root")

        assert auth.can_manage_department(manager, "backend", ENG_SCOPE) is True
        assert auth.can_manage_department(manager, "sales", ENG_SCOPE) is False
        assert auth.can_manage_department(manager, None, ENG_SCOPE) is False
        assert auth.can_manage_department(admin, "sales", {"root"}) is True

    def test_view_all_flag_never_manages_departments(self, auth):
        viewer = UserContext(user_id="hr", role=UserRole.STAFF, department_id="eng", is_hr_admin=True)

        assert auth.can_manage_department(viewer, None, ENG_SCOPE) is False
        assert auth.can_manage_department(viewer, "sales", ENG_SCOPE) is False
        assert auth.can_manage_department(viewer, "backend", ENG_SCOPE) is False
