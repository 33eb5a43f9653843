"""
Authorization engine.
Pure decision functions over a task, the acting user and the user's
department hierarchy. Nothing here performs I/O.
"""

from typing import AbstractSet, Optional

from taskboard.domain.models.task import Task
from taskboard.domain.models.user import UserContext, UserRole, Capability


class AuthorizationService:
    """
    Decides view and edit access.

    `hierarchy` is the set of department ids at or below the acting user's
    department. `assignee_departments`, when given, holds the departments of
    the task's current assignees.
    """

    def can_view_task(
        self,
        task: Task,
        user: UserContext,
        hierarchy: AbstractSet[str],
        assignee_departments: Optional[AbstractSet[str]] = None,
    ) -> bool:
        if task.is_assigned(user.user_id):
            return True

        if task.department_id in hierarchy:
            return True

        if assignee_departments and not hierarchy.isdisjoint(assignee_departments):
            return True

        # Cross-department visibility; never implies edit
        return user.can(Capability.VIEW_ALL)

    def can_edit_task(
        self,
        task: Task,
        user: UserContext,
        hierarchy: AbstractSet[str],
        assignee_departments: Optional[AbstractSet[str]] = None,
    ) -> bool:
        if not hierarchy:
            return False

        if user.can(Capability.EDIT_ASSIGNED) and task.is_assigned(user.user_id):
            return True

        assignee_in_scope = bool(
            assignee_departments and not hierarchy.isdisjoint(assignee_departments)
        )

        if user.can(Capability.EDIT_HIERARCHY):
            return task.department_id in hierarchy or assignee_in_scope

        if user.can(Capability.EDIT_HIERARCHY_FILTERED):
            if task.department_id not in hierarchy:
                return False
            return assignee_departments is None or assignee_in_scope

        return False

    def can_archive_task(
        self,
        task: Task,
        user: UserContext,
        hierarchy: AbstractSet[str],
        assignee_departments: Optional[AbstractSet[str]] = None,
    ) -> bool:
        """Archiving (and unarchiving) is reserved to managers with edit access."""
        if not user.can(Capability.ARCHIVE):
            return False
        return self.can_edit_task(task, user, hierarchy, assignee_departments)

    def can_delete_task(
        self,
        task: Task,
        user: UserContext,
        hierarchy: AbstractSet[str],
        assignee_departments: Optional[AbstractSet[str]] = None,
    ) -> bool:
        return self.can_archive_task(task, user, hierarchy, assignee_departments)

    def can_manage_department(
        self,
        user: UserContext,
        department_id: Optional[str],
        hierarchy: AbstractSet[str],
    ) -> bool:
        """
        The HR_ADMIN role manages any department; the view-all flag does not.
        Managers manage departments inside their own subtree. A root
        department (no id) needs the HR_ADMIN role.
        """
        if user.role == UserRole.HR_ADMIN:
            return True
        if department_id is None:
            return False
        return user.can(Capability.EDIT_HIERARCHY) and department_id in hierarchy
