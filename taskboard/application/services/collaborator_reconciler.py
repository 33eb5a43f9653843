"""
Keeps project-collaborator membership in step with task assignments.
Membership is updated incrementally, per affected user.
"""

import logging
from typing import Iterable, Optional

from taskboard.domain.models.project import ProjectCollaborator
from taskboard.domain.repositories.project_repository import ProjectRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)


class ProjectCollaboratorReconciler:
    """Adds collaborators on assignment and drops them when no active work is left."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
        user_repository: UserRepository,
    ):
        self.project_repository = project_repository
        self.task_repository = task_repository
        self.user_repository = user_repository

    async def on_assigned(self, project_id: Optional[str], user_ids: Iterable[str]) -> int:
        """Ensure each user is a collaborator. Returns the number of new rows."""
        if not project_id:
            return 0

        departments = await self.user_repository.department_ids_for(user_ids)
        added = 0
        for user_id, department_id in departments.items():
            inserted = await self.project_repository.add_collaborator(
                ProjectCollaborator(
                    project_id=project_id,
                    user_id=user_id,
                    department_id=department_id,
                )
            )
            if inserted:
                added += 1

        if added:
            logger.info(f"Added {added} collaborator(s) to project {project_id}")
        return added

    async def reconcile(self, project_id: Optional[str], user_ids: Iterable[str]) -> int:
        """Remove users that hold no non-archived assignment in the project any more."""
        if not project_id:
            return 0

        removed = 0
        for user_id in sorted(set(user_ids)):
            active = await self.task_repository.count_active_assignments_in_project(user_id, project_id)
            if active > 0:
                continue

            if await self.project_repository.remove_collaborator(project_id, user_id):
                removed += 1
            else:
                logger.debug(f"Collaborator {user_id} already absent from project {project_id}")

        if removed:
            logger.info(f"Removed {removed} collaborator(s) from project {project_id}")
        return removed
