"""
Archives a task together with its direct subtasks.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set

from taskboard.domain.models.task import Task, TaskLogAction
from taskboard.domain.models.user import UserContext
from taskboard.domain.repositories.task_repository import TaskRepository
from .collaborator_reconciler import ProjectCollaboratorReconciler
from .task_log_writer import TaskLogWriter


logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    task: Task
    archived_subtasks: List[Task] = field(default_factory=list)
    collaborators_removed: int = 0


class CascadeArchiveOrchestrator:
    """
    Archive steps run one after another and each is persisted on its own.
    A failure midway leaves the earlier steps in place; running the cascade
    again finishes the job because archiving an archived task is a no-op.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        log_writer: TaskLogWriter,
        reconciler: ProjectCollaboratorReconciler,
    ):
        self.task_repository = task_repository
        self.log_writer = log_writer
        self.reconciler = reconciler

    async def archive(self, task: Task, actor: UserContext) -> CascadeResult:
        result = CascadeResult(task=task)

        if task.archive():
            await self.task_repository.save(task, actor.user_id)
            await self.log_writer.record(
                task.id, actor.user_id, TaskLogAction.ARCHIVED, "Task",
                changes={"from": False, "to": True},
            )

        # Subtasks cannot have subtasks, so one level is enough
        subtasks = await self.task_repository.find_subtasks(task.id)
        for subtask in subtasks:
            if not subtask.archive():
                continue

            await self.task_repository.save(subtask, actor.user_id)
            await self.log_writer.record(
                subtask.id, actor.user_id, TaskLogAction.ARCHIVED, "Task",
                changes={"from": False, "to": True},
                metadata={"cascadeFromParent": True, "parentTaskId": task.id},
            )
            result.archived_subtasks.append(subtask)

        affected: Dict[str, Set[str]] = {}
        for item in [task] + subtasks:
            if item.project_id:
                affected.setdefault(item.project_id, set()).update(item.assignee_ids)

        for project_id, user_ids in affected.items():
            result.collaborators_removed += await self.reconciler.reconcile(project_id, user_ids)

        logger.info(
            f"Archived task {task.id} with {len(result.archived_subtasks)} subtask(s)"
        )
        return result
