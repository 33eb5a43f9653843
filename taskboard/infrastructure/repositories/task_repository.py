"""
Task repository implementation using SQLAlchemy.
"""

from typing import AbstractSet, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from taskboard.domain.models.task import Task
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.infrastructure.db.models import (
    TaskModel, TaskAssignmentModel, TagModel, UserProfileModel
)
from taskboard.infrastructure.mappers.task_mapper import TaskMapper
from .base import translate_db_errors


class SQLAlchemyTaskRepository(TaskRepository):
    """SQLAlchemy implementation of task repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TaskMapper()

    def _query(self):
        return self.session.query(TaskModel).options(
            selectinload(TaskModel.assignments),
            selectinload(TaskModel.tags),
            selectinload(TaskModel.comments),
            selectinload(TaskModel.files),
        )

    @translate_db_errors
    async def save(self, task: Task, acting_user_id: Optional[str] = None) -> Task:
        """Save a task entity with its relations."""
        model = self.session.get(TaskModel, task.id)
        if model is None:
            model = self.mapper.domain_to_model(task)
            self.session.add(model)
        else:
            self.mapper.apply_to_model(task, model)

        self._sync_assignments(model, task, acting_user_id or task.owner_id)
        self._sync_tags(model, task)
        self._sync_comments(model, task)
        self._sync_files(model, task)

        self.session.commit()
        return task

    def _sync_assignments(self, model: TaskModel, task: Task, assigned_by: str) -> None:
        current: Dict[str, TaskAssignmentModel] = {a.user_id: a for a in model.assignments}

        for user_id, assignment in current.items():
            if user_id not in task.assignee_ids:
                model.assignments.remove(assignment)

        for user_id in sorted(task.assignee_ids - current.keys()):
            model.assignments.append(
                TaskAssignmentModel(user_id=user_id, assigned_by_id=assigned_by)
            )

    def _sync_tags(self, model: TaskModel, task: Task) -> None:
        if not task.tags:
            model.tags = []
            return

        existing = {
            tag.name: tag
            for tag in self.session.query(TagModel).filter(TagModel.name.in_(task.tags)).all()
        }
        tags = []
        for name in sorted(task.tags):
            tag = existing.get(name)
            if tag is None:
                tag = TagModel(name=name)
                self.session.add(tag)
            tags.append(tag)
        model.tags = tags

    def _sync_comments(self, model: TaskModel, task: Task) -> None:
        current = {c.id: c for c in model.comments}
        wanted = {c.id for c in task.comments}

        for comment_id, comment_model in current.items():
            if comment_id not in wanted:
                model.comments.remove(comment_model)

        for comment in task.comments:
            comment_model = current.get(comment.id)
            if comment_model is None:
                model.comments.append(self.mapper.comment_to_model(comment, task.id))
            else:
                comment_model.content = comment.content
                comment_model.updated_at = comment.updated_at

    def _sync_files(self, model: TaskModel, task: Task) -> None:
        current = {f.id: f for f in model.files}
        wanted = {f.id for f in task.files}

        for file_id, file_model in current.items():
            if file_id not in wanted:
                model.files.remove(file_model)

        for attachment in task.files:
            if attachment.id not in current:
                model.files.append(self.mapper.file_to_model(attachment, task.id))

    @translate_db_errors
    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        model = self._query().filter(TaskModel.id == task_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    @translate_db_errors
    async def find_subtasks(self, parent_task_id: str, include_archived: bool = True) -> List[Task]:
        query = self._query().filter(TaskModel.parent_task_id == parent_task_id)
        if not include_archived:
            query = query.filter(TaskModel.is_archived.is_(False))

        models = query.order_by(TaskModel.created_at).all()
        return [self.mapper.model_to_domain(model) for model in models]

    @translate_db_errors
    async def has_subtasks(self, task_id: str) -> bool:
        count = self.session.query(func.count(TaskModel.id)).filter(
            TaskModel.parent_task_id == task_id
        ).scalar()
        return bool(count)

    @translate_db_errors
    async def find_in_departments(
        self,
        department_ids: AbstractSet[str],
        include_archived: bool = False
    ) -> List[Task]:
        if not department_ids:
            return []

        ids = list(department_ids)
        assigned_in_scope = (
            select(TaskAssignmentModel.task_id)
            .join(UserProfileModel, UserProfileModel.id == TaskAssignmentModel.user_id)
            .where(UserProfileModel.department_id.in_(ids))
        )

        query = self._query().filter(
            or_(
                TaskModel.department_id.in_(ids),
                TaskModel.id.in_(assigned_in_scope),
            )
        )
        if not include_archived:
            query = query.filter(TaskModel.is_archived.is_(False))

        models = query.order_by(TaskModel.due_date, TaskModel.created_at).all()
        return [self.mapper.model_to_domain(model) for model in models]

    @translate_db_errors
    async def count_active_assignments_in_project(self, user_id: str, project_id: str) -> int:
        return self.session.query(func.count(TaskAssignmentModel.id)).join(
            TaskModel, TaskModel.id == TaskAssignmentModel.task_id
        ).filter(
            TaskAssignmentModel.user_id == user_id,
            TaskModel.project_id == project_id,
            TaskModel.is_archived.is_(False),
        ).scalar() or 0

    @translate_db_errors
    async def delete(self, task_id: str) -> bool:
        """Delete task by ID."""
        model = self.session.get(TaskModel, task_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.commit()
        return True
