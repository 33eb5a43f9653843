"""
Task mapper for converting between domain entities and database models.
Relations (assignees, tags, comments, files) are synchronized by the repository.
"""

from taskboard.domain.models.task import (
    Task, TaskStatus, TaskComment, TaskFile, TaskLog, TaskLogAction
)
from taskboard.infrastructure.db.models import (
    TaskModel, TaskCommentModel, TaskFileModel, TaskLogModel
)


SCALAR_FIELDS = (
    "title",
    "description",
    "priority",
    "due_date",
    "owner_id",
    "department_id",
    "project_id",
    "parent_task_id",
    "recurring_interval",
    "is_archived",
    "start_date",
    "created_at",
    "updated_at",
)


class TaskMapper:
    """Maps between Task domain entity and TaskModel database model."""

    def domain_to_model(self, task: Task) -> TaskModel:
        """Convert Task domain entity to a new TaskModel (scalar columns only)."""
        model = TaskModel(id=task.id)
        self.apply_to_model(task, model)
        return model

    def apply_to_model(self, task: Task, model: TaskModel) -> None:
        """Copy scalar columns onto an existing model."""
        for name in SCALAR_FIELDS:
            setattr(model, name, getattr(task, name))
        model.status = task.status

    def model_to_domain(self, model: TaskModel) -> Task:
        """Convert TaskModel, with its loaded relations, to the Task aggregate."""
        return Task(
            id=model.id,
            title=model.title,
            description=model.description or "",
            priority=model.priority,
            due_date=model.due_date,
            status=TaskStatus(model.status) if model.status else TaskStatus.TO_DO,
            owner_id=model.owner_id,
            department_id=model.department_id,
            project_id=model.project_id,
            parent_task_id=model.parent_task_id,
            recurring_interval=model.recurring_interval,
            is_archived=bool(model.is_archived),
            start_date=model.start_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
            assignee_ids={a.user_id for a in model.assignments},
            tags={t.name for t in model.tags},
            comments=[self.comment_to_domain(c) for c in model.comments],
            files=[self.file_to_domain(f) for f in model.files],
        )

    def comment_to_domain(self, model: TaskCommentModel) -> TaskComment:
        return TaskComment(
            id=model.id,
            author_id=model.author_id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def comment_to_model(self, comment: TaskComment, task_id: str) -> TaskCommentModel:
        return TaskCommentModel(
            id=comment.id,
            task_id=task_id,
            author_id=comment.author_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    def file_to_domain(self, model: TaskFileModel) -> TaskFile:
        return TaskFile(
            id=model.id,
            file_name=model.file_name,
            file_size=model.file_size,
            mime_type=model.mime_type,
            storage_path=model.storage_path,
            uploaded_by=model.uploaded_by,
            uploaded_at=model.uploaded_at,
        )

    def file_to_model(self, attachment: TaskFile, task_id: str) -> TaskFileModel:
        return TaskFileModel(
            id=attachment.id,
            task_id=task_id,
            file_name=attachment.file_name,
            file_size=attachment.file_size,
            mime_type=attachment.mime_type,
            storage_path=attachment.storage_path,
            uploaded_by=attachment.uploaded_by,
            uploaded_at=attachment.uploaded_at,
        )


class TaskLogMapper:
    """Maps between TaskLog and TaskLogModel."""

    def domain_to_model(self, entry: TaskLog) -> TaskLogModel:
        return TaskLogModel(
            id=entry.id,
            task_id=entry.task_id,
            user_id=entry.user_id,
            action=entry.action,
            field=entry.field_name,
            changes=entry.changes,
            log_metadata=entry.metadata,
            timestamp=entry.created_at,
        )

    def model_to_domain(self, model: TaskLogModel) -> TaskLog:
        return TaskLog(
            id=model.id,
            task_id=model.task_id,
            user_id=model.user_id,
            action=TaskLogAction(model.action),
            field_name=model.field,
            changes=model.changes or {},
            metadata=model.log_metadata or {},
            created_at=model.timestamp,
            updated_at=model.timestamp,
        )
