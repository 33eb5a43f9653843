"""
Task DTOs for the application layer.
One explicit request type per command.
"""

from typing import List, Optional
from datetime import date, datetime
from pydantic import Field

from taskboard.domain.models.task import Task, TaskStatus, TaskComment, TaskFile, TaskLog
from .base_dto import RequestDTO, ResponseDTO, BaseDTO


# Request DTOs

class CreateTaskRequestDTO(RequestDTO):
    """DTO for creating a new task."""

    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    priority: int = Field(default=5, description="Priority bucket, 1 to 10")
    due_date: date = Field(..., description="Due date")
    status: TaskStatus = Field(default=TaskStatus.TO_DO)
    department_id: Optional[str] = Field(default=None, description="Defaults to the creator's department")
    project_id: Optional[str] = Field(default=None)
    assignee_ids: List[str] = Field(default_factory=list, description="One to five user ids")
    tags: List[str] = Field(default_factory=list)
    recurring_interval: Optional[int] = Field(default=None, description="Days between occurrences")


class CreateSubtaskRequestDTO(RequestDTO):
    """DTO for creating a subtask. Department and project come from the parent."""

    parent_task_id: str
    title: str
    description: Optional[str] = None
    priority: int = 5
    due_date: date
    status: TaskStatus = TaskStatus.TO_DO
    assignee_ids: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    recurring_interval: Optional[int] = None
    department_id: Optional[str] = Field(default=None, description="Ignored; inherited from parent")
    project_id: Optional[str] = Field(default=None, description="Ignored; inherited from parent")


class TaskIdRequestDTO(RequestDTO):
    """DTO for commands and queries that only need the task id."""

    task_id: str


class UpdateTitleRequestDTO(TaskIdRequestDTO):
    title: str


class UpdateDescriptionRequestDTO(TaskIdRequestDTO):
    description: Optional[str] = None


class UpdatePriorityRequestDTO(TaskIdRequestDTO):
    priority: int


class UpdateDeadlineRequestDTO(TaskIdRequestDTO):
    due_date: date


class UpdateStatusRequestDTO(TaskIdRequestDTO):
    status: TaskStatus


class UpdateRecurringRequestDTO(TaskIdRequestDTO):
    enabled: bool
    interval_days: Optional[int] = None


class TagRequestDTO(TaskIdRequestDTO):
    tag: str


class AssigneeRequestDTO(TaskIdRequestDTO):
    user_id: str


class AddCommentRequestDTO(TaskIdRequestDTO):
    content: str


class UpdateCommentRequestDTO(TaskIdRequestDTO):
    comment_id: str
    content: str


class AddFileRequestDTO(TaskIdRequestDTO):
    file_name: str
    file_size: int
    mime_type: str
    storage_path: str


class RemoveFileRequestDTO(TaskIdRequestDTO):
    file_id: str


# Response DTOs

class CommentResponseDTO(ResponseDTO):
    author_id: str
    content: str

    @classmethod
    def from_domain(cls, comment: TaskComment) -> "CommentResponseDTO":
        return cls(
            id=comment.id,
            author_id=comment.author_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class FileResponseDTO(BaseDTO):
    id: str
    file_name: str
    file_size: int
    mime_type: str
    storage_path: str
    uploaded_by: str
    uploaded_at: datetime

    @classmethod
    def from_domain(cls, attachment: TaskFile) -> "FileResponseDTO":
        return cls(
            id=attachment.id,
            file_name=attachment.file_name,
            file_size=attachment.file_size,
            mime_type=attachment.mime_type,
            storage_path=attachment.storage_path,
            uploaded_by=attachment.uploaded_by,
            uploaded_at=attachment.uploaded_at,
        )


class TaskResponseDTO(ResponseDTO):
    """Snapshot of a task as returned to callers."""

    title: str
    description: str
    priority: int
    priority_label: str
    due_date: date
    status: TaskStatus
    owner_id: str
    department_id: str
    project_id: Optional[str] = None
    parent_task_id: Optional[str] = None
    recurring_interval: Optional[int] = None
    is_archived: bool
    start_date: Optional[datetime] = None
    assignee_ids: List[str]
    tags: List[str]
    comments: List[CommentResponseDTO] = Field(default_factory=list)
    files: List[FileResponseDTO] = Field(default_factory=list)
    subtasks: List["TaskResponseDTO"] = Field(default_factory=list)
    can_edit: Optional[bool] = None

    @classmethod
    def from_domain(
        cls,
        task: Task,
        can_edit: Optional[bool] = None,
        subtasks: Optional[List["TaskResponseDTO"]] = None,
    ) -> "TaskResponseDTO":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            priority_label=task.priority_label,
            due_date=task.due_date,
            status=task.status,
            owner_id=task.owner_id,
            department_id=task.department_id,
            project_id=task.project_id,
            parent_task_id=task.parent_task_id,
            recurring_interval=task.recurring_interval,
            is_archived=task.is_archived,
            start_date=task.start_date,
            assignee_ids=sorted(task.assignee_ids),
            tags=sorted(task.tags),
            comments=[CommentResponseDTO.from_domain(c) for c in task.comments],
            files=[FileResponseDTO.from_domain(f) for f in task.files],
            subtasks=subtasks or [],
            can_edit=can_edit,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskLogResponseDTO(BaseDTO):
    id: str
    task_id: str
    user_id: str
    action: str
    field: str
    changes: dict
    metadata: dict
    timestamp: datetime

    @classmethod
    def from_domain(cls, entry: TaskLog) -> "TaskLogResponseDTO":
        return cls(
            id=entry.id,
            task_id=entry.task_id,
            user_id=entry.user_id,
            action=entry.action.value,
            field=entry.field_name,
            changes=entry.changes,
            metadata=entry.metadata,
            timestamp=entry.created_at,
        )


class DeleteTaskResponseDTO(BaseDTO):
    task_id: str
    deleted: bool
