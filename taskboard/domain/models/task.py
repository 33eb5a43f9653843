"""
Task domain model.
The task aggregate owns every mutation invariant: title and priority bounds,
assignee cardinality, subtask deadline ordering, recurrence and tag rules.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional, List, Set, Dict, Any, Iterable
from enum import Enum

from taskboard.domain.models.base import (
    AggregateRoot,
    BaseEntity,
    ValueObject,
    ValidationError,
    UnauthorizedError,
    EntityNotFoundError,
    new_id,
)
from taskboard.domain.models.user import UserContext, Capability
from taskboard.domain.events.task_events import (
    TaskStatusChanged,
    RecurrenceDue,
    TaskAssigneeAdded,
    TaskAssigneeRemoved,
    TaskCommentAdded,
    TaskCommentUpdated,
)


MAX_TITLE_LENGTH = 255
MAX_TAG_LENGTH = 100
MIN_ASSIGNEES = 1
MAX_ASSIGNEES = 5
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
MAX_TASK_STORAGE_BYTES = 50 * 1024 * 1024

ALLOWED_FILE_TYPES = frozenset({
    "application/pdf",
    "image/png",
    "image/jpeg",
    "image/jpg",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
})


class TaskStatus(str, Enum):
    """Task workflow states."""
    TO_DO = "TO_DO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    BLOCKED = "BLOCKED"


@dataclass(frozen=True)
class Priority(ValueObject):
    """Priority bucket from 1 (lowest) to 10 (highest)."""

    value: int

    def validate(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                "Priority must be between 1 and 10", "priority", reason="invalid_priority"
            )
        if self.value < 1 or self.value > 10:
            raise ValidationError(
                "Priority must be between 1 and 10", "priority", reason="invalid_priority"
            )

    @property
    def label(self) -> str:
        if self.value <= 3:
            return "Low"
        if self.value <= 6:
            return "Medium"
        if self.value <= 8:
            return "High"
        return "Critical"

    def __int__(self) -> int:
        return self.value


@dataclass
class TaskComment:
    """Task comment."""

    author_id: str
    content: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class TaskFile:
    """Reference to an uploaded file. The blob itself lives in external storage."""

    file_name: str
    file_size: int
    mime_type: str
    storage_path: str
    uploaded_by: str
    id: str = field(default_factory=new_id)
    uploaded_at: datetime = field(default_factory=datetime.utcnow)


class TaskLogAction(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    ARCHIVED = "ARCHIVED"
    UNARCHIVED = "UNARCHIVED"
    RECURRING_TASK_GENERATED = "RECURRING_TASK_GENERATED"


DEFAULT_LOG_METADATA = {"source": "web_ui"}


@dataclass(eq=False, kw_only=True)
class TaskLog(BaseEntity):
    """Append-only audit entry for one mutating operation."""

    task_id: str
    user_id: str
    action: TaskLogAction
    field_name: str
    changes: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_LOG_METADATA))

    @classmethod
    def record(
        cls,
        task_id: str,
        user_id: str,
        action: TaskLogAction,
        field_name: str,
        changes: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "TaskLog":
        return cls(
            id=new_id(),
            task_id=task_id,
            user_id=user_id,
            action=action,
            field_name=field_name,
            changes=changes or {},
            metadata=metadata if metadata is not None else dict(DEFAULT_LOG_METADATA),
        )


def _clean_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if len(cleaned) < 1 or len(cleaned) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Task title must be between 1 and {MAX_TITLE_LENGTH} characters",
            "title",
            reason="invalid_title",
        )
    return cleaned


def _clean_tag(tag: Optional[str]) -> str:
    name = (tag or "").strip()
    if not name:
        raise ValidationError("Tag name cannot be empty", "tag", reason="invalid_tag")
    if len(name) > MAX_TAG_LENGTH:
        raise ValidationError(
            f"Tag name cannot exceed {MAX_TAG_LENGTH} characters", "tag", reason="invalid_tag"
        )
    return name


def _check_recurrence(interval: Optional[int], is_subtask: bool) -> None:
    if interval is None:
        return
    if is_subtask:
        raise ValidationError(
            "Subtasks cannot be set as recurring", "recurring_interval", reason="recurring_subtask"
        )
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise ValidationError(
            "Recurrence days must be greater than 0 when recurring is enabled",
            "recurring_interval",
            reason="invalid_recurrence",
        )


@dataclass(eq=False, kw_only=True)
class Task(AggregateRoot):
    """
    Task aggregate.

    Every mutator validates its input first and only then changes state, so a
    rejected call leaves the task untouched. Cascading to subtasks and
    persistence are handled by application services.
    """

    title: str
    description: str = ""
    priority: int = 5
    due_date: date
    status: TaskStatus = TaskStatus.TO_DO
    owner_id: str
    department_id: str
    project_id: Optional[str] = None
    parent_task_id: Optional[str] = None
    recurring_interval: Optional[int] = None
    is_archived: bool = False
    start_date: Optional[datetime] = None

    assignee_ids: Set[str] = field(default_factory=set)
    tags: Set[str] = field(default_factory=set)
    comments: List[TaskComment] = field(default_factory=list)
    files: List[TaskFile] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        self.status = TaskStatus(self.status)
        self.assignee_ids = set(self.assignee_ids)
        self.tags = set(self.tags)
        self.validate()

    def validate(self) -> None:
        """Validate task state."""
        _clean_title(self.title)
        Priority(self.priority)

        if not self.owner_id:
            raise ValidationError("Task owner is required", "owner_id")

        if not self.department_id:
            raise ValidationError("Task department is required", "department_id")

        if self.due_date is None:
            raise ValidationError("Due date is required", "due_date")

        if len(self.assignee_ids) < MIN_ASSIGNEES:
            raise ValidationError(
                "Task must have at least 1 assignee", "assignee_ids", reason="min_assignees"
            )

        if len(self.assignee_ids) > MAX_ASSIGNEES:
            raise ValidationError(
                f"Maximum of {MAX_ASSIGNEES} assignees allowed per task",
                "assignee_ids",
                reason="max_assignees",
            )

        _check_recurrence(self.recurring_interval, self.is_subtask)

    # Properties

    @property
    def is_subtask(self) -> bool:
        return self.parent_task_id is not None

    @property
    def is_recurring(self) -> bool:
        return self.recurring_interval is not None

    @property
    def priority_label(self) -> str:
        return Priority(self.priority).label

    @property
    def total_file_size(self) -> int:
        return sum(f.file_size for f in self.files)

    def is_assigned(self, user_id: str) -> bool:
        return user_id in self.assignee_ids

    def can_upload(self, user_id: str) -> bool:
        return user_id == self.owner_id or self.is_assigned(user_id)

    # Field updates

    def update_title(self, title: str) -> None:
        self.title = _clean_title(title)
        self.mark_as_updated()

    def update_description(self, description: Optional[str]) -> None:
        self.description = description or ""
        self.mark_as_updated()

    def update_priority(self, priority: int) -> None:
        self.priority = Priority(priority).value
        self.mark_as_updated()

    def update_deadline(self, new_date: date, parent_deadline: Optional[date] = None) -> None:
        """Move the due date. A subtask may not end after its parent."""
        if new_date is None:
            raise ValidationError("Due date is required", "due_date")

        if self.is_subtask and parent_deadline is not None and new_date > parent_deadline:
            raise ValidationError(
                "Subtask deadline cannot be after parent task deadline",
                "due_date",
                reason="deadline_after_parent",
            )

        self.due_date = new_date
        self.mark_as_updated()

    def update_status(self, new_status: TaskStatus, changed_by: str) -> bool:
        """
        Move to a new workflow state.

        The start date is stamped on the first entry into IN_PROGRESS and never
        again. Completing a recurring task raises RecurrenceDue; the next
        occurrence is created by its handler. Returns False when nothing changed.
        """
        new_status = TaskStatus(new_status)
        if new_status == self.status:
            return False

        old_status = self.status
        self.status = new_status

        if new_status == TaskStatus.IN_PROGRESS and self.start_date is None:
            self.start_date = datetime.utcnow()

        self.mark_as_updated()
        self.add_event(TaskStatusChanged(
            task_id=self.id,
            old_status=old_status.value,
            new_status=new_status.value,
            changed_by=changed_by
        ))

        if new_status == TaskStatus.COMPLETED and self.recurring_interval is not None:
            self.add_event(RecurrenceDue(
                task_id=self.id,
                interval_days=self.recurring_interval,
                due_date=self.due_date,
                completed_by=changed_by
            ))

        return True

    def update_recurring(self, enabled: bool, interval_days: Optional[int] = None) -> None:
        interval = interval_days if enabled else None

        if enabled and interval is None:
            # Enabling requires a positive interval
            _check_recurrence(0, self.is_subtask)

        _check_recurrence(interval, self.is_subtask)

        self.recurring_interval = interval
        self.mark_as_updated()

    # Tags

    def add_tag(self, tag: str) -> bool:
        """Add a tag. Adding one that is already present is a no-op."""
        name = _clean_tag(tag)

        if name in self.tags:
            return False

        self.tags.add(name)
        self.mark_as_updated()
        return True

    def remove_tag(self, tag: str) -> None:
        """Remove a tag. Removing one that is not present is an error."""
        name = (tag or "").strip()
        if name not in self.tags:
            raise ValidationError(
                f"Tag '{name}' not found on task", "tag", reason="tag_not_found"
            )

        self.tags.discard(name)
        self.mark_as_updated()

    # Assignees

    def add_assignee(self, user_id: str, actor: UserContext) -> bool:
        """Assign a user. Re-adding a current assignee is a no-op."""
        if user_id in self.assignee_ids:
            return False

        if len(self.assignee_ids) >= MAX_ASSIGNEES:
            raise ValidationError(
                f"Maximum of {MAX_ASSIGNEES} assignees allowed per task",
                "assignee_ids",
                reason="max_assignees",
            )

        self.assignee_ids.add(user_id)
        self.mark_as_updated()
        self.add_event(TaskAssigneeAdded(
            task_id=self.id,
            task_title=self.title,
            assignee_id=user_id,
            assigned_by=actor.user_id
        ))
        return True

    def remove_assignee(self, user_id: str, actor: UserContext) -> None:
        """
        Unassign a user. Only managers may remove assignees and the last one
        always stays. The owner may be removed; ownership is unaffected.
        """
        if not actor.can(Capability.MANAGE_ASSIGNEES):
            raise UnauthorizedError("Only managers can remove assignees")

        if user_id not in self.assignee_ids:
            raise ValidationError(
                "User is not assigned to this task", "assignee_ids", reason="not_assigned"
            )

        if len(self.assignee_ids) <= MIN_ASSIGNEES:
            raise ValidationError(
                "Task must have at least 1 assignee", "assignee_ids", reason="min_assignees"
            )

        self.assignee_ids.discard(user_id)
        self.mark_as_updated()
        self.add_event(TaskAssigneeRemoved(
            task_id=self.id,
            task_title=self.title,
            assignee_id=user_id,
            removed_by=actor.user_id
        ))

    # Comments

    def find_comment(self, comment_id: str) -> TaskComment:
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        raise EntityNotFoundError("Comment", comment_id)

    def add_comment(self, content: str, author_id: str) -> TaskComment:
        text = (content or "").strip()
        if not text:
            raise ValidationError("Comment cannot be empty", "content", reason="invalid_comment")

        comment = TaskComment(author_id=author_id, content=text)
        self.comments.append(comment)
        self.mark_as_updated()
        self.add_event(TaskCommentAdded(
            task_id=self.id,
            task_title=self.title,
            comment_id=comment.id,
            author_id=author_id
        ))
        return comment

    def update_comment(self, comment_id: str, content: str, requesting_user_id: str) -> TaskComment:
        """Edit a comment. Only its author may do so, whatever their role."""
        comment = self.find_comment(comment_id)

        if comment.author_id != requesting_user_id:
            raise UnauthorizedError("Only the comment author can edit this comment")

        text = (content or "").strip()
        if not text:
            raise ValidationError("Comment cannot be empty", "content", reason="invalid_comment")

        comment.content = text
        comment.updated_at = datetime.utcnow()
        self.mark_as_updated()
        self.add_event(TaskCommentUpdated(
            task_id=self.id,
            task_title=self.title,
            comment_id=comment.id,
            author_id=requesting_user_id
        ))
        return comment

    # Files

    def add_file(
        self,
        file_name: str,
        file_size: int,
        mime_type: str,
        storage_path: str,
        uploaded_by: str,
        manager_access: bool = False,
    ) -> TaskFile:
        """
        Attach a file reference after checking type, size and storage quota.
        The owner and assignees may upload. `manager_access` admits a manager
        whose hierarchy covers the task.
        """
        if not (manager_access or self.can_upload(uploaded_by)):
            raise UnauthorizedError(
                "You must be the task owner, assigned to this task, or a manager of its department to upload files"
            )

        if mime_type not in ALLOWED_FILE_TYPES:
            raise ValidationError(
                f"File type {mime_type} is not allowed", "mime_type", reason="file_type_not_allowed"
            )

        if file_size <= 0 or file_size > MAX_FILE_SIZE_BYTES:
            raise ValidationError(
                "File size must be between 1 byte and 10MB", "file_size", reason="file_too_large"
            )

        if self.total_file_size + file_size > MAX_TASK_STORAGE_BYTES:
            raise ValidationError(
                "Task storage limit of 50MB exceeded", "file_size", reason="task_storage_exceeded"
            )

        attachment = TaskFile(
            file_name=file_name,
            file_size=file_size,
            mime_type=mime_type,
            storage_path=storage_path,
            uploaded_by=uploaded_by,
        )
        self.files.append(attachment)
        self.mark_as_updated()
        return attachment

    def remove_file(self, file_id: str) -> TaskFile:
        for attachment in self.files:
            if attachment.id == file_id:
                self.files.remove(attachment)
                self.mark_as_updated()
                return attachment
        raise EntityNotFoundError("File", file_id)

    # Archive

    def archive(self) -> bool:
        """Set the archived flag. Archiving twice is a no-op."""
        if self.is_archived:
            return False

        self.is_archived = True
        self.mark_as_updated()
        return True

    def unarchive(self) -> bool:
        if not self.is_archived:
            return False

        self.is_archived = False
        self.mark_as_updated()
        return True

    @classmethod
    def create(
        cls,
        title: str,
        due_date: date,
        owner_id: str,
        department_id: str,
        assignee_ids: Iterable[str],
        description: Optional[str] = None,
        priority: int = 5,
        status: TaskStatus = TaskStatus.TO_DO,
        project_id: Optional[str] = None,
        parent_task_id: Optional[str] = None,
        recurring_interval: Optional[int] = None,
        tags: Optional[Iterable[str]] = None,
        created_at: Optional[datetime] = None,
    ) -> "Task":
        """Factory method to create a new task."""
        now = created_at or datetime.utcnow()
        task = cls(
            id=new_id(),
            title=_clean_title(title),
            description=description or "",
            priority=priority,
            due_date=due_date,
            status=status,
            owner_id=owner_id,
            department_id=department_id,
            project_id=project_id,
            parent_task_id=parent_task_id,
            recurring_interval=recurring_interval,
            assignee_ids=set(assignee_ids),
            tags={_clean_tag(t) for t in (tags or []) if t and t.strip()},
            created_at=now,
            updated_at=now,
        )
        if task.status == TaskStatus.IN_PROGRESS:
            task.start_date = now
        return task
