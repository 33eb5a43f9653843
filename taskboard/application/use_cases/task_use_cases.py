"""
Task use cases for the application layer.
Each command loads the task, checks access, mutates the aggregate, persists,
writes its log entry and hands the collected events to the dispatcher.
"""

import logging
from typing import List, Optional, TypeVar

from taskboard.application.use_cases.base_use_case import (
    AuthorizedUseCase,
    CommandUseCase,
    QueryUseCase,
)
from taskboard.application.dto.task_dto import (
    CreateTaskRequestDTO,
    CreateSubtaskRequestDTO,
    TaskIdRequestDTO,
    UpdateTitleRequestDTO,
    UpdateDescriptionRequestDTO,
    UpdatePriorityRequestDTO,
    UpdateDeadlineRequestDTO,
    UpdateStatusRequestDTO,
    UpdateRecurringRequestDTO,
    TagRequestDTO,
    AssigneeRequestDTO,
    AddCommentRequestDTO,
    UpdateCommentRequestDTO,
    AddFileRequestDTO,
    RemoveFileRequestDTO,
    TaskResponseDTO,
    TaskLogResponseDTO,
    DeleteTaskResponseDTO,
)
from taskboard.application.services.task_access import TaskAccessService
from taskboard.application.services.task_log_writer import TaskLogWriter
from taskboard.application.services.collaborator_reconciler import ProjectCollaboratorReconciler
from taskboard.application.services.cascade_archive import CascadeArchiveOrchestrator
from taskboard.domain.events.base import EventDispatcher
from taskboard.domain.models.base import (
    EntityNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from taskboard.domain.models.task import Task, TaskLogAction
from taskboard.domain.repositories.department_repository import DepartmentRepository
from taskboard.domain.repositories.project_repository import ProjectRepository
from taskboard.domain.repositories.task_log_repository import TaskLogRepository
from taskboard.domain.repositories.task_repository import TaskRepository
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.domain.services.subtask_constraints import SubtaskConstraints


logger = logging.getLogger(__name__)

Req = TypeVar("Req")
Resp = TypeVar("Resp")


class TaskCommandUseCase(AuthorizedUseCase, CommandUseCase[Req, Resp]):
    """Shared wiring for task commands."""

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        department_repository: DepartmentRepository,
        task_log_repository: TaskLogRepository,
        project_repository: ProjectRepository,
        event_dispatcher: Optional[EventDispatcher] = None,
    ):
        super().__init__()
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.department_repository = department_repository
        self.project_repository = project_repository
        self.event_dispatcher = event_dispatcher
        self.access = TaskAccessService(task_repository, user_repository, department_repository)
        self.log = TaskLogWriter(task_log_repository)
        self.reconciler = ProjectCollaboratorReconciler(
            project_repository, task_repository, user_repository
        )

    async def _load_for_edit(self, task_id: str) -> Task:
        task = await self.access.load_task(task_id)
        await self.access.require_edit(task, self.current_user)
        return task

    async def _save(self, task: Task) -> Task:
        saved = await self.task_repository.save(task, self.current_user_id)
        self._collect_events(task)
        return saved

    async def _respond(self, task: Task) -> TaskResponseDTO:
        can_edit = await self.access.can_edit(task, self.current_user)
        return TaskResponseDTO.from_domain(task, can_edit=can_edit)

    async def _require_valid_assignees(self, assignee_ids: List[str]) -> None:
        if not await self.user_repository.validate_assignees(assignee_ids):
            raise ValidationError(
                "One or more assignees not found or inactive",
                "assignee_ids",
                reason="invalid_assignees",
            )


class CreateTaskUseCase(TaskCommandUseCase[CreateTaskRequestDTO, TaskResponseDTO]):
    """Use case for creating a root task."""

    async def _execute_command_logic(self, request: CreateTaskRequestDTO) -> TaskResponseDTO:
        assignee_ids = list(dict.fromkeys(request.assignee_ids))

        if request.project_id and not await self.project_repository.exists(request.project_id):
            raise EntityNotFoundError("Project", request.project_id)

        department_id = request.department_id or self.current_user.department_id
        if await self.department_repository.find_by_id(department_id) is None:
            raise EntityNotFoundError("Department", department_id)

        # Bounds first so an empty list fails on cardinality, not lookup
        task = Task.create(
            title=request.title,
            description=request.description,
            priority=request.priority,
            due_date=request.due_date,
            status=request.status,
            owner_id=self.current_user_id,
            department_id=department_id,
            project_id=request.project_id,
            recurring_interval=request.recurring_interval,
            assignee_ids=assignee_ids,
            tags=request.tags,
        )
        await self._require_valid_assignees(assignee_ids)

        await self._save(task)
        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.CREATED, "Task",
            changes={"from": None, "to": task.title},
        )
        await self.reconciler.on_assigned(task.project_id, task.assignee_ids)

        logger.info(f"Task {task.id} created by {self.current_user_id}")
        return await self._respond(task)


class CreateSubtaskUseCase(TaskCommandUseCase[CreateSubtaskRequestDTO, TaskResponseDTO]):
    """Use case for creating a subtask under an existing root task."""

    def __init__(self, *args, constraints: Optional[SubtaskConstraints] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.constraints = constraints or SubtaskConstraints()

    async def _execute_command_logic(self, request: CreateSubtaskRequestDTO) -> TaskResponseDTO:
        parent = await self.access.load_task(request.parent_task_id)

        assignee_ids = self.constraints.validate(
            parent,
            creator_id=self.current_user_id,
            due_date=request.due_date,
            assignee_ids=request.assignee_ids,
            recurring_interval=request.recurring_interval,
        )
        await self._require_valid_assignees(assignee_ids)

        if request.department_id and request.department_id != parent.department_id:
            logger.debug(f"Ignoring department {request.department_id} for subtask of {parent.id}")

        subtask = Task.create(
            title=request.title,
            description=request.description,
            priority=request.priority,
            due_date=request.due_date,
            status=request.status,
            owner_id=self.current_user_id,
            department_id=parent.department_id,
            project_id=parent.project_id,
            parent_task_id=parent.id,
            assignee_ids=assignee_ids,
            tags=request.tags,
        )

        await self._save(subtask)
        await self.log.record(
            subtask.id, self.current_user_id, TaskLogAction.CREATED, "Task",
            changes={"from": None, "to": subtask.title},
            metadata={"parentTaskId": parent.id},
        )
        await self.reconciler.on_assigned(subtask.project_id, subtask.assignee_ids)

        logger.info(f"Subtask {subtask.id} created under {parent.id}")
        return await self._respond(subtask)


class UpdateTitleUseCase(TaskCommandUseCase[UpdateTitleRequestDTO, TaskResponseDTO]):

    async def _execute_command_logic(self, request: UpdateTitleRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        old = task.title
        task.update_title(request.title)

        await self._save(task)
        await self.log.changed(task.id, self.current_user_id, "Title", old, task.title)
        return await self._respond(task)


class UpdateDescriptionUseCase(TaskCommandUseCase[UpdateDescriptionRequestDTO, TaskResponseDTO]):

    async def _execute_command_logic(self, request: UpdateDescriptionRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        old = task.description
        task.update_description(request.description)

        await self._save(task)
        await self.log.changed(task.id, self.current_user_id, "Description", old, task.description)
        return await self._respond(task)


class UpdatePriorityUseCase(TaskCommandUseCase[UpdatePriorityRequestDTO, TaskResponseDTO]):

    async def _execute_command_logic(self, request: UpdatePriorityRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        old = task.priority
        task.update_priority(request.priority)

        await self._save(task)
        await self.log.changed(task.id, self.current_user_id, "Priority", old, task.priority)
        return await self._respond(task)


class UpdateDeadlineUseCase(TaskCommandUseCase[UpdateDeadlineRequestDTO, TaskResponseDTO]):
    """Moves a due date; subtasks are bounded by their parent's deadline."""

    async def _execute_command_logic(self, request: UpdateDeadlineRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)

        parent_deadline = None
        if task.parent_task_id:
            parent = await self.access.load_task(task.parent_task_id)
            parent_deadline = parent.due_date

        old = task.due_date
        task.update_deadline(request.due_date, parent_deadline)

        await self._save(task)
        await self.log.changed(task.id, self.current_user_id, "Due Date", old, task.due_date)
        return await self._respond(task)


class UpdateStatusUseCase(TaskCommandUseCase[UpdateStatusRequestDTO, TaskResponseDTO]):
    """
    Changes the workflow state.

    Completing a recurring task raises RecurrenceDue; the next occurrence is
    generated by its event handler after this command has been persisted.
    """

    async def _execute_command_logic(self, request: UpdateStatusRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        old_status = task.status
        old_start_date = task.start_date

        if not task.update_status(request.status, self.current_user_id):
            return await self._respond(task)

        await self._save(task)
        await self.log.changed(task.id, self.current_user_id, "Status", old_status, task.status)

        if old_start_date is None and task.start_date is not None:
            await self.log.record(
                task.id, self.current_user_id, TaskLogAction.UPDATED, "Start Date",
                changes={"from": None, "to": task.start_date.isoformat()},
                metadata={"source": "automatic", "reason": "First transition to IN_PROGRESS"},
            )

        return await self._respond(task)


class UpdateRecurringUseCase(TaskCommandUseCase[UpdateRecurringRequestDTO, TaskResponseDTO]):

    async def _execute_command_logic(self, request: UpdateRecurringRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        old = task.recurring_interval
        task.update_recurring(request.enabled, request.interval_days)

        await self._save(task)
        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.UPDATED, "Recurring Settings",
            changes={
                "from": {"enabled": old is not None, "days": old},
                "to": {"enabled": task.is_recurring, "days": task.recurring_interval},
            },
        )
        return await self._respond(task)


class AddTagUseCase(TaskCommandUseCase[TagRequestDTO, TaskResponseDTO]):

    async def _execute_command_logic(self, request: TagRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)

        if task.add_tag(request.tag):
            await self._save(task)
            await self.log.added(task.id, self.current_user_id, "Tag", request.tag.strip())

        return await self._respond(task)


class RemoveTagUseCase(TaskCommandUseCase[TagRequestDTO, TaskResponseDTO]):

    async def _execute_command_logic(self, request: TagRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        task.remove_tag(request.tag)

        await self._save(task)
        await self.log.removed(task.id, self.current_user_id, "Tag", request.tag.strip())
        return await self._respond(task)


class AddAssigneeUseCase(TaskCommandUseCase[AssigneeRequestDTO, TaskResponseDTO]):
    """Assigns a user; the user joins the task's project as a collaborator."""

    async def _execute_command_logic(self, request: AssigneeRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        await self._require_valid_assignees([request.user_id])

        if not task.add_assignee(request.user_id, self.current_user):
            return await self._respond(task)

        await self._save(task)
        await self.log.added(task.id, self.current_user_id, "Assignees", request.user_id)
        await self.reconciler.on_assigned(task.project_id, [request.user_id])
        return await self._respond(task)


class RemoveAssigneeUseCase(TaskCommandUseCase[AssigneeRequestDTO, TaskResponseDTO]):
    """Unassigns a user and drops project membership left without active work."""

    async def _execute_command_logic(self, request: AssigneeRequestDTO) -> TaskResponseDTO:
        task = await self._load_for_edit(request.task_id)
        task.remove_assignee(request.user_id, self.current_user)

        await self._save(task)
        await self.log.removed(task.id, self.current_user_id, "Assignees", request.user_id)
        await self.reconciler.reconcile(task.project_id, [request.user_id])
        return await self._respond(task)


class AddCommentUseCase(TaskCommandUseCase[AddCommentRequestDTO, TaskResponseDTO]):
    """Anyone who can view the task may comment on it."""

    async def _execute_command_logic(self, request: AddCommentRequestDTO) -> TaskResponseDTO:
        task = await self.access.load_task(request.task_id)
        await self.access.require_view(task, self.current_user)

        comment = task.add_comment(request.content, self.current_user_id)

        await self._save(task)
        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.CREATED, "Comment",
            changes={"added": comment.content},
            metadata={"commentId": comment.id},
        )
        return await self._respond(task)


class UpdateCommentUseCase(TaskCommandUseCase[UpdateCommentRequestDTO, TaskResponseDTO]):
    """Only the author edits a comment; task edit rights do not matter."""

    async def _execute_command_logic(self, request: UpdateCommentRequestDTO) -> TaskResponseDTO:
        task = await self.access.load_task(request.task_id)
        await self.access.require_view(task, self.current_user)
        old = task.find_comment(request.comment_id).content

        comment = task.update_comment(request.comment_id, request.content, self.current_user_id)

        await self._save(task)
        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.UPDATED, "Comment",
            changes={"from": old, "to": comment.content},
            metadata={"commentId": comment.id},
        )
        return await self._respond(task)


class AddFileUseCase(TaskCommandUseCase[AddFileRequestDTO, TaskResponseDTO]):
    """Stores a file reference. The blob is uploaded elsewhere beforehand."""

    async def _execute_command_logic(self, request: AddFileRequestDTO) -> TaskResponseDTO:
        task = await self.access.load_task(request.task_id)
        manager_access = False
        if not task.can_upload(self.current_user_id) and self.current_user.is_manager:
            manager_access = await self.access.can_edit(task, self.current_user)

        attachment = task.add_file(
            file_name=request.file_name,
            file_size=request.file_size,
            mime_type=request.mime_type,
            storage_path=request.storage_path,
            uploaded_by=self.current_user_id,
            manager_access=manager_access,
        )

        await self._save(task)
        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.CREATED, "File",
            changes={"added": attachment.file_name},
            metadata={"fileId": attachment.id, "fileSize": attachment.file_size},
        )
        return await self._respond(task)


class RemoveFileUseCase(TaskCommandUseCase[RemoveFileRequestDTO, TaskResponseDTO]):
    """The uploader, or anyone with edit access, may remove a file."""

    async def _execute_command_logic(self, request: RemoveFileRequestDTO) -> TaskResponseDTO:
        task = await self.access.load_task(request.task_id)

        attachment = next((f for f in task.files if f.id == request.file_id), None)
        if attachment is None:
            raise EntityNotFoundError("File", request.file_id)

        if attachment.uploaded_by != self.current_user_id:
            if not await self.access.can_edit(task, self.current_user):
                raise UnauthorizedError("Only the uploader or an editor can delete files")

        task.remove_file(attachment.id)

        await self._save(task)
        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.DELETED, "File",
            changes={"from": attachment.file_name, "to": None},
            metadata={"fileId": attachment.id},
        )
        return await self._respond(task)


class ArchiveTaskUseCase(TaskCommandUseCase[TaskIdRequestDTO, TaskResponseDTO]):
    """Archives a task and cascades to its direct subtasks."""

    async def _execute_command_logic(self, request: TaskIdRequestDTO) -> TaskResponseDTO:
        task = await self.access.load_task(request.task_id)
        await self.access.require_archive(task, self.current_user)

        cascade = CascadeArchiveOrchestrator(self.task_repository, self.log, self.reconciler)
        await cascade.archive(task, self.current_user)
        return await self._respond(task)


class UnarchiveTaskUseCase(TaskCommandUseCase[TaskIdRequestDTO, TaskResponseDTO]):
    """Restores a single task. Subtasks stay as they are."""

    async def _execute_command_logic(self, request: TaskIdRequestDTO) -> TaskResponseDTO:
        task = await self.access.load_task(request.task_id)
        await self.access.require_archive(task, self.current_user)

        if not task.unarchive():
            return await self._respond(task)

        await self._save(task)
        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.UNARCHIVED, "Task",
            changes={"from": True, "to": False},
        )
        await self.reconciler.on_assigned(task.project_id, task.assignee_ids)
        return await self._respond(task)


class DeleteTaskUseCase(TaskCommandUseCase[TaskIdRequestDTO, DeleteTaskResponseDTO]):
    """Hard delete, refused while subtasks exist."""

    async def _execute_command_logic(self, request: TaskIdRequestDTO) -> DeleteTaskResponseDTO:
        task = await self.access.load_task(request.task_id)
        if not self.access.authorization.can_delete_task(
            task,
            self.current_user,
            await self.access.scope_of(self.current_user),
            await self.access.assignee_departments(task),
        ):
            raise UnauthorizedError("Only managers can delete tasks")

        if await self.task_repository.has_subtasks(task.id):
            raise ValidationError(
                "Cannot delete task with subtasks. Archive it instead",
                "task_id",
                reason="has_subtasks",
            )

        await self.log.record(
            task.id, self.current_user_id, TaskLogAction.DELETED, "Task",
            changes={"from": task.title, "to": None},
        )
        deleted = await self.task_repository.delete(task.id)
        await self.reconciler.reconcile(task.project_id, task.assignee_ids)

        logger.info(f"Task {task.id} deleted by {self.current_user_id}")
        return DeleteTaskResponseDTO(task_id=task.id, deleted=deleted)


class GetTaskUseCase(AuthorizedUseCase, QueryUseCase[TaskIdRequestDTO, TaskResponseDTO]):
    """Returns a task with its subtasks and per-task edit flags."""

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        department_repository: DepartmentRepository,
    ):
        super().__init__()
        self.task_repository = task_repository
        self.access = TaskAccessService(task_repository, user_repository, department_repository)

    async def _execute_business_logic(self, request: TaskIdRequestDTO) -> TaskResponseDTO:
        task = await self.access.load_task(request.task_id)
        await self.access.require_view(task, self.current_user)

        subtasks = []
        for subtask in await self.task_repository.find_subtasks(task.id):
            subtasks.append(TaskResponseDTO.from_domain(
                subtask, can_edit=await self.access.can_edit(subtask, self.current_user)
            ))

        return TaskResponseDTO.from_domain(
            task,
            can_edit=await self.access.can_edit(task, self.current_user),
            subtasks=subtasks,
        )


class GetTaskLogsUseCase(AuthorizedUseCase, QueryUseCase[TaskIdRequestDTO, List[TaskLogResponseDTO]]):
    """Audit trail of a task, newest first."""

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        department_repository: DepartmentRepository,
        task_log_repository: TaskLogRepository,
    ):
        super().__init__()
        self.task_log_repository = task_log_repository
        self.access = TaskAccessService(task_repository, user_repository, department_repository)

    async def _execute_business_logic(self, request: TaskIdRequestDTO) -> List[TaskLogResponseDTO]:
        task = await self.access.load_task(request.task_id)
        await self.access.require_view(task, self.current_user)

        entries = await self.task_log_repository.find_by_task(task.id)
        return [TaskLogResponseDTO.from_domain(entry) for entry in entries]
