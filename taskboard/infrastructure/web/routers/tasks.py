"""
Task router.
Every route builds one use case and unwraps its result.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Body, status

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
from taskboard.application.use_cases.task_use_cases import (
    CreateTaskUseCase,
    CreateSubtaskUseCase,
    GetTaskUseCase,
    GetTaskLogsUseCase,
    UpdateTitleUseCase,
    UpdateDescriptionUseCase,
    UpdatePriorityUseCase,
    UpdateDeadlineUseCase,
    UpdateStatusUseCase,
    UpdateRecurringUseCase,
    AddTagUseCase,
    RemoveTagUseCase,
    AddAssigneeUseCase,
    RemoveAssigneeUseCase,
    AddCommentUseCase,
    UpdateCommentUseCase,
    AddFileUseCase,
    RemoveFileUseCase,
    ArchiveTaskUseCase,
    UnarchiveTaskUseCase,
    DeleteTaskUseCase,
)
from taskboard.domain.models.task import TaskStatus
from taskboard.infrastructure.auth import CurrentUser
from taskboard.infrastructure.web.dependencies import Repos, TaskCtx
from taskboard.infrastructure.web.results import unwrap


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
async def create_task(request: CreateTaskRequestDTO, ctx: TaskCtx):
    """
    Create a root task.

    - **title**: 1 to 255 characters
    - **due_date**: Due date (required)
    - **assignee_ids**: One to five active users
    - **priority**: 1 (lowest) to 10 (highest), default 5
    - **recurring_interval**: Days between occurrences
    """
    return unwrap(await ctx.command(CreateTaskUseCase).execute(request))


@router.post("/{task_id}/subtasks", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
async def create_subtask(task_id: str, request: CreateTaskRequestDTO, ctx: TaskCtx):
    """
    Create a subtask. Department and project are inherited from the parent.
    The caller must be assigned to the parent task.
    """
    subtask_request = CreateSubtaskRequestDTO(parent_task_id=task_id, **request.model_dump())
    return unwrap(await ctx.command(CreateSubtaskUseCase).execute(subtask_request))


@router.get("/{task_id}", response_model=TaskResponseDTO)
async def get_task(task_id: str, user: CurrentUser, repos: Repos):
    use_case = GetTaskUseCase(repos.tasks, repos.users, repos.departments)
    use_case.set_current_user(user)
    return unwrap(await use_case.execute(TaskIdRequestDTO(task_id=task_id)))


@router.delete("/{task_id}", response_model=DeleteTaskResponseDTO)
async def delete_task(task_id: str, ctx: TaskCtx):
    """Delete a task without subtasks. Managers only."""
    return unwrap(await ctx.command(DeleteTaskUseCase).execute(TaskIdRequestDTO(task_id=task_id)))


@router.get("/{task_id}/logs", response_model=List[TaskLogResponseDTO])
async def get_task_logs(task_id: str, user: CurrentUser, repos: Repos):
    """Audit trail, newest first."""
    use_case = GetTaskLogsUseCase(repos.tasks, repos.users, repos.departments, repos.task_logs)
    use_case.set_current_user(user)
    return unwrap(await use_case.execute(TaskIdRequestDTO(task_id=task_id)))


# Field updates

@router.patch("/{task_id}/title", response_model=TaskResponseDTO)
async def update_title(task_id: str, ctx: TaskCtx, title: str = Body(..., embed=True)):
    request = UpdateTitleRequestDTO(task_id=task_id, title=title)
    return unwrap(await ctx.command(UpdateTitleUseCase).execute(request))


@router.patch("/{task_id}/description", response_model=TaskResponseDTO)
async def update_description(task_id: str, ctx: TaskCtx, description: Optional[str] = Body(None, embed=True)):
    request = UpdateDescriptionRequestDTO(task_id=task_id, description=description)
    return unwrap(await ctx.command(UpdateDescriptionUseCase).execute(request))


@router.patch("/{task_id}/priority", response_model=TaskResponseDTO)
async def update_priority(task_id: str, ctx: TaskCtx, priority: int = Body(..., embed=True)):
    request = UpdatePriorityRequestDTO(task_id=task_id, priority=priority)
    return unwrap(await ctx.command(UpdatePriorityUseCase).execute(request))


@router.patch("/{task_id}/deadline", response_model=TaskResponseDTO)
async def update_deadline(task_id: str, ctx: TaskCtx, due_date: date = Body(..., embed=True)):
    request = UpdateDeadlineRequestDTO(task_id=task_id, due_date=due_date)
    return unwrap(await ctx.command(UpdateDeadlineUseCase).execute(request))


@router.patch("/{task_id}/status", response_model=TaskResponseDTO)
async def update_status(task_id: str, ctx: TaskCtx, status: TaskStatus = Body(..., embed=True)):
    """Completing a recurring task schedules its next occurrence."""
    request = UpdateStatusRequestDTO(task_id=task_id, status=status)
    return unwrap(await ctx.command(UpdateStatusUseCase).execute(request))


@router.patch("/{task_id}/recurring", response_model=TaskResponseDTO)
async def update_recurring(
    task_id: str,
    ctx: TaskCtx,
    enabled: bool = Body(..., embed=True),
    interval_days: Optional[int] = Body(None, embed=True),
):
    request = UpdateRecurringRequestDTO(task_id=task_id, enabled=enabled, interval_days=interval_days)
    return unwrap(await ctx.command(UpdateRecurringUseCase).execute(request))


# Tags and assignees

@router.post("/{task_id}/tags", response_model=TaskResponseDTO)
async def add_tag(task_id: str, ctx: TaskCtx, tag: str = Body(..., embed=True)):
    return unwrap(await ctx.command(AddTagUseCase).execute(TagRequestDTO(task_id=task_id, tag=tag)))


@router.delete("/{task_id}/tags/{tag}", response_model=TaskResponseDTO)
async def remove_tag(task_id: str, tag: str, ctx: TaskCtx):
    return unwrap(await ctx.command(RemoveTagUseCase).execute(TagRequestDTO(task_id=task_id, tag=tag)))


@router.post("/{task_id}/assignees", response_model=TaskResponseDTO)
async def add_assignee(task_id: str, ctx: TaskCtx, user_id: str = Body(..., embed=True)):
    request = AssigneeRequestDTO(task_id=task_id, user_id=user_id)
    return unwrap(await ctx.command(AddAssigneeUseCase).execute(request))


@router.delete("/{task_id}/assignees/{user_id}", response_model=TaskResponseDTO)
async def remove_assignee(task_id: str, user_id: str, ctx: TaskCtx):
    """Managers only. The last assignee cannot be removed."""
    request = AssigneeRequestDTO(task_id=task_id, user_id=user_id)
    return unwrap(await ctx.command(RemoveAssigneeUseCase).execute(request))


# Comments and files

@router.post("/{task_id}/comments", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
async def add_comment(task_id: str, ctx: TaskCtx, content: str = Body(..., embed=True)):
    request = AddCommentRequestDTO(task_id=task_id, content=content)
    return unwrap(await ctx.command(AddCommentUseCase).execute(request))


@router.patch("/{task_id}/comments/{comment_id}", response_model=TaskResponseDTO)
async def update_comment(task_id: str, comment_id: str, ctx: TaskCtx, content: str = Body(..., embed=True)):
    """Only the comment's author may edit it."""
    request = UpdateCommentRequestDTO(task_id=task_id, comment_id=comment_id, content=content)
    return unwrap(await ctx.command(UpdateCommentUseCase).execute(request))


@router.post("/{task_id}/files", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
async def add_file(
    task_id: str,
    ctx: TaskCtx,
    file_name: str = Body(...),
    file_size: int = Body(...),
    mime_type: str = Body(...),
    storage_path: str = Body(...),
):
    """
    Register an uploaded file.

    - **mime_type**: pdf, png, jpeg, doc, docx, xls or xlsx
    - **file_size**: at most 10MB; 50MB per task in total
    """
    request = AddFileRequestDTO(
        task_id=task_id,
        file_name=file_name,
        file_size=file_size,
        mime_type=mime_type,
        storage_path=storage_path,
    )
    return unwrap(await ctx.command(AddFileUseCase).execute(request))


@router.delete("/{task_id}/files/{file_id}", response_model=TaskResponseDTO)
async def remove_file(task_id: str, file_id: str, ctx: TaskCtx):
    request = RemoveFileRequestDTO(task_id=task_id, file_id=file_id)
    return unwrap(await ctx.command(RemoveFileUseCase).execute(request))


# Archive

@router.post("/{task_id}/archive", response_model=TaskResponseDTO)
async def archive_task(task_id: str, ctx: TaskCtx):
    """Archive a task and its subtasks. Managers only."""
    return unwrap(await ctx.command(ArchiveTaskUseCase).execute(TaskIdRequestDTO(task_id=task_id)))


@router.post("/{task_id}/unarchive", response_model=TaskResponseDTO)
async def unarchive_task(task_id: str, ctx: TaskCtx):
    return unwrap(await ctx.command(UnarchiveTaskUseCase).execute(TaskIdRequestDTO(task_id=task_id)))
