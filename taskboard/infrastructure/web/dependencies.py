"""
Request-scoped wiring: repositories, the event dispatcher and use case factories.
"""

from dataclasses import dataclass
from typing import Annotated, Type, TypeVar

from fastapi import Depends
from sqlalchemy.orm import Session

from taskboard.application.use_cases.task_use_cases import TaskCommandUseCase
from taskboard.domain.events.base import EventDispatcher
from taskboard.domain.models.user import UserContext
from taskboard.infrastructure.auth import get_current_user
from taskboard.infrastructure.db.database import get_db
from taskboard.infrastructure.events.event_setup import build_event_dispatcher
from taskboard.infrastructure.repositories import (
    SQLAlchemyTaskRepository,
    SQLAlchemyTaskLogRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyDepartmentRepository,
    SQLAlchemyProjectRepository,
)


UC = TypeVar("UC", bound=TaskCommandUseCase)


@dataclass
class Repositories:
    tasks: SQLAlchemyTaskRepository
    task_logs: SQLAlchemyTaskLogRepository
    users: SQLAlchemyUserRepository
    departments: SQLAlchemyDepartmentRepository
    projects: SQLAlchemyProjectRepository


def get_repositories(session: Session = Depends(get_db)) -> Repositories:
    """Dependency to get every repository bound to the request session."""
    return Repositories(
        tasks=SQLAlchemyTaskRepository(session),
        task_logs=SQLAlchemyTaskLogRepository(session),
        users=SQLAlchemyUserRepository(session),
        departments=SQLAlchemyDepartmentRepository(session),
        projects=SQLAlchemyProjectRepository(session),
    )


def get_event_dispatcher(
    repos: Annotated[Repositories, Depends(get_repositories)]
) -> EventDispatcher:
    return build_event_dispatcher(repos.tasks, repos.users, repos.task_logs, repos.projects)


@dataclass
class TaskContext:
    """Everything a task route needs to build its use case."""

    repos: Repositories
    dispatcher: EventDispatcher
    user: UserContext

    def command(self, use_case_class: Type[UC]) -> UC:
        use_case = use_case_class(
            self.repos.tasks,
            self.repos.users,
            self.repos.departments,
            self.repos.task_logs,
            self.repos.projects,
            event_dispatcher=self.dispatcher,
        )
        use_case.set_current_user(self.user)
        return use_case


def get_task_context(
    repos: Annotated[Repositories, Depends(get_repositories)],
    dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    user: Annotated[UserContext, Depends(get_current_user)],
) -> TaskContext:
    return TaskContext(repos=repos, dispatcher=dispatcher, user=user)


TaskCtx = Annotated[TaskContext, Depends(get_task_context)]
Repos = Annotated[Repositories, Depends(get_repositories)]
