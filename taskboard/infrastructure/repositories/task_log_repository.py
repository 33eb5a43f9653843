"""
Task log repository implementation using SQLAlchemy.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from taskboard.domain.models.task import TaskLog
from taskboard.domain.repositories.task_log_repository import TaskLogRepository
from taskboard.infrastructure.db.models import TaskLogModel
from taskboard.infrastructure.mappers.task_mapper import TaskLogMapper
from .base import translate_db_errors


class SQLAlchemyTaskLogRepository(TaskLogRepository):
    """Append-only store for task audit entries."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TaskLogMapper()

    @translate_db_errors
    async def append(self, entry: TaskLog) -> TaskLog:
        self.session.add(self.mapper.domain_to_model(entry))
        self.session.commit()
        return entry

    @translate_db_errors
    async def find_by_task(self, task_id: str, limit: Optional[int] = None) -> List[TaskLog]:
        query = self.session.query(TaskLogModel).filter(
            TaskLogModel.task_id == task_id
        ).order_by(TaskLogModel.timestamp.desc())

        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]
