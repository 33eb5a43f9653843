"""
Writes task audit entries in a uniform shape.
"""

from enum import Enum
from typing import Any, Dict, Optional

from taskboard.domain.models.task import TaskLog, TaskLogAction, DEFAULT_LOG_METADATA
from taskboard.domain.repositories.task_log_repository import TaskLogRepository


class TaskLogWriter:
    """Thin helper over the log repository."""

    def __init__(self, log_repository: TaskLogRepository):
        self.log_repository = log_repository

    async def record(
        self,
        task_id: str,
        user_id: str,
        action: TaskLogAction,
        field_name: str,
        changes: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> TaskLog:
        entry_metadata = dict(DEFAULT_LOG_METADATA)
        if metadata:
            entry_metadata.update(metadata)

        entry = TaskLog.record(
            task_id=task_id,
            user_id=user_id,
            action=action,
            field_name=field_name,
            changes=changes,
            metadata=entry_metadata,
        )
        return await self.log_repository.append(entry)

    async def changed(self, task_id: str, user_id: str, field_name: str, old: Any, new: Any) -> TaskLog:
        """Log an UPDATED entry with from/to values."""
        return await self.record(
            task_id, user_id, TaskLogAction.UPDATED, field_name,
            changes={"from": _plain(old), "to": _plain(new)},
        )

    async def added(self, task_id: str, user_id: str, field_name: str, value: Any) -> TaskLog:
        return await self.record(
            task_id, user_id, TaskLogAction.UPDATED, field_name, changes={"added": _plain(value)}
        )

    async def removed(self, task_id: str, user_id: str, field_name: str, value: Any) -> TaskLog:
        return await self.record(
            task_id, user_id, TaskLogAction.UPDATED, field_name, changes={"removed": _plain(value)}
        )


def _plain(value: Any) -> Any:
    """Make a value JSON-friendly."""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value
