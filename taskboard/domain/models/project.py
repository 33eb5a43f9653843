"""
Project domain model and derived collaborator membership.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from taskboard.domain.models.base import BaseEntity


@dataclass(eq=False, kw_only=True)
class Project(BaseEntity):
    """A project grouping tasks across departments."""

    name: str
    department_id: Optional[str] = None
    owner_id: Optional[str] = None
    is_archived: bool = False


@dataclass(frozen=True)
class ProjectCollaborator:
    """
    A user holding at least one non-archived assignment in the project.
    Maintained incrementally by the collaborator reconciler.
    """

    project_id: str
    user_id: str
    department_id: str
    added_at: datetime = field(default_factory=datetime.utcnow)
