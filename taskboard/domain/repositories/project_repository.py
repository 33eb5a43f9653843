"""
Project repository interface.
Also owns the derived project-collaborator membership.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from taskboard.domain.models.project import Project, ProjectCollaborator


class ProjectRepository(ABC):
    """Repository interface for projects and their collaborators."""

    @abstractmethod
    async def save(self, project: Project) -> Project:
        """
        Insert or update a project.
        """
        pass

    @abstractmethod
    async def find_by_id(self, project_id: str) -> Optional[Project]:
        """
        Find a project by ID.
        """
        pass

    @abstractmethod
    async def exists(self, project_id: str) -> bool:
        """
        Check if a project exists.
        """
        pass

    @abstractmethod
    async def add_collaborator(self, collaborator: ProjectCollaborator) -> bool:
        """
        Insert a collaborator, doing nothing if the pair already exists.
        Returns True if a row was inserted.
        """
        pass

    @abstractmethod
    async def remove_collaborator(self, project_id: str, user_id: str) -> bool:
        """
        Remove a collaborator. A missing row is not an error.
        Returns True if a row was removed.
        """
        pass

    @abstractmethod
    async def find_collaborators(self, project_id: str) -> List[ProjectCollaborator]:
        """
        Current collaborators of a project.
        """
        pass
