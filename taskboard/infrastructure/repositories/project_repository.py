"""
Project repository implementation using SQLAlchemy.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.domain.models.project import Project, ProjectCollaborator
from taskboard.domain.repositories.project_repository import ProjectRepository
from taskboard.infrastructure.db.models import ProjectModel, ProjectCollaboratorModel
from taskboard.infrastructure.mappers.organization_mapper import ProjectMapper
from .base import translate_db_errors


logger = logging.getLogger(__name__)


class SQLAlchemyProjectRepository(ProjectRepository):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()

    @translate_db_errors
    async def save(self, project: Project) -> Project:
        model = self.session.get(ProjectModel, project.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(project))
        else:
            model.name = project.name
            model.department_id = project.department_id
            model.owner_id = project.owner_id
            model.is_archived = project.is_archived

        self.session.commit()
        return project

    @translate_db_errors
    async def find_by_id(self, project_id: str) -> Optional[Project]:
        model = self.session.get(ProjectModel, project_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    @translate_db_errors
    async def exists(self, project_id: str) -> bool:
        return self.session.get(ProjectModel, project_id) is not None

    @translate_db_errors
    async def add_collaborator(self, collaborator: ProjectCollaborator) -> bool:
        """Insert the membership; an existing row (or a concurrent insert) is left alone."""
        existing = self.session.query(ProjectCollaboratorModel).filter_by(
            project_id=collaborator.project_id,
            user_id=collaborator.user_id,
        ).first()
        if existing:
            return False

        self.session.add(ProjectCollaboratorModel(
            project_id=collaborator.project_id,
            user_id=collaborator.user_id,
            department_id=collaborator.department_id,
            added_at=collaborator.added_at,
        ))
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.debug(
                f"Collaborator {collaborator.user_id} already present on project {collaborator.project_id}"
            )
            return False
        return True

    @translate_db_errors
    async def remove_collaborator(self, project_id: str, user_id: str) -> bool:
        removed = self.session.query(ProjectCollaboratorModel).filter_by(
            project_id=project_id,
            user_id=user_id,
        ).delete(synchronize_session=False)
        self.session.commit()
        return bool(removed)

    @translate_db_errors
    async def find_collaborators(self, project_id: str) -> List[ProjectCollaborator]:
        models = self.session.query(ProjectCollaboratorModel).filter_by(
            project_id=project_id
        ).order_by(ProjectCollaboratorModel.added_at).all()
        return [self.mapper.collaborator_to_domain(model) for model in models]
