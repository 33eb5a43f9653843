"""
Mappers for departments, users, projects and collaborators.
"""

from taskboard.domain.models.department import Department
from taskboard.domain.models.project import Project, ProjectCollaborator
from taskboard.domain.models.user import UserProfile, UserRole
from taskboard.infrastructure.db.models import (
    DepartmentModel, UserProfileModel, ProjectModel, ProjectCollaboratorModel
)


class DepartmentMapper:
    """Maps between Department and DepartmentModel."""

    def domain_to_model(self, department: Department) -> DepartmentModel:
        return DepartmentModel(
            id=department.id,
            name=department.name,
            parent_id=department.parent_id,
            manager_id=department.manager_id,
            is_active=department.is_active,
        )

    def model_to_domain(self, model: DepartmentModel) -> Department:
        department = Department(
            id=model.id,
            name=model.name,
            parent_id=model.parent_id,
            manager_id=model.manager_id,
            is_active=bool(model.is_active),
        )
        if model.created_at:
            department.created_at = model.created_at
        if model.updated_at:
            department.updated_at = model.updated_at
        return department


class UserMapper:
    """Maps between UserProfile and UserProfileModel."""

    def domain_to_model(self, user: UserProfile) -> UserProfileModel:
        return UserProfileModel(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            department_id=user.department_id,
            is_hr_admin=user.is_hr_admin,
            is_active=user.is_active,
        )

    def model_to_domain(self, model: UserProfileModel) -> UserProfile:
        return UserProfile(
            id=model.id,
            email=model.email,
            name=model.name,
            role=UserRole(model.role),
            department_id=model.department_id,
            is_hr_admin=bool(model.is_hr_admin),
            is_active=bool(model.is_active),
        )


class ProjectMapper:
    """Maps between Project and ProjectModel."""

    def domain_to_model(self, project: Project) -> ProjectModel:
        return ProjectModel(
            id=project.id,
            name=project.name,
            department_id=project.department_id,
            owner_id=project.owner_id,
            is_archived=project.is_archived,
        )

    def model_to_domain(self, model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            name=model.name,
            department_id=model.department_id,
            owner_id=model.owner_id,
            is_archived=bool(model.is_archived),
        )

    def collaborator_to_domain(self, model: ProjectCollaboratorModel) -> ProjectCollaborator:
        return ProjectCollaborator(
            project_id=model.project_id,
            user_id=model.user_id,
            department_id=model.department_id,
            added_at=model.added_at,
        )
