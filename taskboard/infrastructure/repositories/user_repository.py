"""
User repository implementation using SQLAlchemy.
"""

from typing import Dict, Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.domain.models.user import UserProfile
from taskboard.domain.repositories.user_repository import UserRepository
from taskboard.infrastructure.db.models import UserProfileModel
from taskboard.infrastructure.mappers.organization_mapper import UserMapper
from .base import translate_db_errors


class SQLAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()

    @translate_db_errors
    async def save(self, user: UserProfile) -> UserProfile:
        model = self.session.get(UserProfileModel, user.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(user))
        else:
            model.email = user.email
            model.name = user.name
            model.role = user.role
            model.department_id = user.department_id
            model.is_hr_admin = user.is_hr_admin
            model.is_active = user.is_active

        self.session.commit()
        return user

    @translate_db_errors
    async def find_by_id(self, user_id: str) -> Optional[UserProfile]:
        model = self.session.get(UserProfileModel, user_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    @translate_db_errors
    async def validate_assignees(self, user_ids: Iterable[str]) -> bool:
        ids = set(user_ids)
        if not ids:
            return True

        active = self.session.query(func.count(UserProfileModel.id)).filter(
            UserProfileModel.id.in_(list(ids)),
            UserProfileModel.is_active.is_(True),
        ).scalar()
        return active == len(ids)

    @translate_db_errors
    async def department_ids_for(self, user_ids: Iterable[str]) -> Dict[str, str]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        rows = self.session.query(UserProfileModel.id, UserProfileModel.department_id).filter(
            UserProfileModel.id.in_(ids)
        ).all()
        return {user_id: department_id for user_id, department_id in rows}
