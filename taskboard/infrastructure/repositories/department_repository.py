"""
Department repository implementation using SQLAlchemy.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from taskboard.domain.models.department import Department
from taskboard.domain.repositories.department_repository import DepartmentRepository
from taskboard.infrastructure.db.models import DepartmentModel
from taskboard.infrastructure.mappers.organization_mapper import DepartmentMapper
from .base import translate_db_errors


class SQLAlchemyDepartmentRepository(DepartmentRepository):
    """SQLAlchemy implementation of department repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = DepartmentMapper()

    @translate_db_errors
    async def save(self, department: Department) -> Department:
        model = self.session.get(DepartmentModel, department.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(department))
        else:
            model.name = department.name
            model.parent_id = department.parent_id
            model.manager_id = department.manager_id
            model.is_active = department.is_active

        self.session.commit()
        return department

    @translate_db_errors
    async def find_by_id(self, department_id: str) -> Optional[Department]:
        model = self.session.get(DepartmentModel, department_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    @translate_db_errors
    async def find_all(self) -> List[Department]:
        models = self.session.query(DepartmentModel).order_by(DepartmentModel.name).all()
        return [self.mapper.model_to_domain(model) for model in models]
