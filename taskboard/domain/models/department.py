"""
Department domain model.
Departments form a forest through parent pointers.
"""

from dataclasses import dataclass
from typing import Optional

from taskboard.domain.models.base import BaseEntity, ValidationError, new_id


@dataclass(eq=False, kw_only=True)
class Department(BaseEntity):
    """A node in the organizational tree."""

    name: str
    parent_id: Optional[str] = None
    manager_id: Optional[str] = None
    is_active: bool = True

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Department name is required", "name", reason="invalid_name")
        if len(self.name) > 255:
            raise ValidationError(
                "Department name must be at most 255 characters", "name", reason="invalid_name"
            )
        if self.id is not None and self.parent_id == self.id:
            raise ValidationError(
                "A department cannot be its own parent", "parent_id", reason="department_cycle"
            )

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def rename(self, name: str) -> None:
        self.name = name.strip() if name else name
        self.validate()
        self.mark_as_updated()

    def move_under(self, parent_id: Optional[str]) -> None:
        """Re-parent the department. Cycle checks need the hierarchy and live upstream."""
        self.parent_id = parent_id
        self.validate()
        self.mark_as_updated()

    def assign_manager(self, manager_id: Optional[str]) -> None:
        self.manager_id = manager_id
        self.mark_as_updated()

    def deactivate(self) -> None:
        self.is_active = False
        self.mark_as_updated()

    @classmethod
    def create(
        cls,
        name: str,
        parent_id: Optional[str] = None,
        manager_id: Optional[str] = None,
    ) -> "Department":
        """Factory method to create a new department."""
        return cls(
            id=new_id(),
            name=name.strip() if name else name,
            parent_id=parent_id,
            manager_id=manager_id,
        )
