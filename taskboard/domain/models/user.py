"""
User domain model.
Holds the persisted user profile and the per-request acting-user context.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from taskboard.domain.models.base import BaseEntity


class UserRole(str, Enum):
    """Organizational role."""
    STAFF = "STAFF"
    MANAGER = "MANAGER"
    HR_ADMIN = "HR_ADMIN"  # legacy


class Capability(str, Enum):
    """What an acting user may do, derived once from role and flags."""
    EDIT_ASSIGNED = "edit_assigned"
    EDIT_HIERARCHY = "edit_hierarchy"
    EDIT_HIERARCHY_FILTERED = "edit_hierarchy_filtered"
    VIEW_ALL = "view_all"
    MANAGE_ASSIGNEES = "manage_assignees"
    ARCHIVE = "archive"


def capabilities_for(role: UserRole, is_hr_admin: bool = False) -> FrozenSet[Capability]:
    """Compute the capability set for a role and the cross-department view flag."""
    caps = {Capability.EDIT_ASSIGNED}

    if role == UserRole.MANAGER:
        caps.update({
            Capability.EDIT_HIERARCHY,
            Capability.MANAGE_ASSIGNEES,
            Capability.ARCHIVE,
        })
    elif role == UserRole.HR_ADMIN:
        caps.add(Capability.EDIT_HIERARCHY_FILTERED)
    elif role == UserRole.STAFF and is_hr_admin:
        # Widens visibility only
        caps.add(Capability.VIEW_ALL)

    return frozenset(caps)


@dataclass(frozen=True)
class UserContext:
    """The acting user for one command."""

    user_id: str
    role: UserRole
    department_id: str
    is_hr_admin: bool = False
    capabilities: FrozenSet[Capability] = field(init=False, compare=False)

    def __post_init__(self):
        role = UserRole(self.role)
        object.__setattr__(self, "role", role)
        object.__setattr__(self, "capabilities", capabilities_for(role, self.is_hr_admin))

    def can(self, capability: Capability) -> bool:
        """Check whether the user holds a capability."""
        return capability in self.capabilities

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER


@dataclass(eq=False, kw_only=True)
class UserProfile(BaseEntity):
    """Persisted user record."""

    name: str
    email: str
    role: UserRole = UserRole.STAFF
    department_id: str
    is_hr_admin: bool = False
    is_active: bool = True

    def to_context(self) -> UserContext:
        """Build an acting-user context from this profile."""
        return UserContext(
            user_id=self.id,
            role=self.role,
            department_id=self.department_id,
            is_hr_admin=self.is_hr_admin,
        )


def display_name(profile: Optional[UserProfile], fallback: str) -> str:
    """Name to show in logs and notifications."""
    if profile is None:
        return fallback
    return profile.name or profile.email or fallback
