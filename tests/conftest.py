"""
Shared fixtures.
Application and infrastructure tests run against an in-memory SQLite database
seeded with a small organization:

    Company (dept-root)
    ├── Engineering (dept-eng)        manager: mgr-eng
    │   └── Backend (dept-backend)    staff: alice, bob
    └── Sales (dept-sales)            staff: carol, manager: mgr-sales

hr-viewer is STAFF in Engineering with the cross-department view flag.
"""

from datetime import datetime
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.domain.models.user import UserContext, UserRole
from taskboard.infrastructure.db.database import Base
from taskboard.infrastructure.db.models import (
    DepartmentModel,
    UserProfileModel,
    ProjectModel,
    create_all_tables,
)
from taskboard.infrastructure.repositories import (
    SQLAlchemyTaskRepository,
    SQLAlchemyTaskLogRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyDepartmentRepository,
    SQLAlchemyProjectRepository,
)


DEPARTMENTS = [
    ("dept-root", "Company", None),
    ("dept-eng", "Engineering", "dept-root"),
    ("dept-backend", "Backend", "dept-eng"),
    ("dept-sales", "Sales", "dept-root"),
]

USERS = [
    ("mgr-eng", "Erin Manager", UserRole.MANAGER, "dept-eng", False, True),
    ("mgr-sales", "Sam Manager", UserRole.MANAGER, "dept-sales", False, True),
    ("alice", "Alice", UserRole.STAFF, "dept-backend", False, True),
    ("bob", "Bob", UserRole.STAFF, "dept-backend", False, True),
    ("carol", "Carol", UserRole.STAFF, "dept-sales", False, True),
    ("hr-viewer", "Harper", UserRole.STAFF, "dept-eng", True, True),
    ("hr-admin", "Hana Admin", UserRole.HR_ADMIN, "dept-root", False, True),
    ("gone", "Former Staff", UserRole.STAFF, "dept-backend", False, False),
]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def org(session):
    """Seed departments, users and one project."""
    now = datetime(2025, 1, 1, 9, 0, 0)
    for dept_id, name, parent_id in DEPARTMENTS:
        session.add(DepartmentModel(id=dept_id, name=name, parent_id=parent_id, is_active=True))
    session.flush()

    for user_id, name, role, dept_id, is_hr_admin, is_active in USERS:
        session.add(UserProfileModel(
            id=user_id,
            name=name,
            email=f"{user_id}@example.com",
            role=role,
            department_id=dept_id,
            is_hr_admin=is_hr_admin,
            is_active=is_active,
        ))

    session.add(ProjectModel(
        id="proj-1", name="Platform", department_id="dept-eng", owner_id="mgr-eng", created_at=now
    ))
    session.commit()
    return session


@pytest.fixture
def repos(org):
    """Every repository bound to the seeded session."""
    return SimpleNamespace(
        tasks=SQLAlchemyTaskRepository(org),
        task_logs=SQLAlchemyTaskLogRepository(org),
        users=SQLAlchemyUserRepository(org),
        departments=SQLAlchemyDepartmentRepository(org),
        projects=SQLAlchemyProjectRepository(org),
    )


def make_user(user_id: str) -> UserContext:
    """Acting-user context for one of the seeded users."""
    for uid, _, role, dept_id, is_hr_admin, _ in USERS:
        if uid == user_id:
            return UserContext(user_id=uid, role=role, department_id=dept_id, is_hr_admin=is_hr_admin)
    raise KeyError(user_id)


@pytest.fixture
def as_user():
    return make_user
