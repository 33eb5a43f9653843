"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Date, ForeignKey, JSON, Enum as SQLEnum,
    Index, UniqueConstraint, CheckConstraint, Table
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from taskboard.domain.models.task import MAX_TAG_LENGTH, TaskStatus, TaskLogAction
from taskboard.domain.models.user import UserRole

from .database import Base


# Association tables for many-to-many relationships
task_tags = Table(
    'task_tags',
    Base.metadata,
    Column('task_id', String(36), ForeignKey('tasks.id', ondelete='CASCADE'), primary_key=True),
    Column('tag_id', Integer, ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
)


class DepartmentModel(Base):
    """Department table"""
    __tablename__ = 'departments'

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    parent_id = Column(String(36), ForeignKey('departments.id'))
    manager_id = Column(String(36))
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    parent = relationship("DepartmentModel", remote_side=[id], backref="children")
    members = relationship("UserProfileModel", back_populates="department")

    __table_args__ = (
        Index('idx_departments_parent', 'parent_id'),
    )


class UserProfileModel(Base):
    """User profile table"""
    __tablename__ = 'user_profiles'

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.STAFF)
    department_id = Column(String(36), ForeignKey('departments.id'), nullable=False)
    is_hr_admin = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    department = relationship("DepartmentModel", back_populates="members")


class ProjectModel(Base):
    """Project table"""
    __tablename__ = 'projects'

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    department_id = Column(String(36), ForeignKey('departments.id'))
    owner_id = Column(String(36), ForeignKey('user_profiles.id'))
    is_archived = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    tasks = relationship("TaskModel", back_populates="project")
    collaborators = relationship(
        "ProjectCollaboratorModel", back_populates="project", cascade="all, delete-orphan"
    )


class ProjectCollaboratorModel(Base):
    """Derived project membership"""
    __tablename__ = 'project_collaborators'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String(36), ForeignKey('projects.id'), nullable=False)
    user_id = Column(String(36), ForeignKey('user_profiles.id'), nullable=False)
    department_id = Column(String(36), ForeignKey('departments.id'), nullable=False)
    added_at = Column(DateTime, nullable=False, server_default=func.now())

    project = relationship("ProjectModel", back_populates="collaborators")

    __table_args__ = (
        UniqueConstraint('project_id', 'user_id', name='unique_project_collaborator'),
    )


class TaskModel(Base):
    """Task table"""
    __tablename__ = 'tasks'

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    priority = Column(Integer, nullable=False, default=5)
    due_date = Column(Date, nullable=False)
    status = Column(SQLEnum(TaskStatus), nullable=False, default=TaskStatus.TO_DO)

    owner_id = Column(String(36), ForeignKey('user_profiles.id'), nullable=False)
    department_id = Column(String(36), ForeignKey('departments.id'), nullable=False)
    project_id = Column(String(36), ForeignKey('projects.id'))
    parent_task_id = Column(String(36), ForeignKey('tasks.id'))

    recurring_interval = Column(Integer)
    is_archived = Column(Boolean, nullable=False, default=False)
    start_date = Column(DateTime)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    project = relationship("ProjectModel", back_populates="tasks")
    parent_task = relationship("TaskModel", remote_side=[id], backref="subtasks")
    assignments = relationship(
        "TaskAssignmentModel", back_populates="task", cascade="all, delete-orphan"
    )
    tags = relationship("TagModel", secondary=task_tags, back_populates="tasks")
    comments = relationship(
        "TaskCommentModel", back_populates="task",
        cascade="all, delete-orphan", order_by="TaskCommentModel.created_at"
    )
    files = relationship(
        "TaskFileModel", back_populates="task",
        cascade="all, delete-orphan", order_by="TaskFileModel.uploaded_at"
    )

    __table_args__ = (
        CheckConstraint('priority BETWEEN 1 AND 10', name='check_task_priority'),
        Index('idx_tasks_department', 'department_id'),
        Index('idx_tasks_parent', 'parent_task_id'),
        Index('idx_tasks_project_archived', 'project_id', 'is_archived'),
    )


class TaskAssignmentModel(Base):
    """Task assignee join table"""
    __tablename__ = 'task_assignments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(String(36), ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(String(36), ForeignKey('user_profiles.id'), nullable=False)
    assigned_by_id = Column(String(36), ForeignKey('user_profiles.id'))
    assigned_at = Column(DateTime, nullable=False, server_default=func.now())

    task = relationship("TaskModel", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint('task_id', 'user_id', name='unique_task_assignment'),
        Index('idx_task_assignments_user', 'user_id'),
    )


class TagModel(Base):
    """Deduplicated tag dictionary"""
    __tablename__ = 'tags'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(MAX_TAG_LENGTH), nullable=False, unique=True)

    tasks = relationship("TaskModel", secondary=task_tags, back_populates="tags")


class TaskCommentModel(Base):
    """Task comment table"""
    __tablename__ = 'task_comments'

    id = Column(String(36), primary_key=True)
    task_id = Column(String(36), ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    author_id = Column(String(36), ForeignKey('user_profiles.id'), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    task = relationship("TaskModel", back_populates="comments")


class TaskFileModel(Base):
    """Task file reference table"""
    __tablename__ = 'task_files'

    id = Column(String(36), primary_key=True)
    task_id = Column(String(36), ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(255), nullable=False)
    storage_path = Column(String(500), nullable=False)
    uploaded_by = Column(String(36), ForeignKey('user_profiles.id'), nullable=False)
    uploaded_at = Column(DateTime, nullable=False)

    task = relationship("TaskModel", back_populates="files")


class TaskLogModel(Base):
    """Append-only task audit log"""
    __tablename__ = 'task_logs'

    id = Column(String(36), primary_key=True)
    task_id = Column(String(36), nullable=False)
    user_id = Column(String(36), nullable=False)
    action = Column(SQLEnum(TaskLogAction), nullable=False)
    field = Column(String(100), nullable=False)
    changes = Column(JSON, nullable=False, default=dict)
    log_metadata = Column('metadata', JSON, nullable=False, default=dict)
    timestamp = Column(DateTime, nullable=False)

    __table_args__ = (
        Index('idx_task_logs_task_time', 'task_id', 'timestamp'),
    )


def create_all_tables(engine):
    """Create all tables in the database"""
    Base.metadata.create_all(bind=engine)
