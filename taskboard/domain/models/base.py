"""
Base entity and value objects for the domain layer.
This module contains the foundational classes for all domain entities
and the exception taxonomy shared by every layer.
"""

from datetime import datetime
from typing import Optional, Any, List
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import uuid


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid.uuid4())


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events
    _events: List[Any] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = datetime.utcnow()
        if self.updated_at is None:
            self.updated_at = datetime.utcnow()

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()

    def add_event(self, event: Any) -> None:
        """Add a domain event."""
        self._events.append(event)

    def pull_events(self) -> List[Any]:
        """Get and clear all domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


@dataclass(eq=False)
class AggregateRoot(BaseEntity):
    """
    Base class for aggregate roots.
    Aggregate roots are the entry points to aggregates and handle domain events.
    """


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """
    Raised when an invariant would be violated.
    `reason` is a stable, machine-readable token; `message` is for humans.
    """

    def __init__(self, message: str, field: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field
        self.reason = reason


class UnauthorizedError(DomainException):
    """Raised when an authorization decision denies the action."""

    def __init__(self, message: str = "You are not permitted to perform this action"):
        super().__init__(message, "UNAUTHORIZED")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


NotFoundError = EntityNotFoundError


class DependencyFailure(DomainException):
    """Raised when a repository or downstream collaborator fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, "DEPENDENCY_FAILURE")
        self.cause = cause


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass
