"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic, List
from dataclasses import dataclass
from datetime import datetime

from taskboard.domain.events.base import DomainEvent, EventDispatcher
from taskboard.domain.models.base import (
    DomainException,
    ValidationError,
    UnauthorizedError,
    EntityNotFoundError,
    DependencyFailure,
)
from taskboard.domain.models.user import UserContext, Capability


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    reason: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        reason: Optional[str] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            reason=reason,
            metadata=metadata
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """Create error result from exception."""
        if isinstance(exc, ValidationError):
            return cls.error_result(exc.message, "VALIDATION_ERROR", reason=exc.reason)
        elif isinstance(exc, UnauthorizedError):
            return cls.error_result(exc.message, "UNAUTHORIZED")
        elif isinstance(exc, EntityNotFoundError):
            return cls.error_result(exc.message, "NOT_FOUND")
        elif isinstance(exc, DependencyFailure):
            return cls.error_result(exc.message, "DEPENDENCY_FAILURE")
        elif isinstance(exc, DomainException):
            return cls.error_result(exc.message, exc.code)
        else:
            return cls.error_result(str(exc), "UNKNOWN_ERROR")


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Provides common structure and error handling.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, request: T) -> UseCaseResult[R]:
        """
        Execute the use case with proper error handling and logging.
        """
        self.execution_start = datetime.utcnow()

        try:
            await self._validate_request(request)

            result = await self._execute_business_logic(request)

            self.execution_end = datetime.utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            return UseCaseResult.success_result(
                result,
                metadata={
                    "execution_time_seconds": execution_time,
                    "executed_at": self.execution_end.isoformat()
                }
            )

        except Exception as exc:
            self.execution_end = datetime.utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            if isinstance(exc, DomainException):
                logger.info(f"{self.__class__.__name__} rejected: {exc.code}: {exc.message}")
            else:
                logger.exception(f"{self.__class__.__name__} failed unexpectedly")

            error_result = UseCaseResult.from_exception(exc)
            error_result.metadata = {
                "execution_time_seconds": execution_time,
                "failed_at": self.execution_end.isoformat(),
                "exception_type": type(exc).__name__
            }

            return error_result

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if hasattr(request, 'model_validate'):
            # Pydantic models
            request.model_validate(request.model_dump())

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    Domain events collected during the command are published once it succeeds.
    """

    def __init__(self):
        super().__init__()
        self.events: List[DomainEvent] = []
        self.event_dispatcher: Optional[EventDispatcher] = None

    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute command, then publish its events.
        """
        self.events.clear()
        result = await self._execute_command_logic(request)

        await self._publish_events()

        return result

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass

    def _collect_events(self, *entities) -> None:
        """Move pending events from entities into this command."""
        for entity in entities:
            self.events.extend(entity.pull_events())

    async def _publish_events(self) -> None:
        """Publish collected domain events. Handler failures never reach the caller."""
        events = list(self.events)
        self.events.clear()

        if not events:
            return

        if self.event_dispatcher is None:
            logger.debug(f"No dispatcher configured; dropping {len(events)} event(s)")
            return

        await self.event_dispatcher.dispatch_all(events)


class AuthorizedUseCase(BaseUseCase[T, R]):
    """
    Mixin for use cases that require an authenticated user.
    """

    def __init__(self):
        super().__init__()
        self.current_user: Optional[UserContext] = None

    def set_current_user(self, user: UserContext) -> "AuthorizedUseCase":
        """Set the current user context."""
        self.current_user = user
        return self

    @property
    def current_user_id(self) -> Optional[str]:
        return self.current_user.user_id if self.current_user else None

    async def _validate_request(self, request: T) -> None:
        """Validate request with authorization check."""
        await super()._validate_request(request)

        if not self.current_user:
            raise UnauthorizedError("User authentication required")

        await self._check_authorization(request)

    async def _check_authorization(self, request: T) -> None:
        """Check if the current user is authorized. Override in subclasses."""
        pass

    def _require_capability(self, capability: Capability, message: str) -> None:
        """Check if user holds a capability."""
        if not self.current_user.can(capability):
            raise UnauthorizedError(message)
