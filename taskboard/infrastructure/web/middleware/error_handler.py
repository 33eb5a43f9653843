"""
Global error handler middleware for the FastAPI application.
Catches anything the routers did not turn into a response.
"""

import logging
import traceback
from typing import Any, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status

from taskboard.config import settings
from taskboard.domain.models.base import (
    DomainException,
    ValidationError,
    UnauthorizedError,
    EntityNotFoundError,
    DependencyFailure,
)

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response = self.format_error_response(exc)

        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=error_response.get("status_code", 500),
            content=error_response
        )

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        """
        Format exception into a consistent error response structure.
        """
        error_response: Dict[str, Any] = {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
        }

        if isinstance(exc, ValidationError):
            error_response.update({
                "error": "Validation Error",
                "message": exc.message,
                "code": exc.code,
                "reason": exc.reason,
                "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY
            })
        elif isinstance(exc, UnauthorizedError):
            error_response.update({
                "error": "Forbidden",
                "message": exc.message,
                "code": exc.code,
                "status_code": status.HTTP_403_FORBIDDEN
            })
        elif isinstance(exc, EntityNotFoundError):
            error_response.update({
                "error": "Not Found",
                "message": exc.message,
                "code": exc.code,
                "status_code": status.HTTP_404_NOT_FOUND
            })
        elif isinstance(exc, DependencyFailure):
            error_response.update({
                "error": "Service Unavailable",
                "message": exc.message,
                "code": exc.code,
                "status_code": status.HTTP_503_SERVICE_UNAVAILABLE
            })
        elif isinstance(exc, DomainException):
            error_response.update({
                "error": "Bad Request",
                "message": exc.message,
                "code": exc.code,
                "status_code": status.HTTP_400_BAD_REQUEST
            })

        return error_response
