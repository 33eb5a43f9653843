"""
Translates use case results into HTTP responses.
"""

from typing import Any, Dict

from fastapi import HTTPException, status

from taskboard.application.use_cases.base_use_case import UseCaseResult


STATUS_BY_CODE: Dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "UNAUTHORIZED": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DEPENDENCY_FAILURE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "UNKNOWN_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: UseCaseResult) -> Any:
    """Return the result data, or raise the HTTPException matching its error code."""
    if result.success:
        return result.data

    detail: Dict[str, Any] = {"error": result.error, "code": result.error_code}
    if result.reason:
        detail["reason"] = result.reason

    raise HTTPException(
        status_code=STATUS_BY_CODE.get(result.error_code, status.HTTP_400_BAD_REQUEST),
        detail=detail,
    )
