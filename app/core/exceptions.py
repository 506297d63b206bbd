# app/core/exceptions.py
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base for every error the API reports on purpose"""
    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"
    default_detail: str = "Unexpected error"

    def __init__(
        self,
        detail: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=self.status_code_default,
            detail=detail or self.default_detail,
            headers=headers,
        )
        self.details = details


class ValidationError(AppError):
    status_code_default = status.HTTP_400_BAD_REQUEST
    error_code = "validation_error"
    default_detail = "Invalid request"


class Unauthenticated(AppError):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    error_code = "unauthenticated"
    default_detail = "Missing or malformed credentials"

    def __init__(self, detail: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(detail, details, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    status_code_default = status.HTTP_403_FORBIDDEN
    error_code = "forbidden"
    default_detail = "Not enough permissions"


class NotFound(AppError):
    status_code_default = status.HTTP_404_NOT_FOUND
    error_code = "not_found"
    default_detail = "Resource not found"


class Conflict(AppError):
    status_code_default = status.HTTP_409_CONFLICT
    error_code = "conflict"
    default_detail = "Request conflicts with the current state"


class InternalError(AppError):
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "internal_error"
    default_detail = "Unexpected failure"


ERROR_CODES_BY_STATUS = {
    400: ValidationError.error_code,
    401: Unauthenticated.error_code,
    403: Forbidden.error_code,
    404: NotFound.error_code,
    409: Conflict.error_code,
    500: InternalError.error_code,
}


def error_code_for(status_code: int) -> str:
    return ERROR_CODES_BY_STATUS.get(status_code, "http_error")
