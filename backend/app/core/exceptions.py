"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers.
"""

import logging
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from typing import Any, Dict

logger = logging.getLogger("fleet.errors")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(AppException):
    """Raised for missing or malformed input."""

    def __init__(self, message: str = "Validation error", details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_VALIDATION",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class AuthMissingError(AppException):
    """Raised when no credential was supplied."""

    def __init__(self, message: str = "Authentication token missing"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_MISSING",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class AuthInvalidError(AppException):
    """Raised when the supplied credential is expired or forged."""

    def __init__(self, message: str = "Session expired or invalid token"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_INVALID",
            status_code=status.HTTP_403_FORBIDDEN
        )


class InvalidCredentialsError(AppException):
    """Raised on failed login. Same message whatever the cause."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            error_code="ERR_INVALID_CREDENTIALS",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class ForbiddenError(AppException):
    """Raised when a valid identity lacks the role or permission for an action."""

    def __init__(self, message: str = "Access denied: Insufficient permissions"):
        super().__init__(
            message=message,
            error_code="ERR_FORBIDDEN",
            status_code=status.HTTP_403_FORBIDDEN
        )


class ConflictError(AppException):
    """Raised when a unique field (email, plate, license) is already taken."""

    def __init__(self, message: str = "A record with this unique value already exists"):
        super().__init__(
            message=message,
            error_code="ERR_CONFLICT",
            status_code=status.HTTP_409_CONFLICT
        )


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


def _error_body(error_code: str, message: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    return {
        "success": False,
        "error_code": error_code,
        "message": message,
        "details": details or {}
    }


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.message, jsonable_encoder(exc.details)),
        headers=headers
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    # Map status code to error code
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        500: "ERR_INTERNAL_SERVER"
    }

    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(error_code, exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "ERR_VALIDATION",
            "Validation error",
            {"errors": jsonable_encoder(exc.errors())}
        )
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique and foreign key violations that slipped past the explicit checks."""
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, type(exc.orig).__name__)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body("ERR_CONFLICT", "A record with this unique value already exists")
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions. Never echoes the exception text."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("ERR_INTERNAL_SERVER", "An internal server error occurred")
    )
