"""
Domain exceptions for the Globetrotter backend.

Services raise these instead of HTTPException so the same rules hold no
matter which transport calls them. `setup_error_handlers` maps them to
HTTP responses.
"""
from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class GlobetrotterError(Exception):
    """Base exception for the Globetrotter backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ValidationError(GlobetrotterError):
    """Raised for missing or malformed input and violated field invariants."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=400
        )


class AuthenticationError(GlobetrotterError):
    """Raised when credentials or tokens are rejected."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(
            message=message,
            error_code=ErrorCode.AUTHENTICATION_FAILED,
            status_code=401
        )


class NotFoundError(GlobetrotterError):
    """
    Raised when an entity is absent or not visible to the caller.

    "Does not exist" and "belongs to someone else" produce the same error.
    """

    def __init__(self, entity: str, entity_id: Any = None):
        details = {"entity": entity}
        if entity_id is not None:
            details["id"] = entity_id
        super().__init__(
            message=f"{entity} not found",
            error_code=ErrorCode.NOT_FOUND,
            details=details,
            status_code=404
        )


class ConflictError(GlobetrotterError):
    """Raised when a unique identity is already taken."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFLICT,
            details=details,
            status_code=409
        )


class StorageError(GlobetrotterError):
    """
    Raised when the backing store is unreachable or a transaction fails.

    `transient` marks failures worth retrying (dropped or refused connections).
    """

    def __init__(
        self,
        message: str = "Storage unavailable",
        details: Optional[Dict[str, Any]] = None,
        transient: bool = False
    ):
        super().__init__(
            message=message,
            error_code=ErrorCode.STORAGE_UNAVAILABLE,
            details=details,
            status_code=503
        )
        self.transient = transient
