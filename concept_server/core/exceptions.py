"""
Common exceptions for the document store and the application concepts.

Version: 1.0
"""

from fastapi import HTTPException, status
from typing import Dict, Optional, Any


class BaseAPIException(Exception):
    """Base exception class for API errors."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(Exception):
    """Raised when the application is wired up incorrectly at startup."""


# Backing store exceptions
class BackingStoreError(BaseAPIException):
    """Raised when the underlying MongoDB call fails."""
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        super().__init__(message=message, status_code=status_code, details=details)


class DuplicateKeyError(BackingStoreError):
    """Raised when an insert or update violates a unique index."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            details=details,
            status_code=status.HTTP_409_CONFLICT
        )


class BulkInsertError(BackingStoreError):
    """
    Raised when a bulk insert only partially succeeds.

    ``inserted_ids`` maps input index to the ``_id`` of each document the
    store accepted before (or around) the failures.
    """
    def __init__(
        self,
        message: str,
        inserted_ids: Dict[int, Any],
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details)
        self.inserted_ids = inserted_ids


# Concept exceptions
class BadValuesError(BaseAPIException):
    """Raised when a request carries invalid values."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class UnauthenticatedError(BaseAPIException):
    """Raised when an action requires a logged-in session."""
    def __init__(self, message: str = "Must be logged in!", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details
        )


class NotAllowedError(BaseAPIException):
    """Raised when an action is not permitted in the current state."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details
        )


class NotFoundError(BaseAPIException):
    """Raised when a requested document does not exist."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details
        )


def handle_api_exception(exc: Exception) -> Dict[str, Any]:
    """
    Global exception handler for API endpoints.

    Args:
        exc: The exception to handle

    Returns:
        Dict containing error details
    """
    if isinstance(exc, HTTPException):
        return {
            "status_code": exc.status_code,
            "detail": exc.detail,
            "headers": exc.headers
        }
    elif isinstance(exc, BaseAPIException):
        return {
            "status_code": exc.status_code,
            "detail": exc.message,
            "error_details": exc.details
        }
    else:
        return {
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "detail": "Internal server error",
            "error_details": {"message": str(exc)}
        }


__all__ = [
    'BaseAPIException',
    'ConfigurationError',
    'BackingStoreError',
    'DuplicateKeyError',
    'BulkInsertError',
    'BadValuesError',
    'UnauthenticatedError',
    'NotAllowedError',
    'NotFoundError',
    'handle_api_exception',
]
