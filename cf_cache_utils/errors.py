"""
cf-cache-utils - Core Error Types

Defines the exception hierarchy for the cache-control and purge runtime.
All exceptions inherit from CacheUtilsError for consistent error handling.

Purge failures are normally reported as PurgeResult values rather than
raised; PurgeError exists for callers that explicitly ask for an exception.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes for action responses.

    Used for structured replies to interactive callers (clear-cache action).
    """

    # Input validation errors
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_PARAMETER = "MISSING_PARAMETER"

    # Access errors
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Purge errors
    NOT_CONFIGURED = "NOT_CONFIGURED"
    PURGE_FAILED = "PURGE_FAILED"
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CacheUtilsError(Exception):
    """Base exception for all cf-cache-utils errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(CacheUtilsError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class SettingsError(CacheUtilsError):
    """Raised when the persisted settings store cannot be read or written."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class ValidationError(CacheUtilsError):
    """Raised when input validation fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=400)


class UnauthorizedError(CacheUtilsError):
    """Raised when a one-time action token is missing, reused or expired."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401)


class ForbiddenError(CacheUtilsError):
    """Raised when the caller lacks the required capability."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, status_code=403)


class PurgeError(CacheUtilsError):
    """Raised on request when a purge did not succeed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=502)


def make_error_response(
    error_code: ErrorCode,
    message: str,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Create a standardized error response for actions.

    Args:
        error_code: Standard error code
        message: Human-readable error message
        context: Additional context/details

    Returns:
        Standardized error response dictionary

    Example:
        >>> make_error_response(
        ...     ErrorCode.NOT_CONFIGURED,
        ...     "Cloudflare zone is not configured.",
        ... )
        {
            "success": False,
            "error_code": "NOT_CONFIGURED",
            "message": "Cloudflare zone is not configured.",
            "details": {}
        }
    """
    return {
        "success": False,
        "error_code": error_code.value,
        "message": message,
        "details": context or {},
    }


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, UnauthorizedError):
        return ErrorCode.UNAUTHORIZED

    if isinstance(error, ForbiddenError):
        return ErrorCode.FORBIDDEN

    if isinstance(error, ValidationError):
        return ErrorCode.INVALID_INPUT

    if isinstance(error, PurgeError):
        return ErrorCode.PURGE_FAILED

    return ErrorCode.INTERNAL_ERROR
