"""
Core exception hierarchy for sample-app.

Every domain error carries the HTTP status it maps to, so route handlers raise
and the application's exception handlers translate them into JSON responses.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class SampleAppError(Exception):
    """Base exception for all sample-app errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ClientInputError(SampleAppError):
    """Errors caused by the caller. Retrying the same request won't help."""

    status_code = 400


class NotFoundError(SampleAppError):
    """Raised when a requested resource does not exist."""

    status_code = 404


# =============================================================================
# User Errors
# =============================================================================


class InvalidUserDataError(ClientInputError):
    """Raised when a user payload is missing required fields."""

    def __init__(self, data: Optional[dict[str, Any]] = None):
        super().__init__("Name and email are required", {"data": data or {}})


class UserNotFoundError(NotFoundError):
    """Raised when no user has the requested id."""

    def __init__(self, user_id: Any):
        self.user_id = user_id
        super().__init__("User not found", {"user_id": user_id})


# =============================================================================
# Simulated Failures
# =============================================================================

SIMULATED_ERROR_MESSAGES: dict[str, str] = {
    "generic": "This is a simulated error",
    "database": "Database connection failed",
    "validation": "Validation error: Invalid input",
    "timeout": "Request timeout after 5000ms",
}


class SimulatedError(SampleAppError):
    """
    Deliberately raised failure used to exercise the error logging path.

    Unknown error types fall back to the generic message but keep the
    requested type for logging.
    """

    def __init__(self, error_type: str = "generic"):
        self.error_type = error_type
        message = SIMULATED_ERROR_MESSAGES.get(
            error_type, SIMULATED_ERROR_MESSAGES["generic"]
        )
        super().__init__(message)

    def __str__(self) -> str:
        return self.message
