"""
Core infrastructure modules for sample-app.

Provides common utilities used across the application:
- exceptions: Domain exception hierarchy mapped to HTTP statuses
- logging_setup: structlog + stdlib logging configuration
"""

from sample_app.core.exceptions import (
    SampleAppError,
    ClientInputError,
    NotFoundError,
    InvalidUserDataError,
    UserNotFoundError,
    SimulatedError,
    SIMULATED_ERROR_MESSAGES,
)
from sample_app.core.logging_setup import configure_logging

__all__ = [
    # Exceptions
    "SampleAppError",
    "ClientInputError",
    "NotFoundError",
    "InvalidUserDataError",
    "UserNotFoundError",
    "SimulatedError",
    "SIMULATED_ERROR_MESSAGES",
    # Logging
    "configure_logging",
]
