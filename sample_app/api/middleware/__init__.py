"""Middleware package for sample-app API.

Provides custom middleware components for the FastAPI application.
"""

from sample_app.api.middleware.request_logging import (
    REQUEST_ID_HEADER,
    RequestLoggingMiddleware,
)

__all__ = ["REQUEST_ID_HEADER", "RequestLoggingMiddleware"]
