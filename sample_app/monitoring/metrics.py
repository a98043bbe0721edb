"""
Prometheus metrics for sample-app observability.

Provides standardized metrics for request traffic, errors and the state of the
in-memory user store. The default prometheus_client process collector adds
memory and CPU metrics for the running process.

Usage:
    from sample_app.monitoring.metrics import track_api_request

    with track_api_request("GET", "/api/users") as ctx:
        response = await call_next(request)
        ctx["status_code"] = response.status_code
"""

import time
from contextlib import contextmanager
from typing import Generator, Optional

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from starlette.requests import Request
from starlette.responses import Response


# =============================================================================
# Metric Definitions
# =============================================================================

# API request metrics
API_REQUEST_DURATION = Histogram(
    "sample_app_http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    ["method", "endpoint", "status_code"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

API_REQUEST_TOTAL = Counter(
    "sample_app_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

# Error metrics
ERROR_COUNT = Counter(
    "sample_app_errors_total",
    "Total errors logged by the application",
    ["error_type", "endpoint"],
)

# User store metrics
USER_OPERATIONS = Counter(
    "sample_app_user_operations_total",
    "Total user store mutations",
    ["operation"],
)

USERS_STORED = Gauge(
    "sample_app_users_stored",
    "Number of users currently held in memory",
)

# Process uptime
APP_UPTIME = Gauge(
    "sample_app_uptime_seconds",
    "Application uptime in seconds",
)


# =============================================================================
# Uptime Tracking
# =============================================================================

_server_start_time: float = time.time()


def set_server_start_time() -> None:
    """Set the server start time. Called on application startup."""
    global _server_start_time
    _server_start_time = time.time()


def get_uptime_seconds() -> float:
    """Get server uptime in seconds."""
    return time.time() - _server_start_time


APP_UPTIME.set_function(get_uptime_seconds)


# =============================================================================
# Tracking Context Managers
# =============================================================================


@contextmanager
def track_api_request(
    method: str,
    endpoint: str,
) -> Generator[dict, None, None]:
    """
    Context manager to track API request duration and status.

    Usage:
        with track_api_request("GET", "/api/health") as ctx:
            response = await call_endpoint()
            ctx["status_code"] = response.status_code

    The endpoint label can be replaced inside the block by setting
    ctx["endpoint"], for callers that only learn the matched route afterwards.
    """
    start_time = time.perf_counter()
    context = {"status_code": "500"}  # Default to error
    try:
        yield context
    finally:
        duration = time.perf_counter() - start_time
        status_code = str(context.get("status_code", "500"))
        endpoint = context.get("endpoint", endpoint)
        API_REQUEST_DURATION.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).observe(duration)
        API_REQUEST_TOTAL.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).inc()


def record_error(error_type: str, endpoint: str) -> None:
    """Count an error occurrence."""
    ERROR_COUNT.labels(error_type=error_type, endpoint=endpoint).inc()


def record_user_operation(operation: str, user_count: Optional[int] = None) -> None:
    """
    Count a user store mutation and refresh the stored-users gauge.

    Args:
        operation: "create", "update" or "delete"
        user_count: Current number of users, if known
    """
    USER_OPERATIONS.labels(operation=operation).inc()
    if user_count is not None:
        USERS_STORED.set(user_count)


# =============================================================================
# Metrics Endpoint
# =============================================================================


async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
