"""
Monitoring and observability for sample-app.

Provides Prometheus metrics for request traffic, errors and user store state.

Usage:
    from sample_app.monitoring import track_api_request, record_error

    with track_api_request("GET", "/api/users") as ctx:
        ...
        ctx["status_code"] = 200

    record_error("SimulatedError", "/api/simulate-error")
"""

from sample_app.monitoring.metrics import (
    API_REQUEST_DURATION,
    API_REQUEST_TOTAL,
    APP_UPTIME,
    ERROR_COUNT,
    USER_OPERATIONS,
    USERS_STORED,
    track_api_request,
    record_error,
    record_user_operation,
    set_server_start_time,
    get_uptime_seconds,
    metrics_endpoint,
)

__all__ = [
    # Prometheus metrics
    "API_REQUEST_DURATION",
    "API_REQUEST_TOTAL",
    "APP_UPTIME",
    "ERROR_COUNT",
    "USER_OPERATIONS",
    "USERS_STORED",
    # Context managers
    "track_api_request",
    # Helper functions
    "record_error",
    "record_user_operation",
    "set_server_start_time",
    "get_uptime_seconds",
    "metrics_endpoint",
]
