"""Request correlation and access logging middleware.

Every request gets a UUID4 request id that is:
- stored on request.state.request_id
- bound into the structlog context, so every log line emitted while the
  request is handled carries it
- returned to the caller in the X-Request-ID header

The middleware logs the incoming request and its completion (at error level
for 4xx/5xx responses), and records Prometheus request metrics.

Usage:
    from sample_app.api.middleware import RequestLoggingMiddleware

    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
"""

import time
from uuid import uuid4

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from sample_app.monitoring.metrics import track_api_request

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Paths excluded from access logging (scrapers and probes poll them constantly)
QUIET_PATHS = {"/metrics"}


def _route_template(request: Request) -> str:
    """Route path template for metric labels, keeping label cardinality bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns request ids and logs request start/finish.

    Features:
    - Binds request_id into structlog contextvars for the request duration
    - Logs incoming_request and request_completed with latency
    - Counts handled requests on app.state.request_count
    - Records request count/duration metrics per route template
    """

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        request.state.start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        request.app.state.request_count = getattr(request.app.state, "request_count", 0) + 1

        quiet = request.url.path in QUIET_PATHS
        user_agent = request.headers.get("user-agent")

        if not quiet:
            logger.info(
                "incoming_request",
                method=request.method,
                path=request.url.path,
                user_agent=user_agent,
                ip=request.client.host if request.client else None,
            )

        status_code = 500
        try:
            with track_api_request(request.method, "unmatched") as ctx:
                try:
                    response = await call_next(request)
                    status_code = response.status_code
                finally:
                    ctx["status_code"] = status_code
                    ctx["endpoint"] = _route_template(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            latency_ms = (time.perf_counter() - request.state.start_time) * 1000

            if not quiet:
                log = logger.error if status_code >= 400 else logger.info
                log(
                    "request_completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=status_code,
                    latency_ms=round(latency_ms, 2),
                    user_agent=user_agent,
                )
            structlog.contextvars.clear_contextvars()
