"""sample-app API - Main FastAPI Application.

This module builds the FastAPI application for the structured-logging demo.
It includes:
- CORS and request logging middleware
- Users CRUD, health/probe, error simulation and greeting endpoints
- Prometheus metrics at /metrics
- Exception handlers translating domain errors into JSON responses

Usage:
    # Run with uvicorn
    uvicorn sample_app.api.main:app --reload

    # Or run directly
    python -m sample_app
"""

import asyncio
import platform
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sample_app.api.dependencies import get_request_id, reset_dependencies, set_user_store
from sample_app.api.middleware import REQUEST_ID_HEADER, RequestLoggingMiddleware
from sample_app.api.models import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse
from sample_app.api.routes.errors import router as errors_router
from sample_app.api.routes.greeting import router as greeting_router
from sample_app.api.routes.health import router as health_router, set_ready
from sample_app.api.routes.users import router as users_router
from sample_app.config.settings import Settings, get_settings
from sample_app.core.exceptions import SampleAppError
from sample_app.core.logging_setup import configure_logging
from sample_app.monitoring.metrics import metrics_endpoint, record_error, set_server_start_time
from sample_app.store.users import UserStore

logger = structlog.get_logger(__name__)

API_TITLE = "Sample Application with ELK Logging"
API_DESCRIPTION = """
## Structured logging demo service

A small users API whose every request produces correlated JSON log records,
ready to be shipped to Elasticsearch by Filebeat or Logstash.

### Endpoints

- **Users**: `GET/POST /api/users`, `GET/PUT/DELETE /api/users/{id}`
- **Health**: `/api/health`, `/health` (liveness), `/ready` (readiness), `/info`
- **Errors**: `POST /api/simulate-error` to generate error logs on demand
- **Greeting**: `GET|POST /api/hello?name=...`
- **Metrics**: `/metrics` (Prometheus)

Every response carries an `X-Request-ID` header matching the `request_id`
field of the log records produced while handling it.
"""


# =============================================================================
# Lifespan
# =============================================================================


def _mark_ready() -> None:
    set_ready(True)
    logger.info("application_ready")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: reset uptime, seed the user store, schedule readiness
    - Shutdown: cancel pending readiness, drop shared state
    """
    settings: Settings = app.state.settings

    set_server_start_time()
    set_ready(False)
    set_user_store(UserStore() if settings.seed_users else UserStore(seed=()))

    logger.info(
        "server_started",
        port=settings.port,
        environment=settings.app_env,
        version=settings.app_version,
        python_version=platform.python_version(),
    )

    ready_timer: Optional[asyncio.TimerHandle] = None
    if settings.startup_delay_seconds > 0:
        ready_timer = asyncio.get_running_loop().call_later(
            settings.startup_delay_seconds, _mark_ready
        )
    else:
        _mark_ready()

    yield

    logger.info("application_stopping")

    if ready_timer is not None:
        ready_timer.cancel()
    set_ready(False)
    reset_dependencies()

    logger.info("application_stopped")


# =============================================================================
# Exception Handlers
# =============================================================================


def _error_details(exc: Exception) -> dict:
    return {"name": type(exc).__name__, "message": str(exc)}


async def domain_exception_handler(request: Request, exc: SampleAppError) -> JSONResponse:
    """Translate domain errors into their HTTP status and a JSON error body."""
    request_id = get_request_id(request)

    if exc.status_code >= 500:
        error_type = getattr(exc, "error_type", type(exc).__name__)
        logger.error(
            "error_occurred",
            request_id=request_id,
            error=_error_details(exc),
            error_type=error_type,
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
        record_error(error_type, request.url.path)
        response = ErrorResponse(error=exc.message, request_id=request_id)
    else:
        response = ErrorResponse(error=exc.message)

    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump(by_alias=True, exclude_none=True),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed request bodies with a detailed 400 response."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append(ValidationErrorDetail(
            field=field,
            message=error["msg"],
            value=error.get("input"),
        ))

    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        errors=[e.model_dump(exclude={"value"}) for e in errors],
    )

    response = ValidationErrorResponse(details=errors)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response.model_dump(mode="json"),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle router-level HTTP errors (unknown routes, wrong methods)."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.warning(
            "route_not_found",
            method=request.method,
            path=request.url.path,
        )
        message = "Route not found"
    else:
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = get_request_id(request)

    logger.error(
        "unhandled_error",
        request_id=request_id,
        error=_error_details(exc),
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    record_error(type(exc).__name__, request.url.path)

    response = ErrorResponse(error="Internal server error", request_id=request_id)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump(by_alias=True, exclude_none=True),
        headers={REQUEST_ID_HEADER: request_id} if request_id else None,
    )


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones.

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_tags=[
            {"name": "Health", "description": "Health, probes and instance info"},
            {"name": "Users", "description": "In-memory user management"},
            {"name": "Errors", "description": "Error simulation for log pipelines"},
            {"name": "Greeting", "description": "Cloud-agnostic greeting function"},
        ],
    )
    app.state.settings = settings
    app.state.request_count = 0
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(SampleAppError, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/", tags=["Health"])
    async def root() -> dict:
        """Root endpoint with API information."""
        logger.info("root_endpoint_accessed")
        return {
            "message": API_TITLE,
            "version": settings.app_version,
            "endpoints": {
                "health": "/api/health",
                "users": "/api/users",
                "simulateError": "/api/simulate-error",
                "hello": "/api/hello",
                "info": "/info",
                "metrics": "/metrics",
            },
        }

    app.include_router(health_router)

    api_router = APIRouter(prefix="/api")
    api_router.include_router(users_router)
    api_router.include_router(errors_router)
    api_router.include_router(greeting_router)
    app.include_router(api_router)

    app.add_route("/metrics", metrics_endpoint, include_in_schema=False)

    return app


# Create app instance
app = create_app()
