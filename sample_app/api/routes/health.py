"""Health check endpoints for the sample-app API.

- /api/health: application health with uptime
- /health: liveness probe
- /ready: readiness probe, ready once the startup delay has elapsed
- /info: runtime information about the serving instance
"""

import platform
import socket
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sample_app.api.models import HealthCheckResponse, ProbeResponse
from sample_app.config.settings import Settings, get_settings
from sample_app.monitoring.metrics import get_uptime_seconds

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])

# Readiness flag, flipped by the application lifespan
_is_ready: bool = False


def set_ready(ready: bool) -> None:
    """Mark the instance as ready (or not) to receive traffic."""
    global _is_ready
    _is_ready = ready


def is_ready() -> bool:
    return _is_ready


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.get(
    "/api/health",
    response_model=HealthCheckResponse,
    summary="Health Check",
    description="Report application health and uptime.",
)
async def health_check() -> HealthCheckResponse:
    """Application health, logged on every call so ELK dashboards can chart it."""
    health = HealthCheckResponse(
        status="healthy",
        timestamp=_now(),
        uptime=get_uptime_seconds(),
    )

    logger.info(
        "health_check",
        status=health.status,
        uptime=round(health.uptime, 3),
    )

    return health


@router.get(
    "/health",
    response_model=ProbeResponse,
    summary="Liveness Check",
    description="Simple liveness check for container orchestration.",
)
async def liveness() -> ProbeResponse:
    """
    Liveness probe for Kubernetes.

    Returns 200 if the process is serving requests.
    """
    return ProbeResponse(status="healthy", timestamp=_now())


@router.get(
    "/ready",
    response_model=ProbeResponse,
    summary="Readiness Check",
    description="Check if the service is ready to accept traffic.",
    responses={503: {"model": ProbeResponse, "description": "Service not ready"}},
)
async def readiness():
    """
    Readiness probe for Kubernetes.

    Returns 503 until the startup delay configured by STARTUP_DELAY_SECONDS
    has elapsed.
    """
    if not is_ready():
        probe = ProbeResponse(status="not ready", timestamp=_now())
        return JSONResponse(status_code=503, content=probe.model_dump(mode="json"))

    return ProbeResponse(status="ready", timestamp=_now())


@router.get(
    "/info",
    summary="Instance Information",
    description="Runtime information about the instance serving the request.",
)
async def info(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> dict:
    """Useful for seeing which pod answered when running several replicas."""
    return {
        "app": settings.service_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "hostname": socket.gethostname(),
        "platform": platform.system().lower(),
        "arch": platform.machine(),
        "pythonVersion": platform.python_version(),
        "uptime": int(get_uptime_seconds()),
        "requestCount": getattr(request.app.state, "request_count", 0),
        "timestamp": _now().isoformat(),
    }
