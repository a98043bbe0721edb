"""Error simulation endpoint.

Lets the ELK demo produce error-level log records (with tracebacks) on
demand, without breaking anything.
"""

import json
from typing import Any

import structlog
from fastapi import APIRouter, Request

from sample_app.api.models import ErrorResponse
from sample_app.core.exceptions import SimulatedError

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Errors"])

DEFAULT_ERROR_TYPE = "generic"


async def _error_type_from_request(request: Request) -> str:
    """Read {"type": ...} from the body. Anything unusable selects the generic error."""
    raw = await request.body()
    if not raw:
        return DEFAULT_ERROR_TYPE

    try:
        body: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return DEFAULT_ERROR_TYPE

    error_type = body.get("type") if isinstance(body, dict) else None
    if isinstance(error_type, str) and error_type:
        return error_type
    return DEFAULT_ERROR_TYPE


@router.post(
    "/simulate-error",
    status_code=500,
    summary="Simulate an error",
    responses={500: {"model": ErrorResponse, "description": "Always returned"}},
)
async def simulate_error(request: Request) -> None:
    """
    Always fails with a 500.

    An optional JSON body `{"type": ...}` selects the message: generic,
    database, validation or timeout. Unknown, missing or malformed values
    fall back to generic.
    """
    error_type = await _error_type_from_request(request)

    logger.error("simulated_error_triggered", error_type=error_type)

    raise SimulatedError(error_type)
