"""HTTP adapter for the cloud-agnostic greeting function."""

import json
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sample_app.api.dependencies import get_request_id
from sample_app.config.settings import Settings, get_settings
from sample_app.functions.greeting import process_greeting

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Greeting"])

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


async def _name_from_request(request: Request) -> Any:
    """Query string wins over the JSON body, like the serverless adapters."""
    name = request.query_params.get("name")
    if name or request.method != "POST":
        return name

    raw = await request.body()
    if not raw:
        return None
    body = json.loads(raw)
    return body.get("name") if isinstance(body, dict) else None


@router.api_route(
    "/hello",
    methods=["GET", "POST"],
    summary="Greeting",
    description="Greet by name, passed as ?name= or in a JSON body.",
)
async def hello(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    try:
        name = await _name_from_request(request)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("greeting_invalid_body", error=str(e))
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid JSON in request body",
                "message": str(e),
                "code": "INVALID_JSON",
            },
            headers=SECURITY_HEADERS,
        )

    environment = {
        "cloud": settings.cloud_provider,
        "service": settings.service_name,
        "region": settings.region,
        "requestId": get_request_id(request),
    }

    result = process_greeting(name, environment)

    if result.success:
        logger.info("greeting_sent", greeting=result.data["greeting"])
    else:
        logger.warning("greeting_rejected", error=result.error, code=result.code)

    return JSONResponse(
        status_code=result.status_code,
        content=result.to_body(),
        headers=SECURITY_HEADERS,
    )
