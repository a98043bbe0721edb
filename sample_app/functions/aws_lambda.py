"""AWS Lambda adapter for the greeting function.

Handles API Gateway proxy events (REST and HTTP APIs):

    handler({"queryStringParameters": {"name": "Ada"}}, context)
    -> {"statusCode": 200, "headers": {...}, "body": "{...}"}

Deploy with the handler path ``sample_app.functions.aws_lambda.handler``.
"""

import base64
import binascii
import json
import os
from typing import Any, Optional

import structlog

from sample_app.functions.greeting import process_greeting

logger = structlog.get_logger(__name__)

RESPONSE_HEADERS = {
    "Content-Type": "application/json",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


class InvalidEventBody(ValueError):
    """Raised when the event body is not valid JSON."""


def _response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(RESPONSE_HEADERS),
        "body": json.dumps(body),
    }


def _parse_body(event: dict[str, Any]) -> dict[str, Any]:
    raw = event.get("body")
    if not raw:
        return {}

    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        body = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidEventBody(str(e)) from e

    return body if isinstance(body, dict) else {}


def extract_name(event: dict[str, Any]) -> Optional[Any]:
    """
    Get the name from the query string, falling back to the JSON body.

    Raises:
        InvalidEventBody: If the body has to be read and is not valid JSON.
    """
    query = event.get("queryStringParameters") or {}
    if query.get("name"):
        return query["name"]
    return _parse_body(event).get("name")


def describe_environment(context: Any) -> dict[str, Any]:
    """Runtime metadata from the Lambda environment and invocation context."""
    return {
        "cloud": "AWS",
        "service": "AWS Lambda",
        "region": os.environ.get("AWS_REGION", "unknown"),
        "functionName": getattr(context, "function_name", None),
        "requestId": getattr(context, "aws_request_id", None),
        "memoryLimit": getattr(context, "memory_limit_in_mb", None),
    }


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entry point."""
    environment = describe_environment(context)
    log = logger.bind(request_id=environment["requestId"])
    log.info("lambda_invoked", function_name=environment["functionName"])

    try:
        name = extract_name(event or {})
    except InvalidEventBody as e:
        log.warning("lambda_invalid_body", error=str(e))
        return _response(
            400,
            {
                "error": "Invalid JSON in request body",
                "message": str(e),
                "code": "INVALID_JSON",
            },
        )

    result = process_greeting(name, environment)
    log.info(
        "lambda_completed",
        status_code=result.status_code,
        success=result.success,
    )
    return _response(result.status_code, result.to_body())
