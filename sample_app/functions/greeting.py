"""Cloud-agnostic greeting logic.

The same function backs the HTTP endpoint and the serverless adapters. Each
adapter extracts the name from its own request format, describes its runtime
environment, and translates the GreetingResult back into its response format.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

MAX_NAME_LENGTH = 100

_UNSAFE_CHARS = re.compile(r"[<>]")

TIPS = [
    "This same function can run on Azure, AWS, or GCP",
    "Cloud-agnostic code promotes portability",
    "Use adapters to handle cloud-specific differences",
    "Compare costs and performance across providers",
]

MISSING_NAME_ERROR = "Please provide a name parameter"
MISSING_NAME_MESSAGE = "Please pass a name on the query string or in the request body"


@dataclass
class GreetingResult:
    """Outcome of a greeting request, independent of the transport."""

    success: bool
    status_code: int
    data: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None

    def to_body(self) -> dict[str, Any]:
        """JSON body for the response."""
        if self.success:
            return self.data
        body: dict[str, Any] = {"error": self.error}
        if self.code:
            body["code"] = self.code
        if self.message:
            body["message"] = self.message
        return body


def sanitize_name(name: str) -> str:
    """Strip characters that could be used for markup injection."""
    return _UNSAFE_CHARS.sub("", name)


def process_greeting(
    name: Any,
    environment: Optional[dict[str, Any]] = None,
) -> GreetingResult:
    """
    Build a greeting for name.

    Args:
        name: Raw name from the request (may be missing or malformed)
        environment: Description of the runtime, echoed back to the caller

    Returns:
        GreetingResult with status 200 on success, 400 on invalid input.
    """
    environment = environment or {}

    if name is not None and not isinstance(name, str):
        return GreetingResult(
            success=False,
            status_code=400,
            error="Name parameter must be a string",
            code="INVALID_INPUT",
        )

    if name and len(name) > MAX_NAME_LENGTH:
        return GreetingResult(
            success=False,
            status_code=400,
            error=f"Name parameter too long (max {MAX_NAME_LENGTH} characters)",
            code="INVALID_INPUT",
        )

    sanitized = sanitize_name(name) if name else ""
    if not sanitized:
        return GreetingResult(
            success=False,
            status_code=400,
            error=MISSING_NAME_ERROR,
            message=MISSING_NAME_MESSAGE,
        )

    return GreetingResult(
        success=True,
        status_code=200,
        data={
            "message": f"Hello, {sanitized}! Welcome to Multi-Cloud Serverless.",
            "greeting": f"Hello, {sanitized}!",
            "cloud": environment.get("cloud", "unknown"),
            "environment": environment,
            "tips": list(TIPS),
        },
    )
