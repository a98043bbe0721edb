"""
Serverless-style functions.

- greeting: transport-independent greeting logic
- aws_lambda: API Gateway adapter around the greeting logic
"""

from sample_app.functions.greeting import (
    MAX_NAME_LENGTH,
    GreetingResult,
    process_greeting,
    sanitize_name,
)

__all__ = [
    "MAX_NAME_LENGTH",
    "GreetingResult",
    "process_greeting",
    "sanitize_name",
]
