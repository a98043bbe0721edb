"""
sample-app FastAPI Application.

This module contains the REST API for the structured-logging demo:

- main: FastAPI application factory, exception handlers and lifespan
- routes/: API endpoint definitions organized by domain
- middleware/: request id and access logging middleware
- models: Pydantic request/response models
- dependencies: FastAPI dependency injection providers

API Structure:
- /api/users - User management (list, get, create, update, delete)
- /api/health, /health, /ready, /info - Health and probes
- /api/simulate-error - Error log generation
- /api/hello - Greeting function
- /metrics - Prometheus metrics

Example:
    from sample_app.api import app

    # Run with: uvicorn sample_app.api.main:app --reload
"""

from sample_app.api.main import app, create_app

__all__ = ["app", "create_app"]
