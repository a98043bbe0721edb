"""API route modules."""

from sample_app.api.routes.health import router as health_router
from sample_app.api.routes.users import router as users_router
from sample_app.api.routes.errors import router as errors_router
from sample_app.api.routes.greeting import router as greeting_router

__all__ = [
    "health_router",
    "users_router",
    "errors_router",
    "greeting_router",
]
