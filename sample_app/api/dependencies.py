"""FastAPI dependency injection providers.

This module provides dependency functions for injecting services into route handlers.
"""

from typing import Optional

from fastapi import Request

from sample_app.config.settings import get_settings
from sample_app.store.users import UserStore

# Global instances for singleton pattern
_user_store: Optional[UserStore] = None


def get_user_store() -> UserStore:
    """
    Get the UserStore instance.

    Uses a singleton pattern so every request sees the same in-memory data.
    The store is seeded with the demo users unless SEED_USERS=false.

    Returns:
        Shared UserStore.
    """
    global _user_store

    if _user_store is None:
        settings = get_settings()
        _user_store = UserStore() if settings.seed_users else UserStore(seed=())

    return _user_store


def set_user_store(store: UserStore) -> None:
    """
    Set the global user store instance.

    Args:
        store: UserStore to share across requests.
    """
    global _user_store
    _user_store = store


def get_request_id(request: Request) -> Optional[str]:
    """Correlation id assigned by the request logging middleware."""
    return getattr(request.state, "request_id", None)


def reset_dependencies() -> None:
    """
    Reset all global dependency instances.

    Useful for testing or application shutdown.
    """
    global _user_store
    _user_store = None
