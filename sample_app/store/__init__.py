"""In-memory storage for the demo API."""

from sample_app.store.users import DEFAULT_USERS, User, UserStore

__all__ = ["DEFAULT_USERS", "User", "UserStore"]
