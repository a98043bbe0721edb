"""In-memory user store.

Holds the demo users for the lifetime of the process. Nothing is persisted:
a restart returns the store to its seed data.

Ids are assigned from a monotonically increasing counter and are never
reused, even after the user holding them is deleted.
"""

import asyncio
from dataclasses import dataclass, field, replace
from typing import Optional

import structlog

from sample_app.core.exceptions import UserNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class User:
    """A single stored user."""

    id: int
    name: str
    email: str


DEFAULT_USERS: tuple[User, ...] = (
    User(id=1, name="Alice", email="alice@example.com"),
    User(id=2, name="Bob", email="bob@example.com"),
)


@dataclass
class UserStore:
    """
    Async in-memory user store.

    WARNING: Does not persist across restarts and does not share
    state between multiple application instances.
    """

    seed: tuple[User, ...] = DEFAULT_USERS
    _users: list[User] = field(default_factory=list, init=False)
    _next_id: int = field(default=1, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    def __post_init__(self) -> None:
        self._load_seed()

    def _load_seed(self) -> None:
        self._users = list(self.seed)
        self._next_id = max((u.id for u in self._users), default=0) + 1

    def _index_of(self, user_id: int) -> int:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        raise UserNotFoundError(user_id)

    async def list_users(self) -> list[User]:
        """Return all users in insertion order."""
        async with self._lock:
            return list(self._users)

    async def count(self) -> int:
        async with self._lock:
            return len(self._users)

    async def get_user(self, user_id: int) -> User:
        """
        Get a user by id.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        async with self._lock:
            return self._users[self._index_of(user_id)]

    async def create_user(self, name: str, email: str) -> User:
        """Store a new user under the next free id."""
        async with self._lock:
            user = User(id=self._next_id, name=name, email=email)
            self._next_id += 1
            self._users.append(user)
            return user

    async def update_user(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        Update a user in place.

        Only non-empty values replace the stored fields.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        async with self._lock:
            index = self._index_of(user_id)
            changes = {}
            if name:
                changes["name"] = name
            if email:
                changes["email"] = email
            updated = replace(self._users[index], **changes)
            self._users[index] = updated
            return updated

    async def delete_user(self, user_id: int) -> User:
        """
        Remove a user and return it.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        async with self._lock:
            return self._users.pop(self._index_of(user_id))

    async def reset(self) -> None:
        """Restore the seed data and restart id assignment."""
        async with self._lock:
            self._load_seed()
        logger.info("user_store_reset", user_count=len(self._users))
