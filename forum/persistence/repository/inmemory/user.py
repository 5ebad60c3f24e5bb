"""In-memory user repository for testing."""

from typing import Optional

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId
from forum.domain.value.types import Handle

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._store.users.get(user_id)

    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by their handle."""
        for user in self._store.users.values():
            if user.handle == handle:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save a user."""
        self._store.users[user.id] = user
        return user
