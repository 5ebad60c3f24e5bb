"""User domain service."""

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.domain.value.types import Handle

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), handle=user.handle.root)
            return user

    async def get_user_by_handle(self, handle: Handle) -> User | None:
        """Get user by handle.

        Args:
            handle: User handle

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_handle", handle=handle.root):
            user = await self.user_repository.find_by_handle(handle)
            if user:
                logfire.info("User found by handle", handle=handle.root)
            else:
                logfire.warn("User not found by handle", handle=handle.root)
            return user

    async def save_user(self, user: User) -> User:
        """Save a user.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span("user_service.save_user", user_id=str(user.id)):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id), role=saved.role.value)
            return saved
