"""User aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, UserRole
from forum.domain.value.types import Handle


class User(DomainModel):
    """User aggregate root.

    Credentials live outside this service; a user is identified by the
    ``user_id`` claim of a verified JWT.
    """

    id: UserId
    handle: Handle
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
