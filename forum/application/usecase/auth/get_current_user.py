"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import JWTService, UserService
from forum.domain.value import UserId, UserRole
from forum.domain.value.types import Handle


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    handle: Handle
    email: str | None
    avatar_url: str | None
    bio: str | None
    role: UserRole
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Load the user named by the token's user_id claim

        Args:
            request: Request with JWT token

        Returns:
            User information if token is valid and user exists

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If user not found
        """
        # Verify token (raises JWTError if invalid)
        payload = self.jwt_service.verify_token(request.token)

        # Load user from database (raises NotFoundError if not found)
        user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))

        return GetCurrentUserResponse(
            user_id=str(user.id),
            handle=user.handle,
            email=user.email,
            avatar_url=user.avatar_url,
            bio=user.bio,
            role=user.role,
            created_at=user.created_at,
        )
