"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from pydantic import BaseModel

from forum.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from forum.config import AuthSettings
from forum.domain.error import NotFoundError
from forum.interface.api.auth import extract_token
from forum.util.jwt import JWTError

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return current user if authenticated,
    or indicate unauthenticated state without raising an error.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    This endpoint is safe to call without authentication - it will return
    authenticated=false instead of raising an error.

    Args:
        request: Incoming request (token from cookie or Bearer header)
        get_current_user_use_case: Get current user use case from DI
        auth_settings: Authentication settings from DI

    Returns:
        Authentication status with user information if authenticated

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user": {"user_id": "...", "handle": "alice", "role": "user", ...}
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user": null
        }
    """
    token = extract_token(request, auth_settings)
    if not token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token)
        )
        return AuthStatusResponse(authenticated=True, user=user)

    except JWTError:
        # Invalid or expired token - this is expected behavior, not an error
        return AuthStatusResponse(authenticated=False)
    except NotFoundError:
        # JWT valid but user not found in database (orphaned token)
        return AuthStatusResponse(authenticated=False)
