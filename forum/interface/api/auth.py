"""Request authentication helpers."""

from fastapi import HTTPException, Request, status

from forum.config import AuthSettings
from forum.domain.service import JWTService


def extract_token(request: Request, auth_settings: AuthSettings) -> str | None:
    """Get the JWT from the auth cookie, falling back to a Bearer header.

    Args:
        request: Incoming request
        auth_settings: Authentication settings (cookie name)

    Returns:
        Raw token, or None if the request carries none
    """
    token = request.cookies.get(auth_settings.cookie_name)
    if token:
        return token

    authorization = request.headers.get("authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()

    return None


def require_user_id(
    request: Request,
    jwt_service: JWTService,
    auth_settings: AuthSettings,
    action: str,
) -> str:
    """Resolve the authenticated user's ID or reject the request with 401.

    Args:
        request: Incoming request
        jwt_service: JWT service for token verification
        auth_settings: Authentication settings
        action: What the caller is trying to do (for the error detail)

    Returns:
        User ID from a valid token

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    user_id = jwt_service.get_user_id_from_token(extract_token(request, auth_settings))
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id
