"""JWT token domain service."""

from typing import Optional

import logfire

from forum.config import AuthSettings
from forum.domain.model import User
from forum.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and checks the signed tokens that identify forum users.

    Credentials are handled elsewhere; a verified ``user_id`` claim is all
    the forum needs to know who is asking, voting or accepting.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user: User) -> str:
        """Sign a token for ``user`` (expiry from ``auth.jwt_expiry_days``)."""
        token = create_token(str(user.id), user.handle.root, self.auth_settings)
        logfire.info("JWT token created", user_id=str(user.id))
        return token

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token.

        Raises:
            JWTError: If the token is malformed, tampered with or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token rejected", error=str(e))
                raise

    def get_user_id_from_token(self, token: Optional[str]) -> Optional[str]:
        """User ID carried by ``token``, or None for an anonymous caller.

        A missing, invalid or expired token never raises here; routes that
        require a user turn None into a 401 themselves.
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError:
            return None
