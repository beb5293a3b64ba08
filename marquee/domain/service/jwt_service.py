"""JWT token domain service."""

from typing import Optional

import logfire

from marquee.config import AuthSettings
from marquee.domain.value import UserId
from marquee.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for identity tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, email: Optional[str] = None) -> str:
        """Create JWT token for user.

        Used by tests and local tooling; production tokens come from the
        account system.
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, self.auth_settings, email)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """Extract user ID from JWT token without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return UserId(self.verify_token(token).user_id)
        except JWTError:
            # Invalid or expired token, treat as unauthenticated
            return None
