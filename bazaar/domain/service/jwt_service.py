"""JWT token domain service."""

import logfire

from bazaar.config import AuthSettings
from bazaar.domain.value import Role
from bazaar.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, role: Role, name: str) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            role: User role
            name: Display name

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, role, name, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, role=role.value)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_payload_from_token(self, token: str | None) -> TokenPayload | None:
        """Decode a token without raising.

        Routes that accept anonymous callers use this to treat a missing,
        invalid or expired token as "not authenticated".

        Args:
            token: JWT token string (optional)

        Returns:
            Token payload if valid, None otherwise
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except Exception as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
