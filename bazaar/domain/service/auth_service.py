"""Authentication domain service."""

from uuid import UUID

import logfire

from bazaar.domain.repository import UserRepository
from bazaar.domain.value import Principal, UserId

from .base import Service
from .jwt_service import JWTService


class AuthService(Service):
    """Resolves request credentials into an authenticated principal."""

    def __init__(self, jwt_service: JWTService, user_repository: UserRepository) -> None:
        """Initialize auth service.

        Args:
            jwt_service: JWT token domain service
            user_repository: User repository
        """
        self.jwt_service = jwt_service
        self.user_repository = user_repository

    async def authenticate(self, token: str | None) -> Principal | None:
        """Resolve a credential into a principal.

        The token only proves identity; role and verification flags are
        re-read from the user record so revoked admins lose access at once.

        Args:
            token: JWT from the auth cookie (optional)

        Returns:
            The principal, or None if the token is missing, invalid, expired
            or refers to a user that no longer exists
        """
        payload = self.jwt_service.get_payload_from_token(token)
        if payload is None:
            return None

        with logfire.span("auth_service.authenticate", user_id=payload.user_id):
            try:
                user_id = UserId(UUID(payload.user_id))
            except ValueError:
                logfire.warn("Token carries malformed user id", user_id=payload.user_id)
                return None

            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("Token refers to unknown user", user_id=payload.user_id)
                return None

            return user.to_principal()
