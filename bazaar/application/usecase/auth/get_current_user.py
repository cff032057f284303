"""Get current user use case."""

from pydantic import BaseModel

from bazaar.domain.service import AuthService
from bazaar.domain.value import Principal, Role


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str | None = None  # JWT token from cookie or query string


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    name: str
    role: Role
    is_verified: bool

    @classmethod
    def from_principal(cls, principal: Principal) -> "GetCurrentUserResponse":
        return cls(
            user_id=str(principal.id),
            name=principal.name,
            role=principal.role,
            is_verified=principal.is_verified,
        )


class GetCurrentUserUseCase:
    """Use case for resolving the authenticated principal of a request."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize get current user use case.

        Args:
            auth_service: Authentication domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: GetCurrentUserRequest) -> Principal | None:
        """Execute get current user flow.

        Args:
            request: Request with the (optional) JWT token

        Returns:
            The principal if the token is valid and its user still exists,
            None otherwise
        """
        return await self.auth_service.authenticate(request.token)
