"""Request authentication helpers shared by the routes."""

import logfire

from bazaar.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
)
from bazaar.domain.error import ForbiddenError
from bazaar.domain.value import Principal
from bazaar.interface.error import AuthenticationRequiredError


async def optional_principal(
    get_current_user_use_case: GetCurrentUserUseCase, token: str | None
) -> Principal | None:
    """Resolve the caller if a valid token was sent."""
    if not token:
        return None
    return await get_current_user_use_case.execute(GetCurrentUserRequest(token=token))


async def require_principal(
    get_current_user_use_case: GetCurrentUserUseCase, token: str | None
) -> Principal:
    """Resolve the caller or fail with 401.

    Raises:
        AuthenticationRequiredError: If the token is missing, invalid or
            belongs to a user that no longer exists
    """
    if not token:
        raise AuthenticationRequiredError("Access denied. No token provided.")
    principal = await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=token)
    )
    if principal is None:
        raise AuthenticationRequiredError("Invalid token.")
    return principal


def require_admin(principal: Principal) -> Principal:
    """Fail with 403 unless the caller is an administrator."""
    if not principal.is_admin:
        logfire.warn("Admin route denied", user_id=str(principal.id))
        raise ForbiddenError("Admin access required")
    return principal
