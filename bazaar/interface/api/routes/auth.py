"""Auth routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from bazaar.application.usecase.auth import (
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from bazaar.interface.api.auth import require_principal
from bazaar.interface.api.errors import Envelope, envelope

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


@router.get("/me", response_model=Envelope[GetCurrentUserResponse])
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[GetCurrentUserResponse]:
    """Get the authenticated user.

    Tokens are issued by the account service and arrive in the ``token``
    cookie.

    Raises:
        AuthenticationRequiredError: If the cookie is missing or invalid
    """
    principal = await require_principal(get_current_user_use_case, token)
    return envelope(GetCurrentUserResponse.from_principal(principal))
