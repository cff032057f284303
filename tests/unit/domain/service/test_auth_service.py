"""Unit tests for JWTService and AuthService."""

from uuid import uuid4

import pytest

from bazaar.domain.repository import UserRepository
from bazaar.domain.service import AuthService, JWTService
from bazaar.domain.value import Role
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAuthenticate:
    """Tests for resolving tokens into principals."""

    @pytest.mark.asyncio
    async def test_issued_token_resolves_to_stored_user(self, unit_env):
        users = await unit_env.get(UserRepository)
        jwt_service = await unit_env.get(JWTService)
        auth_service = await unit_env.get(AuthService)
        user = await users.save(make_user("Ada Admin", role=Role.ADMIN))

        token = jwt_service.create_token(str(user.id), user.role, user.name)
        principal = await auth_service.authenticate(token)

        assert principal is not None
        assert principal.id == user.id
        assert principal.is_admin

    @pytest.mark.asyncio
    async def test_token_of_unknown_user_is_anonymous(self, unit_env):
        jwt_service = await unit_env.get(JWTService)
        auth_service = await unit_env.get(AuthService)

        token = jwt_service.create_token(str(uuid4()), Role.USER, "Ghost")

        assert await auth_service.authenticate(token) is None

    @pytest.mark.asyncio
    async def test_garbage_token_is_anonymous(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        assert await auth_service.authenticate("not-a-jwt") is None
        assert await auth_service.authenticate(None) is None
