"""Test harness for unit, integration and E2E tests.

Integration tests assume a Postgres database is reachable with the
settings loaded from environment variables (configure via .env or export).
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import pytest_asyncio
from fastapi.testclient import TestClient

from bazaar.domain.model.item import Item
from bazaar.domain.model.user import User
from bazaar.domain.repository import ItemRepository, UserRepository
from bazaar.domain.service import JWTService
from bazaar.domain.value import Role
from bazaar.interface.api.app import create_app
from bazaar.util.di import Component
from tests.conftest import make_item, make_user
from tests.di import build_test_container

T = TypeVar("T")


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - in-memory repositories, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_question(unit_env):
            service = await unit_env.get(QuestionService)
            question = await service.create_question(...)
            assert question.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Drive a coroutine from a synchronous test."""
    return asyncio.run(coro)


class ApiHarness:
    """FastAPI app wired to in-memory repositories, plus seeding helpers.

    Every client returned by ``client_for`` talks to the same app, so the
    requests of several users see each other's writes.
    """

    def __init__(self) -> None:
        self.container = build_test_container()
        self.app = create_app(container=self.container)
        self.anonymous = TestClient(self.app)

    def add_user(self, name: str, role: Role = Role.USER) -> tuple[User, str]:
        """Store a user and return it with a valid auth token."""

        async def _add() -> tuple[User, str]:
            users = await self.container.get(UserRepository)
            user = await users.save(make_user(name, role=role))
            async with self.container() as request_container:
                jwt_service = await request_container.get(JWTService)
                token = jwt_service.create_token(str(user.id), user.role, user.name)
            return user, token

        return run(_add())

    def add_item(self, owner: User, title: str = "Vintage bicycle") -> Item:
        async def _add() -> Item:
            items = await self.container.get(ItemRepository)
            return await items.save(make_item(owner, title))

        return run(_add())

    def client_for(self, token: str) -> TestClient:
        """Client sending ``token`` in the auth cookie."""
        return TestClient(self.app, cookies={"token": token})

    def get(self, dependency: type[T]) -> T:
        """Resolve an APP-scoped dependency from the test container."""
        return run(self.container.get(dependency))
