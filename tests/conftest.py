"""Test configuration and fixtures."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from bazaar.domain.model.item import Item
from bazaar.domain.model.user import User
from bazaar.domain.value import ItemId, Role, UserId


def make_user(name: str = "Alice", role: Role = Role.USER, **overrides) -> User:
    """Build a user with a fresh id and a derived email address."""
    fields = {
        "id": UserId(uuid4()),
        "name": name,
        "email": f"{name.lower().replace(' ', '.')}@example.com",
        "role": role,
        "is_verified": True,
        "created_at": datetime.now(timezone.utc),
    }
    fields.update(overrides)
    return User(**fields)


def make_item(owner: User, title: str = "Vintage bicycle", **overrides) -> Item:
    """Build an item listed by ``owner``."""
    fields = {
        "id": ItemId(uuid4()),
        "title": title,
        "price": Decimal("120.00"),
        "owner_id": owner.id,
        "created_at": datetime.now(timezone.utc),
    }
    fields.update(overrides)
    return Item(**fields)


@pytest.fixture
def api():
    """App backed by a fresh in-memory container."""
    from tests.harness import ApiHarness

    return ApiHarness()
