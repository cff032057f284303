"""Base model for all domain entities."""

from datetime import datetime, timezone
from typing import Any, Self

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    def evolve(self, **changes: Any) -> Self:
        """Return a re-validated copy with ``changes`` applied.

        Unlike ``model_copy(update=...)`` the new values go through field
        validation, so length limits hold for edited entities too.
        """
        return type(self).model_validate({**dict(self), **changes})
