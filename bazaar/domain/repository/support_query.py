"""Support query repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from bazaar.domain.model.stats import SupportQueryStats
from bazaar.domain.model.support_query import SupportQuery
from bazaar.domain.value import (
    SupportCategory,
    SupportPriority,
    SupportQueryId,
    SupportStatus,
    UserId,
)
from bazaar.domain.value.common import ValueObject


class SupportQueryFilter(ValueObject):
    """Criteria for support desk listings.

    ``search`` is a case-insensitive substring match on subject, message,
    name and email.
    """

    user_id: Optional[UserId] = None
    status: Optional[SupportStatus] = None
    category: Optional[SupportCategory] = None
    priority: Optional[SupportPriority] = None
    assigned_to: Optional[UserId] = None
    search: Optional[str] = None


class SupportQueryRepository(ABC):
    """Repository for SupportQuery aggregate."""

    @abstractmethod
    async def find_by_id(self, query_id: SupportQueryId) -> Optional[SupportQuery]:
        """Find a query by ID.

        Args:
            query_id: The query's unique identifier

        Returns:
            The query if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self, criteria: SupportQueryFilter, limit: int = 10, offset: int = 0
    ) -> List[SupportQuery]:
        """Find queries matching a filter, newest first.

        Args:
            criteria: Filter criteria
            limit: Maximum number of queries to return
            offset: Number of queries to skip

        Returns:
            Matching queries
        """
        pass

    @abstractmethod
    async def count(self, criteria: SupportQueryFilter) -> int:
        """Count queries matching a filter.

        Args:
            criteria: Filter criteria

        Returns:
            Number of matching queries
        """
        pass

    @abstractmethod
    async def save(self, query: SupportQuery) -> SupportQuery:
        """Save a query (create or update).

        Args:
            query: The query to save

        Returns:
            The saved query
        """
        pass

    @abstractmethod
    async def delete(self, query_id: SupportQueryId) -> bool:
        """Delete a query (hard delete).

        Args:
            query_id: The query ID

        Returns:
            True if a query was deleted
        """
        pass

    @abstractmethod
    async def stats(self) -> SupportQueryStats:
        """Compute totals over all queries.

        Returns:
            Support desk statistics
        """
        pass
