"""Support desk domain service."""

from typing import List, Optional, Tuple
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from bazaar.domain.error import (
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.model.common import utcnow
from bazaar.domain.model.stats import SupportQueryStats
from bazaar.domain.model.support_query import (
    AdminResponse,
    SatisfactionRating,
    SupportQuery,
)
from bazaar.domain.repository import (
    SupportQueryFilter,
    SupportQueryRepository,
    UserRepository,
)
from bazaar.domain.value import (
    Principal,
    SupportCategory,
    SupportPriority,
    SupportQueryId,
    SupportStatus,
    UserId,
)

from .base import Service


def _require_admin(principal: Principal) -> None:
    if not principal.is_admin:
        logfire.warn("Admin-only support action denied", user_id=str(principal.id))
        raise ForbiddenError("Admin access required")


class SupportQueryService(Service):
    """Domain service for support desk queries.

    Users submit and rate their own queries; administrators triage,
    respond to and resolve them.
    """

    def __init__(
        self,
        support_query_repository: SupportQueryRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize support query service.

        Args:
            support_query_repository: Support query repository
            user_repository: User repository (contact defaults)
        """
        self.support_query_repository = support_query_repository
        self.user_repository = user_repository

    async def submit_query(
        self,
        user_id: UserId,
        subject: str,
        message: str,
        category: SupportCategory = SupportCategory.GENERAL,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> SupportQuery:
        """File a new query.

        Contact details left out are filled in from the user's record.

        Args:
            user_id: Submitting user
            subject: Short summary (at most 200 characters)
            message: Full description (at most 2000 characters)
            category: Query topic
            name: Contact name
            email: Contact email
            phone: Contact phone number

        Returns:
            The pending query

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If a field is empty or too long
        """
        with logfire.span(
            "support_query_service.submit_query",
            user_id=str(user_id),
            category=category.value,
        ):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User", str(user_id))

            now = utcnow()
            try:
                query = SupportQuery(
                    id=SupportQueryId(uuid4()),
                    user_id=user_id,
                    name=name or user.name,
                    email=email or user.email,
                    phone=phone or user.phone_number,
                    subject=subject,
                    message=message,
                    category=category,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid support query", error=str(e))
                raise ValidationError.from_pydantic(e)

            saved = await self.support_query_repository.save(query)
            logfire.info("Support query submitted", query_id=str(saved.id))
            return saved

    async def list_queries(
        self,
        requester: Principal,
        criteria: SupportQueryFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[SupportQuery], int]:
        """List queries newest first.

        Non-admins only ever see their own queries, whatever the filter says.

        Args:
            requester: Principal listing the queries
            criteria: Filter criteria
            limit: Page size
            offset: Number of queries to skip

        Returns:
            The page of queries and the total number of matches
        """
        if not requester.is_admin:
            criteria = criteria.model_copy(update={"user_id": requester.id})

        total = await self.support_query_repository.count(criteria)
        queries = await self.support_query_repository.find_all(
            criteria, limit=limit, offset=offset
        )
        return queries, total

    async def get_query(
        self, query_id: SupportQueryId, principal: Principal
    ) -> SupportQuery:
        """Read a query. Users may only read their own.

        Raises:
            NotFoundError: If the query does not exist
            ForbiddenError: If a non-admin reads someone else's query
        """
        query = await self.support_query_repository.find_by_id(query_id)
        if query is None:
            raise NotFoundError("Query", str(query_id))
        if not principal.is_admin and query.user_id != principal.id:
            logfire.warn(
                "Support query access denied",
                query_id=str(query_id),
                user_id=str(principal.id),
            )
            raise ForbiddenError("Not authorized to view this query")
        return query

    async def update_status(
        self,
        query_id: SupportQueryId,
        admin: Principal,
        status: Optional[SupportStatus] = None,
        priority: Optional[SupportPriority] = None,
        assigned_to: Optional[UserId] = None,
        tags: Optional[list[str]] = None,
    ) -> SupportQuery:
        """Triage a query.

        Args:
            query_id: Query ID
            admin: Administrator performing the update
            status: New status (forward moves only)
            priority: New priority
            assigned_to: Administrator handling the query
            tags: Replacement tag list

        Returns:
            The updated query

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the query does not exist
            InvalidOperationError: If the status would move backwards
        """
        with logfire.span(
            "support_query_service.update_status",
            query_id=str(query_id),
            status=status.value if status else None,
        ):
            _require_admin(admin)
            query = await self.support_query_repository.find_by_id(query_id)
            if query is None:
                raise NotFoundError("Query", str(query_id))

            now = utcnow()
            changes: dict[str, object] = {"updated_at": now}
            if status is not None and status != query.status:
                if not query.status.can_transition_to(status):
                    logfire.warn(
                        "Invalid support status transition",
                        query_id=str(query_id),
                        current=query.status.value,
                        target=status.value,
                    )
                    raise InvalidOperationError(
                        f"Cannot move query from {query.status.value} to {status.value}"
                    )
                changes["status"] = status
                if status == SupportStatus.RESOLVED:
                    changes["resolved_at"] = now
            if priority is not None:
                changes["priority"] = priority
            if assigned_to is not None:
                changes["assigned_to"] = assigned_to
            if tags is not None:
                changes["tags"] = tags

            updated = await self.support_query_repository.save(query.evolve(**changes))
            logfire.info(
                "Support query updated",
                query_id=str(query_id),
                status=updated.status.value,
            )
            return updated

    async def respond(
        self, query_id: SupportQueryId, admin: Principal, message: str
    ) -> SupportQuery:
        """Attach an administrator's response.

        A pending query moves to in-progress; resolved and closed queries
        keep their status.

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the query does not exist
            ValidationError: If the response is empty or too long
        """
        with logfire.span(
            "support_query_service.respond",
            query_id=str(query_id),
            admin_id=str(admin.id),
        ):
            _require_admin(admin)
            query = await self.support_query_repository.find_by_id(query_id)
            if query is None:
                raise NotFoundError("Query", str(query_id))

            now = utcnow()
            try:
                response = AdminResponse(
                    message=message, responded_by=admin.id, responded_at=now
                )
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e)

            status = query.status
            if status in (SupportStatus.PENDING, SupportStatus.IN_PROGRESS):
                status = SupportStatus.IN_PROGRESS

            updated = await self.support_query_repository.save(
                query.evolve(admin_response=response, status=status, updated_at=now)
            )
            logfire.info("Support query answered", query_id=str(query_id))
            return updated

    async def rate(
        self,
        query_id: SupportQueryId,
        user_id: UserId,
        rating: int,
        feedback: Optional[str] = None,
    ) -> SupportQuery:
        """Record the owner's satisfaction with a resolved query.

        Raises:
            NotFoundError: If the query does not exist
            ForbiddenError: If the user does not own the query
            InvalidOperationError: If the query is not resolved
            ValidationError: If the rating is outside 1-5 or feedback too long
        """
        with logfire.span(
            "support_query_service.rate", query_id=str(query_id), rating=rating
        ):
            query = await self.support_query_repository.find_by_id(query_id)
            if query is None:
                raise NotFoundError("Query", str(query_id))
            if query.user_id != user_id:
                raise ForbiddenError("Not authorized to rate this query")
            if query.status != SupportStatus.RESOLVED:
                raise InvalidOperationError("Can only rate resolved queries")

            now = utcnow()
            try:
                satisfaction = SatisfactionRating(
                    rating=rating, feedback=feedback, rated_at=now
                )
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e)

            updated = await self.support_query_repository.save(
                query.evolve(satisfaction=satisfaction, updated_at=now)
            )
            logfire.info("Support query rated", query_id=str(query_id), rating=rating)
            return updated

    async def delete(self, query_id: SupportQueryId, admin: Principal) -> None:
        """Permanently remove a query.

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the query does not exist
        """
        with logfire.span("support_query_service.delete", query_id=str(query_id)):
            _require_admin(admin)
            if not await self.support_query_repository.delete(query_id):
                raise NotFoundError("Query", str(query_id))
            logfire.info("Support query deleted", query_id=str(query_id))

    async def stats(self, admin: Principal) -> SupportQueryStats:
        """Support desk totals.

        Raises:
            ForbiddenError: If the caller is not an administrator
        """
        _require_admin(admin)
        return await self.support_query_repository.stats()
