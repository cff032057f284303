"""Unit tests for SupportQueryService."""

from uuid import uuid4

import pytest

from bazaar.domain.error import (
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.repository import SupportQueryFilter, UserRepository
from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import (
    Role,
    SupportCategory,
    SupportPriority,
    SupportQueryId,
    SupportStatus,
)
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _people(unit_env):
    users = await unit_env.get(UserRepository)
    customer = await users.save(make_user("Carol Customer", phone_number="555-0100"))
    admin = await users.save(make_user("Ada Admin", role=Role.ADMIN))
    return customer, admin


class TestSubmitQuery:
    """Tests for submit_query."""

    @pytest.mark.asyncio
    async def test_contact_details_default_from_account(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, _ = await _people(unit_env)

        query = await service.submit_query(
            customer.id, "Payment failed", "My card was charged twice"
        )

        assert query.status == SupportStatus.PENDING
        assert query.priority == SupportPriority.MEDIUM
        assert query.name == "Carol Customer"
        assert query.email == "carol.customer@example.com"
        assert query.phone == "555-0100"

    @pytest.mark.asyncio
    async def test_overlong_subject_is_rejected(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, _ = await _people(unit_env)

        with pytest.raises(ValidationError):
            await service.submit_query(customer.id, "s" * 201, "Body")


class TestVisibility:
    """Tests for get_query and list_queries."""

    @pytest.mark.asyncio
    async def test_users_only_see_their_own_queries(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        users = await unit_env.get(UserRepository)
        customer, admin = await _people(unit_env)
        stranger = await users.save(make_user("Stan Stranger"))
        query = await service.submit_query(customer.id, "Help", "Please")
        await service.submit_query(stranger.id, "Other", "Issue")

        with pytest.raises(ForbiddenError):
            await service.get_query(query.id, stranger.to_principal())
        assert (await service.get_query(query.id, admin.to_principal())).id == query.id

        mine, total = await service.list_queries(
            customer.to_principal(), SupportQueryFilter(user_id=stranger.id)
        )
        assert total == 1
        assert [q.id for q in mine] == [query.id]

        everything, total_all = await service.list_queries(
            admin.to_principal(), SupportQueryFilter()
        )
        assert total_all == 2
        assert len(everything) == 2

    @pytest.mark.asyncio
    async def test_unknown_query_is_not_found(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        _, admin = await _people(unit_env)

        with pytest.raises(NotFoundError):
            await service.get_query(SupportQueryId(uuid4()), admin.to_principal())


class TestWorkflow:
    """Tests for status changes, responses and ratings."""

    @pytest.mark.asyncio
    async def test_resolving_stamps_resolved_at(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")

        resolved = await service.update_status(
            query.id,
            admin.to_principal(),
            status=SupportStatus.RESOLVED,
            priority=SupportPriority.URGENT,
            tags=["billing"],
        )

        assert resolved.status == SupportStatus.RESOLVED
        assert resolved.resolved_at is not None
        assert resolved.priority == SupportPriority.URGENT
        assert resolved.tags == ["billing"]

    @pytest.mark.asyncio
    async def test_status_never_moves_backwards(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")
        await service.update_status(
            query.id, admin.to_principal(), status=SupportStatus.RESOLVED
        )

        with pytest.raises(InvalidOperationError):
            await service.update_status(
                query.id, admin.to_principal(), status=SupportStatus.PENDING
            )

    @pytest.mark.asyncio
    async def test_closed_is_terminal(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")
        await service.update_status(
            query.id, admin.to_principal(), status=SupportStatus.CLOSED
        )

        with pytest.raises(InvalidOperationError):
            await service.update_status(
                query.id, admin.to_principal(), status=SupportStatus.RESOLVED
            )

    @pytest.mark.asyncio
    async def test_response_moves_pending_query_in_progress(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")

        answered = await service.respond(query.id, admin.to_principal(), "On it")

        assert answered.status == SupportStatus.IN_PROGRESS
        assert answered.admin_response.message == "On it"
        assert answered.admin_response.responded_by == admin.id

    @pytest.mark.asyncio
    async def test_response_keeps_resolved_status(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")
        await service.update_status(
            query.id, admin.to_principal(), status=SupportStatus.RESOLVED
        )

        answered = await service.respond(query.id, admin.to_principal(), "Follow-up")

        assert answered.status == SupportStatus.RESOLVED

    @pytest.mark.asyncio
    async def test_only_admins_triage(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, _ = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")

        with pytest.raises(ForbiddenError):
            await service.update_status(
                query.id, customer.to_principal(), status=SupportStatus.RESOLVED
            )
        with pytest.raises(ForbiddenError):
            await service.respond(query.id, customer.to_principal(), "Self-serve")
        with pytest.raises(ForbiddenError):
            await service.delete(query.id, customer.to_principal())

    @pytest.mark.asyncio
    async def test_rating_requires_resolution(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")

        with pytest.raises(InvalidOperationError, match="resolved"):
            await service.rate(query.id, customer.id, 5)

        await service.update_status(
            query.id, admin.to_principal(), status=SupportStatus.RESOLVED
        )
        rated = await service.rate(query.id, customer.id, 4, "Quick fix")

        assert rated.satisfaction.rating == 4
        assert rated.satisfaction.feedback == "Quick fix"

    @pytest.mark.asyncio
    async def test_rating_outside_range_is_rejected(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")
        await service.update_status(
            query.id, admin.to_principal(), status=SupportStatus.RESOLVED
        )

        with pytest.raises(ValidationError):
            await service.rate(query.id, customer.id, 6)

    @pytest.mark.asyncio
    async def test_only_owner_can_rate(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")
        await service.update_status(
            query.id, admin.to_principal(), status=SupportStatus.RESOLVED
        )

        with pytest.raises(ForbiddenError):
            await service.rate(query.id, admin.id, 5)


class TestDeleteAndStats:
    """Tests for delete and stats."""

    @pytest.mark.asyncio
    async def test_delete_removes_query(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        query = await service.submit_query(customer.id, "Help", "Please")

        await service.delete(query.id, admin.to_principal())

        with pytest.raises(NotFoundError):
            await service.get_query(query.id, admin.to_principal())
        with pytest.raises(NotFoundError):
            await service.delete(query.id, admin.to_principal())

    @pytest.mark.asyncio
    async def test_stats_break_down_queries(self, unit_env):
        service = await unit_env.get(SupportQueryService)
        customer, admin = await _people(unit_env)
        first = await service.submit_query(
            customer.id, "Refund", "Please", category=SupportCategory.BILLING
        )
        await service.submit_query(
            customer.id, "Bug", "Crash", category=SupportCategory.TECHNICAL
        )
        await service.update_status(
            first.id,
            admin.to_principal(),
            status=SupportStatus.IN_PROGRESS,
            priority=SupportPriority.URGENT,
        )

        stats = await service.stats(admin.to_principal())

        assert stats.total_queries == 2
        assert stats.pending_queries == 1
        assert stats.in_progress_queries == 1
        assert stats.urgent_queries == 1
        assert stats.by_category[SupportCategory.BILLING] == 1
        assert stats.by_priority[SupportPriority.MEDIUM] == 1
