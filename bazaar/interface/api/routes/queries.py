"""Support desk routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from bazaar.application.usecase.auth import GetCurrentUserUseCase
from bazaar.application.usecase.support import (
    DeleteQueryRequest,
    DeleteQueryResponse,
    DeleteQueryUseCase,
    GetQueryRequest,
    GetQueryUseCase,
    ListQueriesRequest,
    ListQueriesResponse,
    ListQueriesUseCase,
    QueryStatsRequest,
    QueryStatsResponse,
    QueryStatsUseCase,
    RateQueryRequest,
    RateQueryUseCase,
    RespondToQueryRequest,
    RespondToQueryUseCase,
    SubmitQueryRequest,
    SubmitQueryUseCase,
    SupportQueryItem,
    UpdateQueryStatusRequest,
    UpdateQueryStatusUseCase,
)
from bazaar.domain.value import SupportCategory, SupportPriority, SupportStatus
from bazaar.interface.api.auth import require_admin, require_principal
from bazaar.interface.api.errors import Envelope, envelope

router = APIRouter(prefix="/queries", tags=["support"], route_class=DishkaRoute)


class SubmitQueryAPIRequest(BaseModel):
    """API request for filing a support query."""

    subject: str
    message: str
    category: SupportCategory = SupportCategory.GENERAL
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class UpdateQueryStatusAPIRequest(BaseModel):
    """API request for triaging a query. Omitted fields are kept."""

    status: Optional[SupportStatus] = None
    priority: Optional[SupportPriority] = None
    assigned_to: Optional[UUID] = None
    tags: Optional[list[str]] = None


class RespondAPIRequest(BaseModel):
    """API request for answering a query."""

    message: str


class RateQueryAPIRequest(BaseModel):
    """API request for rating a resolved query."""

    rating: int
    feedback: Optional[str] = None


@router.post(
    "/submit",
    response_model=Envelope[SupportQueryItem],
    status_code=status.HTTP_201_CREATED,
)
async def submit_query(
    request: SubmitQueryAPIRequest,
    submit_query_use_case: FromDishka[SubmitQueryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[SupportQueryItem]:
    """File a support query.

    Contact details left out are taken from the caller's account.
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await submit_query_use_case.execute(
        SubmitQueryRequest(
            user_id=str(principal.id),
            subject=request.subject,
            message=request.message,
            category=request.category,
            name=request.name,
            email=request.email,
            phone=request.phone,
        )
    )
    return envelope(result)


@router.get("/my-queries", response_model=Envelope[ListQueriesResponse])
async def my_queries(
    list_queries_use_case: FromDishka[ListQueriesUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
    query_status: Optional[SupportStatus] = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> Envelope[ListQueriesResponse]:
    """The caller's own queries, newest first."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await list_queries_use_case.execute(
        ListQueriesRequest(
            requester=principal,
            own_only=True,
            status=query_status,
            page=page,
            limit=limit,
        )
    )
    return envelope(result)


@router.get("/admin/all", response_model=Envelope[ListQueriesResponse])
async def all_queries(
    list_queries_use_case: FromDishka[ListQueriesUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
    query_status: Optional[SupportStatus] = Query(default=None, alias="status"),
    category: Optional[SupportCategory] = None,
    priority: Optional[SupportPriority] = None,
    assigned_to: Optional[UUID] = None,
    search: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> Envelope[ListQueriesResponse]:
    """Every query on the desk, filtered. Admin only."""
    principal = require_admin(
        await require_principal(get_current_user_use_case, token)
    )
    result = await list_queries_use_case.execute(
        ListQueriesRequest(
            requester=principal,
            status=query_status,
            category=category,
            priority=priority,
            assigned_to=str(assigned_to) if assigned_to else None,
            search=search,
            page=page,
            limit=limit,
        )
    )
    return envelope(result)


@router.get("/admin/stats", response_model=Envelope[QueryStatsResponse])
async def query_stats(
    query_stats_use_case: FromDishka[QueryStatsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[QueryStatsResponse]:
    """Support desk totals. Admin only."""
    principal = require_admin(
        await require_principal(get_current_user_use_case, token)
    )
    result = await query_stats_use_case.execute(QueryStatsRequest(admin=principal))
    return envelope(result)


@router.get("/{query_id}", response_model=Envelope[SupportQueryItem])
async def get_query(
    query_id: UUID,
    get_query_use_case: FromDishka[GetQueryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[SupportQueryItem]:
    """Read a query. Users may only read their own."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await get_query_use_case.execute(
        GetQueryRequest(query_id=str(query_id), requester=principal)
    )
    return envelope(result)


@router.put("/{query_id}/status", response_model=Envelope[SupportQueryItem])
async def update_query_status(
    query_id: UUID,
    request: UpdateQueryStatusAPIRequest,
    update_status_use_case: FromDishka[UpdateQueryStatusUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[SupportQueryItem]:
    """Triage a query. Admin only.

    Raises:
        InvalidOperationError: If the status would move backwards
    """
    principal = require_admin(
        await require_principal(get_current_user_use_case, token)
    )
    result = await update_status_use_case.execute(
        UpdateQueryStatusRequest(
            query_id=str(query_id),
            admin=principal,
            status=request.status,
            priority=request.priority,
            assigned_to=str(request.assigned_to) if request.assigned_to else None,
            tags=request.tags,
        )
    )
    return envelope(result)


@router.post("/{query_id}/respond", response_model=Envelope[SupportQueryItem])
async def respond_to_query(
    query_id: UUID,
    request: RespondAPIRequest,
    respond_use_case: FromDishka[RespondToQueryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[SupportQueryItem]:
    """Answer a query. Admin only."""
    principal = require_admin(
        await require_principal(get_current_user_use_case, token)
    )
    result = await respond_use_case.execute(
        RespondToQueryRequest(
            query_id=str(query_id), admin=principal, message=request.message
        )
    )
    return envelope(result)


@router.post("/{query_id}/rate", response_model=Envelope[SupportQueryItem])
async def rate_query(
    query_id: UUID,
    request: RateQueryAPIRequest,
    rate_query_use_case: FromDishka[RateQueryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[SupportQueryItem]:
    """Rate a resolved query, 1 to 5. Owner only.

    Raises:
        InvalidOperationError: If the query is not resolved yet
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await rate_query_use_case.execute(
        RateQueryRequest(
            query_id=str(query_id),
            user_id=str(principal.id),
            rating=request.rating,
            feedback=request.feedback,
        )
    )
    return envelope(result)


@router.delete("/{query_id}", response_model=Envelope[DeleteQueryResponse])
async def delete_query(
    query_id: UUID,
    delete_query_use_case: FromDishka[DeleteQueryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[DeleteQueryResponse]:
    """Permanently remove a query. Admin only."""
    principal = require_admin(
        await require_principal(get_current_user_use_case, token)
    )
    result = await delete_query_use_case.execute(
        DeleteQueryRequest(query_id=str(query_id), admin=principal)
    )
    return envelope(result)
