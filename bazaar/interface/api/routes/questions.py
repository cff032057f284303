"""Community question routes."""

from typing import Literal, Optional, Union
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from bazaar.application.usecase.answer import CreateAnswerRequest, CreateAnswerUseCase
from bazaar.application.usecase.auth import GetCurrentUserUseCase
from bazaar.application.usecase.question import (
    AnswerItem,
    ChangeQuestionStatusRequest,
    ChangeQuestionStatusUseCase,
    CreateQuestionRequest,
    CreateQuestionUseCase,
    DeleteQuestionRequest,
    DeleteQuestionResponse,
    DeleteQuestionUseCase,
    FlagQuestionRequest,
    FlagQuestionResponse,
    FlagQuestionUseCase,
    GetQuestionRequest,
    GetQuestionResponse,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    QuestionItem,
    UpdateQuestionRequest,
    UpdateQuestionUseCase,
)
from bazaar.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from bazaar.domain.value import (
    FlagReason,
    QuestionCategory,
    QuestionSortOrder,
    QuestionStatus,
    VotableType,
    VoteType,
)
from bazaar.interface.api.auth import (
    optional_principal,
    require_admin,
    require_principal,
)
from bazaar.interface.api.errors import Envelope, envelope

router = APIRouter(
    prefix="/community/questions", tags=["community"], route_class=DishkaRoute
)


class CreateQuestionAPIRequest(BaseModel):
    """API request for asking a question."""

    title: str
    content: str
    category: QuestionCategory = QuestionCategory.GENERAL
    tags: list[str] = []


class UpdateQuestionAPIRequest(BaseModel):
    """API request for editing a question. Omitted fields are kept."""

    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[list[str]] = None


class VoteAPIRequest(BaseModel):
    """API request for voting on a question or answer."""

    vote_type: VoteType


class FlagQuestionAPIRequest(BaseModel):
    """API request for reporting a question."""

    reason: FlagReason
    description: Optional[str] = None


class ChangeStatusAPIRequest(BaseModel):
    """API request for a moderation status change."""

    status: QuestionStatus


class CreateAnswerAPIRequest(BaseModel):
    """API request for answering a question."""

    content: str


@router.get("", response_model=Envelope[ListQuestionsResponse])
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    category: Optional[Union[Literal["all"], QuestionCategory]] = Query(
        default=None, description="Category, or all for every category"
    ),
    tags: Optional[str] = Query(default=None, description="Comma-separated tags"),
    search: Optional[str] = None,
    question_status: QuestionStatus = Query(
        default=QuestionStatus.ACTIVE, alias="status"
    ),
    sort: QuestionSortOrder = QuestionSortOrder.RECENT,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> Envelope[ListQuestionsResponse]:
    """List questions. Public.

    Args:
        category: Only questions in this category (all means no filter)
        tags: Only questions carrying at least one of these tags
        search: Case-insensitive text search over title, content and tags
        question_status: Only questions in this status (default active)
        sort: recent, popular, mostAnswered or newest
        page: 1-based page number
        limit: Page size

    Returns:
        One page of questions with pagination info
    """
    tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else []
    result = await list_questions_use_case.execute(
        ListQuestionsRequest(
            category=None if category == "all" else category,
            tags=tag_list,
            search=search,
            status=question_status,
            sort=sort,
            page=page,
            limit=limit,
        )
    )
    return envelope(result)


@router.post(
    "",
    response_model=Envelope[QuestionItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    request: CreateQuestionAPIRequest,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[QuestionItem]:
    """Ask a question.

    Requires authentication.

    Raises:
        AuthenticationRequiredError: If not authenticated
        ValidationError: If the title, content or tags are invalid
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await create_question_use_case.execute(
        CreateQuestionRequest(
            author_id=str(principal.id),
            title=request.title,
            content=request.content,
            category=request.category,
            tags=request.tags,
        )
    )
    return envelope(result)


@router.get("/{question_id}", response_model=Envelope[GetQuestionResponse])
async def get_question(
    question_id: UUID,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[GetQuestionResponse]:
    """Read a question thread.

    Public. Authenticated readers also get their own votes, and the read
    counts as a view.
    """
    principal = await optional_principal(get_current_user_use_case, token)
    result = await get_question_use_case.execute(
        GetQuestionRequest(
            question_id=str(question_id),
            viewer_id=str(principal.id) if principal else None,
        )
    )
    return envelope(result)


@router.put("/{question_id}", response_model=Envelope[QuestionItem])
async def update_question(
    question_id: UUID,
    request: UpdateQuestionAPIRequest,
    update_question_use_case: FromDishka[UpdateQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[QuestionItem]:
    """Edit a question. Author only.

    Raises:
        AuthenticationRequiredError: If not authenticated
        ForbiddenError: If the caller is not the author
        NotFoundError: If the question does not exist
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await update_question_use_case.execute(
        UpdateQuestionRequest(
            question_id=str(question_id),
            editor_id=str(principal.id),
            title=request.title,
            content=request.content,
            tags=request.tags,
        )
    )
    return envelope(result)


@router.delete("/{question_id}", response_model=Envelope[DeleteQuestionResponse])
async def delete_question(
    question_id: UUID,
    delete_question_use_case: FromDishka[DeleteQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[DeleteQuestionResponse]:
    """Soft-delete a question. Author or admin only."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await delete_question_use_case.execute(
        DeleteQuestionRequest(question_id=str(question_id), requester=principal)
    )
    return envelope(result)


@router.post("/{question_id}/vote", response_model=Envelope[CastVoteResponse])
async def vote_question(
    question_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[CastVoteResponse]:
    """Toggle a vote on a question.

    Repeating the same vote retracts it; the opposite vote replaces it.

    Raises:
        SelfVoteError: If the caller wrote the question
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.QUESTION,
            votable_id=str(question_id),
            voter_id=str(principal.id),
            vote_type=request.vote_type,
        )
    )
    return envelope(result)


@router.post("/{question_id}/flag", response_model=Envelope[FlagQuestionResponse])
async def flag_question(
    question_id: UUID,
    request: FlagQuestionAPIRequest,
    flag_question_use_case: FromDishka[FlagQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[FlagQuestionResponse]:
    """Report a question to the moderators. The status is not changed."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await flag_question_use_case.execute(
        FlagQuestionRequest(
            question_id=str(question_id),
            reporter_id=str(principal.id),
            reason=request.reason,
            description=request.description,
        )
    )
    return envelope(result)


@router.put("/{question_id}/status", response_model=Envelope[QuestionItem])
async def change_question_status(
    question_id: UUID,
    request: ChangeStatusAPIRequest,
    change_status_use_case: FromDishka[ChangeQuestionStatusUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[QuestionItem]:
    """Moderate a question. Admin only.

    Raises:
        ForbiddenError: If the caller is not an administrator
        InvalidOperationError: If the transition is not allowed
    """
    principal = require_admin(
        await require_principal(get_current_user_use_case, token)
    )
    result = await change_status_use_case.execute(
        ChangeQuestionStatusRequest(
            question_id=str(question_id),
            moderator=principal,
            status=request.status,
        )
    )
    return envelope(result)


@router.post(
    "/{question_id}/answers",
    response_model=Envelope[AnswerItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: UUID,
    request: CreateAnswerAPIRequest,
    create_answer_use_case: FromDishka[CreateAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[AnswerItem]:
    """Answer a question.

    Raises:
        NotFoundError: If the question does not exist or is not active
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await create_answer_use_case.execute(
        CreateAnswerRequest(
            question_id=str(question_id),
            author_id=str(principal.id),
            content=request.content,
        )
    )
    return envelope(result)
