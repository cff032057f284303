"""Community answer and comment routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from bazaar.application.usecase.answer import (
    EditAnswerRequest,
    EditAnswerResponse,
    EditAnswerUseCase,
    MarkBestAnswerRequest,
    MarkBestAnswerUseCase,
)
from bazaar.application.usecase.auth import GetCurrentUserUseCase
from bazaar.application.usecase.comment import AddCommentRequest, AddCommentUseCase
from bazaar.application.usecase.question import AnswerItem, CommentItem
from bazaar.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from bazaar.domain.value import VotableType, VoteType
from bazaar.interface.api.auth import require_principal
from bazaar.interface.api.errors import Envelope, envelope

router = APIRouter(
    prefix="/community/answers", tags=["community"], route_class=DishkaRoute
)


class EditAnswerAPIRequest(BaseModel):
    """API request for revising an answer."""

    content: str
    reason: Optional[str] = None


class AnswerVoteAPIRequest(BaseModel):
    """API request for voting on an answer."""

    vote_type: VoteType


class AddCommentAPIRequest(BaseModel):
    """API request for commenting on an answer."""

    content: str


@router.put("/{answer_id}", response_model=Envelope[EditAnswerResponse])
async def edit_answer(
    answer_id: UUID,
    request: EditAnswerAPIRequest,
    edit_answer_use_case: FromDishka[EditAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[EditAnswerResponse]:
    """Revise an answer. Author only.

    The replaced content is kept in a bounded edit history.
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await edit_answer_use_case.execute(
        EditAnswerRequest(
            answer_id=str(answer_id),
            editor_id=str(principal.id),
            content=request.content,
            reason=request.reason,
        )
    )
    return envelope(result)


@router.post("/{answer_id}/vote", response_model=Envelope[CastVoteResponse])
async def vote_answer(
    answer_id: UUID,
    request: AnswerVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[CastVoteResponse]:
    """Toggle a vote on an answer.

    Raises:
        SelfVoteError: If the caller wrote the answer
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.ANSWER,
            votable_id=str(answer_id),
            voter_id=str(principal.id),
            vote_type=request.vote_type,
        )
    )
    return envelope(result)


@router.post("/{answer_id}/mark-best", response_model=Envelope[AnswerItem])
async def mark_best_answer(
    answer_id: UUID,
    mark_best_use_case: FromDishka[MarkBestAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[AnswerItem]:
    """Accept an answer as the best one. Question author only.

    Any previously accepted answer on the question loses its flag.
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await mark_best_use_case.execute(
        MarkBestAnswerRequest(answer_id=str(answer_id), requester_id=str(principal.id))
    )
    return envelope(result)


@router.post(
    "/{answer_id}/comments",
    response_model=Envelope[CommentItem],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    answer_id: UUID,
    request: AddCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[CommentItem]:
    """Comment on an answer."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await add_comment_use_case.execute(
        AddCommentRequest(
            answer_id=str(answer_id),
            author_id=str(principal.id),
            content=request.content,
        )
    )
    return envelope(result)


@router.post(
    "/{answer_id}/comments/{comment_id}/vote",
    response_model=Envelope[CastVoteResponse],
)
async def vote_comment(
    answer_id: UUID,
    comment_id: UUID,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[CastVoteResponse]:
    """Toggle an upvote on a comment."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.COMMENT,
            votable_id=str(comment_id),
            voter_id=str(principal.id),
            answer_id=str(answer_id),
        )
    )
    return envelope(result)
