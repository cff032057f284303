"""Flag question use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import QuestionService
from bazaar.domain.value import FlagReason, QuestionId, UserId


class FlagQuestionRequest(BaseModel):
    """Flag question request."""

    question_id: str  # UUID string
    reporter_id: str  # User ID from authenticated user
    reason: FlagReason
    description: Optional[str] = None


class FlagQuestionResponse(BaseModel):
    """Flag question response."""

    question_id: str
    reason: FlagReason
    flagged_at: datetime


class FlagQuestionUseCase:
    """Use case for reporting a question to the moderators."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: FlagQuestionRequest) -> FlagQuestionResponse:
        """Execute flag question flow.

        The question's status is left unchanged.

        Raises:
            NotFoundError: If the question does not exist or was deleted
            ValidationError: If the description is too long
        """
        flag = await self.question_service.flag_question(
            QuestionId(UUID(request.question_id)),
            UserId(UUID(request.reporter_id)),
            reason=request.reason,
            description=request.description,
        )
        return FlagQuestionResponse(
            question_id=str(flag.question_id),
            reason=flag.reason,
            flagged_at=flag.flagged_at,
        )
