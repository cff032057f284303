"""Edit answer use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bazaar.application.usecase.question.views import AnswerItem
from bazaar.domain.service import AnswerService
from bazaar.domain.value import AnswerId, UserId


class EditAnswerRequest(BaseModel):
    """Edit answer request."""

    answer_id: str  # UUID string
    editor_id: str  # User ID from authenticated user
    content: str
    reason: Optional[str] = None


class AnswerRevision(BaseModel):
    """Earlier revision of an answer."""

    content: str
    edited_at: datetime
    reason: Optional[str]


class EditAnswerResponse(BaseModel):
    """Edited answer with its revision history, oldest first."""

    answer: AnswerItem
    edit_history: list[AnswerRevision]


class EditAnswerUseCase:
    """Use case for the author revising their answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(self, request: EditAnswerRequest) -> EditAnswerResponse:
        """Execute edit answer flow.

        Raises:
            NotFoundError: If the answer does not exist or was deleted
            NotAuthorizedError: If the editor is not the author
            ValidationError: If the content or reason is invalid
        """
        answer = await self.answer_service.edit_answer(
            AnswerId(UUID(request.answer_id)),
            UserId(UUID(request.editor_id)),
            content=request.content,
            reason=request.reason,
        )
        return EditAnswerResponse(
            answer=AnswerItem.from_domain(answer),
            edit_history=[
                AnswerRevision(
                    content=edit.content, edited_at=edit.edited_at, reason=edit.reason
                )
                for edit in answer.edit_history
            ],
        )
