"""List questions use case."""

import logfire
from typing import Optional

from pydantic import BaseModel, Field

from bazaar.application.usecase.pagination import PageInfo, offset_for
from bazaar.domain.repository import QuestionFilter, QuestionRepository
from bazaar.domain.value import QuestionCategory, QuestionSortOrder, QuestionStatus

from .views import QuestionItem


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    category: Optional[QuestionCategory] = None  # None lists every category
    tags: list[str] = []
    search: Optional[str] = None
    status: QuestionStatus = QuestionStatus.ACTIVE
    sort: QuestionSortOrder = QuestionSortOrder.RECENT
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    questions: list[QuestionItem]
    pagination: PageInfo


class ListQuestionsUseCase:
    """Use case for browsing questions with filters, sorting and pages."""

    def __init__(self, question_repository: QuestionRepository) -> None:
        """Initialize list questions use case.

        Args:
            question_repository: Question repository
        """
        self.question_repository = question_repository

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Args:
            request: Filters, sort order and page

        Returns:
            One page of questions and pagination metadata
        """
        with logfire.span(
            "list_questions.execute",
            sort=request.sort.value,
            category=request.category.value if request.category else None,
            page=request.page,
            limit=request.limit,
        ):
            criteria = QuestionFilter(
                status=request.status,
                category=request.category,
                tags=request.tags,
                search=request.search.strip() if request.search else None,
            )

            total = await self.question_repository.count(criteria)
            questions = await self.question_repository.find_all(
                criteria,
                sort=request.sort,
                limit=request.limit,
                offset=offset_for(request.page, request.limit),
            )

            logfire.info("Questions listed", count=len(questions), total=total)

            return ListQuestionsResponse(
                questions=[QuestionItem.from_domain(q) for q in questions],
                pagination=PageInfo.build(request.page, request.limit, total),
            )
