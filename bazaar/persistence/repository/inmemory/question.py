"""In-memory question repository for testing."""

from collections import Counter
from datetime import datetime, timedelta
from typing import Optional

from bazaar.domain.model.question import Question, QuestionFlag
from bazaar.domain.model.stats import CategoryCount, QuestionStats
from bazaar.domain.repository.question import QuestionFilter, QuestionRepository
from bazaar.domain.value import (
    AnswerId,
    QuestionId,
    QuestionSortOrder,
    QuestionStatus,
    UserId,
)


def _matches(question: Question, criteria: QuestionFilter) -> bool:
    if criteria.status is not None and question.status != criteria.status:
        return False
    if criteria.category is not None and question.category != criteria.category:
        return False
    if criteria.author_id is not None and question.author_id != criteria.author_id:
        return False
    if criteria.tags and not set(criteria.tags) & set(question.tags):
        return False
    if criteria.search:
        needle = criteria.search.lower()
        haystacks = [question.title, question.content, " ".join(question.tags)]
        if not any(needle in text.lower() for text in haystacks):
            return False
    return True


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self) -> None:
        self._questions: dict[QuestionId, Question] = {}
        self._views: dict[QuestionId, list[tuple[UserId, datetime]]] = {}
        self._flags: list[QuestionFlag] = []

    async def find_by_id(
        self, question_id: QuestionId, for_update: bool = False
    ) -> Optional[Question]:
        """Find a question by ID."""
        return self._questions.get(question_id)

    async def find_all(
        self,
        criteria: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering, sorting and pagination."""
        questions = [q for q in self._questions.values() if _matches(q, criteria)]

        # Sort
        if sort == QuestionSortOrder.POPULAR:
            questions.sort(key=lambda q: (q.vote_score, q.view_count), reverse=True)
        elif sort == QuestionSortOrder.MOST_ANSWERED:
            questions.sort(key=lambda q: (q.answer_count, q.created_at), reverse=True)
        elif sort == QuestionSortOrder.NEWEST:
            questions.sort(key=lambda q: q.created_at, reverse=True)
        else:
            questions.sort(key=lambda q: (q.is_pinned, q.last_activity), reverse=True)

        # Paginate
        return questions[offset : offset + limit]

    async def count(self, criteria: QuestionFilter) -> int:
        """Count questions matching the given filter."""
        return sum(1 for q in self._questions.values() if _matches(q, criteria))

    async def save(self, question: Question) -> Question:
        """Save a new question."""
        self._questions[question.id] = question
        return question

    async def update(self, question: Question) -> Question:
        """Persist edits; counters stay as stored."""
        stored = self._questions[question.id]
        self._questions[question.id] = stored.model_copy(
            update={
                "title": question.title,
                "content": question.content,
                "category": question.category,
                "tags": list(question.tags),
                "status": question.status,
                "is_pinned": question.is_pinned,
                "last_activity": question.last_activity,
                "updated_at": question.updated_at,
            }
        )
        return question

    def _patch(self, question_id: QuestionId, **changes: object) -> None:
        question = self._questions.get(question_id)
        if question is not None:
            self._questions[question_id] = question.model_copy(update=changes)

    async def update_vote_score(
        self, question_id: QuestionId, vote_score: int, last_activity: datetime
    ) -> None:
        """Store a recomputed vote score and bump last activity."""
        self._patch(question_id, vote_score=vote_score, last_activity=last_activity)

    async def register_answer(self, question_id: QuestionId, at: datetime) -> None:
        """Count a new answer and bump last activity."""
        question = self._questions.get(question_id)
        if question is not None:
            self._patch(
                question_id, answer_count=question.answer_count + 1, last_activity=at
            )

    async def set_best_answer(
        self, question_id: QuestionId, answer_id: AnswerId
    ) -> None:
        """Point the question at its best answer."""
        self._patch(question_id, best_answer_id=answer_id)

    async def record_view(
        self,
        question_id: QuestionId,
        viewer_id: UserId,
        viewed_at: datetime,
        window: timedelta,
        history_limit: int,
    ) -> bool:
        """Count a view unless the viewer was already counted within ``window``."""
        history = self._views.setdefault(question_id, [])
        if any(
            viewer == viewer_id and seen_at > viewed_at - window
            for viewer, seen_at in history
        ):
            return False

        history.append((viewer_id, viewed_at))
        del history[:-history_limit]
        question = self._questions.get(question_id)
        if question is not None:
            self._patch(question_id, view_count=question.view_count + 1)
        return True

    def view_history(self, question_id: QuestionId) -> list[tuple[UserId, datetime]]:
        """Stored view history of a question (test inspection helper)."""
        return list(self._views.get(question_id, []))

    async def add_flag(self, flag: QuestionFlag) -> QuestionFlag:
        """Store a moderation flag."""
        self._flags.append(flag)
        return flag

    async def find_flags(self, question_id: QuestionId) -> list[QuestionFlag]:
        """List moderation flags filed against a question."""
        return [f for f in self._flags if f.question_id == question_id]

    async def stats(self) -> QuestionStats:
        """Compute totals over all non-deleted questions."""
        questions = [q for q in self._questions.values() if not q.is_deleted]
        active = [q for q in questions if q.status == QuestionStatus.ACTIVE]
        categories = Counter(q.category for q in active)
        return QuestionStats(
            total_questions=len(questions),
            active_questions=len(active),
            answered_questions=sum(1 for q in questions if q.is_answered),
            total_views=sum(q.view_count for q in questions),
            total_votes=sum(q.vote_score for q in questions),
            category_breakdown=[
                CategoryCount(category=category, count=count)
                for category, count in sorted(
                    categories.items(), key=lambda item: (-item[1], item[0].value)
                )
            ],
        )
