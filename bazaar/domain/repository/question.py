"""Question repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import Field

from bazaar.domain.model.question import Question, QuestionFlag
from bazaar.domain.model.stats import QuestionStats
from bazaar.domain.value import (
    AnswerId,
    QuestionCategory,
    QuestionId,
    QuestionSortOrder,
    QuestionStatus,
    UserId,
)
from bazaar.domain.value.common import ValueObject


class QuestionFilter(ValueObject):
    """Criteria for question listings.

    ``tags`` matches any-of; ``search`` is a case-insensitive substring match
    against title, content and tags.
    """

    status: Optional[QuestionStatus] = QuestionStatus.ACTIVE
    category: Optional[QuestionCategory] = None
    tags: list[str] = Field(default_factory=list)
    search: Optional[str] = None
    author_id: Optional[UserId] = None


class QuestionRepository(ABC):
    """Repository for Question aggregate.

    Defines the contract for question persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, question_id: QuestionId, for_update: bool = False
    ) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier
            for_update: Lock the row until the transaction ends, serializing
                concurrent writers of the same question

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        criteria: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering, sorting and pagination.

        Args:
            criteria: Filter criteria
            sort: Sort order
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, criteria: QuestionFilter) -> int:
        """Count questions matching the given filter.

        Args:
            criteria: Filter criteria

        Returns:
            Total number of matching questions
        """
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a new question.

        Args:
            question: The question to save

        Returns:
            The saved question
        """
        pass

    @abstractmethod
    async def update(self, question: Question) -> Question:
        """Persist edits to title, content, tags, status and timestamps.

        Counters (votes, views, answers) are never written through this
        method; they have dedicated atomic operations.

        Args:
            question: The edited question

        Returns:
            The updated question
        """
        pass

    @abstractmethod
    async def update_vote_score(
        self, question_id: QuestionId, vote_score: int, last_activity: datetime
    ) -> None:
        """Store a recomputed vote score and bump last activity.

        Args:
            question_id: Question ID
            vote_score: Net score from the vote ledger
            last_activity: Timestamp of the vote
        """
        pass

    @abstractmethod
    async def register_answer(self, question_id: QuestionId, at: datetime) -> None:
        """Atomically count a new answer and bump last activity.

        Args:
            question_id: Question ID
            at: Timestamp of the answer
        """
        pass

    @abstractmethod
    async def set_best_answer(
        self, question_id: QuestionId, answer_id: AnswerId
    ) -> None:
        """Point the question at its best answer.

        Args:
            question_id: Question ID
            answer_id: The chosen answer
        """
        pass

    @abstractmethod
    async def record_view(
        self,
        question_id: QuestionId,
        viewer_id: UserId,
        viewed_at: datetime,
        window: timedelta,
        history_limit: int,
    ) -> bool:
        """Count a view unless the viewer was already counted within ``window``.

        The stored view history keeps the newest ``history_limit`` entries.

        Args:
            question_id: Question ID
            viewer_id: Viewing user
            viewed_at: Time of the view
            window: Deduplication window
            history_limit: Maximum number of history entries kept

        Returns:
            True if the view counter was incremented
        """
        pass

    @abstractmethod
    async def add_flag(self, flag: QuestionFlag) -> QuestionFlag:
        """Store a moderation flag.

        Args:
            flag: The flag to store

        Returns:
            The stored flag
        """
        pass

    @abstractmethod
    async def find_flags(self, question_id: QuestionId) -> List[QuestionFlag]:
        """List moderation flags filed against a question.

        Args:
            question_id: Question ID

        Returns:
            Flags, oldest first
        """
        pass

    @abstractmethod
    async def stats(self) -> QuestionStats:
        """Compute totals over all questions.

        Returns:
            Question statistics with an active-question category breakdown
        """
        pass
