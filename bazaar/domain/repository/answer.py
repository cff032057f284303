"""Answer repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from bazaar.domain.model.answer import Answer
from bazaar.domain.model.stats import AnswerStats
from bazaar.domain.value import AnswerId, AnswerStatus, QuestionId, UserId


class AnswerRepository(ABC):
    """Repository for Answer entity.

    Defines the contract for answer persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, answer_id: AnswerId, for_update: bool = False
    ) -> Optional[Answer]:
        """Find an answer by ID.

        Args:
            answer_id: The answer's unique identifier
            for_update: Lock the row until the transaction ends

        Returns:
            The answer if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_question(
        self,
        question_id: QuestionId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
    ) -> List[Answer]:
        """Find the answers of a question.

        Answers are ordered best first, then by vote score, then newest.

        Args:
            question_id: The question ID
            status: Only answers in this status (None for all)

        Returns:
            Ordered list of answers
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Answer]:
        """Find answers by a specific author, newest first.

        Args:
            author_id: The author's user ID
            status: Only answers in this status (None for all)
            limit: Maximum number of answers to return
            offset: Number of answers to skip

        Returns:
            List of answers by the author
        """
        pass

    @abstractmethod
    async def count_by_author(
        self,
        author_id: UserId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
    ) -> int:
        """Count answers by a specific author.

        Args:
            author_id: The author's user ID
            status: Only answers in this status (None for all)

        Returns:
            Number of answers
        """
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Save a new answer.

        Args:
            answer: The answer to save

        Returns:
            The saved answer
        """
        pass

    @abstractmethod
    async def update(self, answer: Answer) -> Answer:
        """Persist edits to content, edit history and status.

        Args:
            answer: The edited answer

        Returns:
            The updated answer
        """
        pass

    @abstractmethod
    async def update_vote_score(self, answer_id: AnswerId, vote_score: int) -> None:
        """Store a recomputed vote score.

        Args:
            answer_id: Answer ID
            vote_score: Net score from the vote ledger
        """
        pass

    @abstractmethod
    async def mark_best(self, question_id: QuestionId, answer_id: AnswerId) -> None:
        """Make ``answer_id`` the only best answer of its question.

        Clears the best state from every other answer of the question and
        sets it on the target in the caller's transaction.

        Args:
            question_id: The question both answers belong to
            answer_id: The answer to mark
        """
        pass

    @abstractmethod
    async def stats(self) -> AnswerStats:
        """Compute totals over all answers.

        Returns:
            Answer statistics
        """
        pass
