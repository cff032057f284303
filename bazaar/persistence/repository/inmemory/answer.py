"""In-memory answer repository for testing."""

from typing import Optional

from bazaar.domain.model.answer import Answer
from bazaar.domain.model.stats import AnswerStats
from bazaar.domain.repository.answer import AnswerRepository
from bazaar.domain.value import (
    AnswerAcceptance,
    AnswerId,
    AnswerStatus,
    QuestionId,
    UserId,
)


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self) -> None:
        self._answers: dict[AnswerId, Answer] = {}

    async def find_by_id(
        self, answer_id: AnswerId, for_update: bool = False
    ) -> Optional[Answer]:
        """Find an answer by ID."""
        return self._answers.get(answer_id)

    async def find_by_question(
        self,
        question_id: QuestionId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
    ) -> list[Answer]:
        """Find the answers of a question, best first."""
        answers = [
            a
            for a in self._answers.values()
            if a.question_id == question_id and (status is None or a.status == status)
        ]
        answers.sort(
            key=lambda a: (a.is_best_answer, a.vote_score, a.created_at), reverse=True
        )
        return answers

    def _by_author(
        self, author_id: UserId, status: Optional[AnswerStatus]
    ) -> list[Answer]:
        return [
            a
            for a in self._answers.values()
            if a.author_id == author_id and (status is None or a.status == status)
        ]

    async def find_by_author(
        self,
        author_id: UserId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Answer]:
        """Find answers by a specific author, newest first."""
        answers = self._by_author(author_id, status)
        answers.sort(key=lambda a: a.created_at, reverse=True)
        return answers[offset : offset + limit]

    async def count_by_author(
        self,
        author_id: UserId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
    ) -> int:
        """Count answers by a specific author."""
        return len(self._by_author(author_id, status))

    async def save(self, answer: Answer) -> Answer:
        """Save a new answer."""
        self._answers[answer.id] = answer
        return answer

    async def update(self, answer: Answer) -> Answer:
        """Persist edits to content, edit history and status."""
        stored = self._answers[answer.id]
        self._answers[answer.id] = stored.model_copy(
            update={
                "content": answer.content,
                "status": answer.status,
                "edit_history": list(answer.edit_history),
                "last_edited_at": answer.last_edited_at,
                "updated_at": answer.updated_at,
            }
        )
        return answer

    async def update_vote_score(self, answer_id: AnswerId, vote_score: int) -> None:
        """Store a recomputed vote score."""
        answer = self._answers.get(answer_id)
        if answer is not None:
            self._answers[answer_id] = answer.model_copy(
                update={"vote_score": vote_score}
            )

    async def mark_best(self, question_id: QuestionId, answer_id: AnswerId) -> None:
        """Make ``answer_id`` the only best answer of its question."""
        for answer in list(self._answers.values()):
            if answer.question_id != question_id:
                continue
            acceptance = (
                AnswerAcceptance.BEST
                if answer.id == answer_id
                else AnswerAcceptance.NORMAL
            )
            if answer.acceptance != acceptance:
                self._answers[answer.id] = answer.model_copy(
                    update={"acceptance": acceptance}
                )

    async def stats(self) -> AnswerStats:
        """Compute totals over active answers."""
        active = [a for a in self._answers.values() if a.status == AnswerStatus.ACTIVE]
        return AnswerStats(
            total_answers=len(active),
            best_answers=sum(1 for a in active if a.is_best_answer),
        )
