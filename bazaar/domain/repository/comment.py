"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from bazaar.domain.model.comment import Comment
from bazaar.domain.value import AnswerId, CommentId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier
            for_update: Lock the row until the transaction ends

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_answers(self, answer_ids: Sequence[AnswerId]) -> List[Comment]:
        """Find the comments of several answers in one query, oldest first.

        Args:
            answer_ids: Answer IDs

        Returns:
            Comments of all given answers
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_vote_score(self, comment_id: CommentId, vote_score: int) -> None:
        """Store a recomputed vote score.

        Args:
            comment_id: Comment ID
            vote_score: Upvote count from the vote ledger
        """
        pass
