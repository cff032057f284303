"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from bazaar.domain.model.comment import Comment
from bazaar.domain.repository.comment import CommentRepository
from bazaar.domain.value import AnswerId, CommentId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_answers(self, answer_ids: Sequence[AnswerId]) -> list[Comment]:
        """Find the comments of several answers, oldest first."""
        wanted = set(answer_ids)
        comments = [c for c in self._comments.values() if c.answer_id in wanted]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_vote_score(self, comment_id: CommentId, vote_score: int) -> None:
        """Store a recomputed vote score."""
        comment = self._comments.get(comment_id)
        if comment is not None:
            self._comments[comment_id] = comment.model_copy(
                update={"vote_score": vote_score}
            )
