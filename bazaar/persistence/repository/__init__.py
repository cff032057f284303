"""PostgreSQL repository implementations."""

from bazaar.persistence.repository.answer import PostgresAnswerRepository
from bazaar.persistence.repository.comment import PostgresCommentRepository
from bazaar.persistence.repository.conversation import (
    PostgresConversationRepository,
)
from bazaar.persistence.repository.item import PostgresItemRepository
from bazaar.persistence.repository.message import PostgresMessageRepository
from bazaar.persistence.repository.question import PostgresQuestionRepository
from bazaar.persistence.repository.support_query import (
    PostgresSupportQueryRepository,
)
from bazaar.persistence.repository.user import PostgresUserRepository
from bazaar.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresItemRepository",
    "PostgresVoteRepository",
    "PostgresQuestionRepository",
    "PostgresAnswerRepository",
    "PostgresCommentRepository",
    "PostgresConversationRepository",
    "PostgresMessageRepository",
    "PostgresSupportQueryRepository",
]
