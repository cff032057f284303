"""In-memory repository implementations for testing."""

from .answer import InMemoryAnswerRepository
from .comment import InMemoryCommentRepository
from .conversation import InMemoryConversationRepository
from .item import InMemoryItemRepository
from .message import InMemoryMessageRepository
from .question import InMemoryQuestionRepository
from .support_query import InMemorySupportQueryRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryAnswerRepository",
    "InMemoryCommentRepository",
    "InMemoryConversationRepository",
    "InMemoryItemRepository",
    "InMemoryMessageRepository",
    "InMemoryQuestionRepository",
    "InMemorySupportQueryRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
