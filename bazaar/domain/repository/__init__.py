"""Repository interfaces for the Bazaar domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from bazaar.domain.repository.answer import AnswerRepository
from bazaar.domain.repository.comment import CommentRepository
from bazaar.domain.repository.conversation import ConversationRepository
from bazaar.domain.repository.item import ItemRepository
from bazaar.domain.repository.message import MessageRepository
from bazaar.domain.repository.question import QuestionFilter, QuestionRepository
from bazaar.domain.repository.support_query import (
    SupportQueryFilter,
    SupportQueryRepository,
)
from bazaar.domain.repository.user import UserRepository
from bazaar.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "ItemRepository",
    "VoteRepository",
    "QuestionRepository",
    "QuestionFilter",
    "AnswerRepository",
    "CommentRepository",
    "ConversationRepository",
    "MessageRepository",
    "SupportQueryRepository",
    "SupportQueryFilter",
]
