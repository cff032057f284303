"""Domain model entities for Bazaar."""

from bazaar.domain.model.answer import Answer, AnswerEdit
from bazaar.domain.model.comment import Comment
from bazaar.domain.model.conversation import Conversation
from bazaar.domain.model.item import Item
from bazaar.domain.model.message import Message, ReadReceipt
from bazaar.domain.model.question import Question, QuestionFlag
from bazaar.domain.model.stats import (
    AnswerStats,
    CategoryCount,
    QuestionStats,
    SupportQueryStats,
)
from bazaar.domain.model.support_query import (
    AdminResponse,
    SatisfactionRating,
    SupportQuery,
)
from bazaar.domain.model.user import User
from bazaar.domain.model.vote import Vote, VoteOutcome, VoteTally, resolve_toggle

__all__ = [
    "User",
    "Item",
    "Vote",
    "VoteTally",
    "VoteOutcome",
    "resolve_toggle",
    "Question",
    "QuestionFlag",
    "Answer",
    "AnswerEdit",
    "Comment",
    "Conversation",
    "Message",
    "ReadReceipt",
    "SupportQuery",
    "AdminResponse",
    "SatisfactionRating",
    "QuestionStats",
    "AnswerStats",
    "CategoryCount",
    "SupportQueryStats",
]
