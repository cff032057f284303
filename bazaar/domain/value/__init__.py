"""Domain value objects for Bazaar."""

from bazaar.domain.value.identifiers import (
    AnswerId,
    CommentId,
    ConversationId,
    ItemId,
    MessageId,
    QuestionId,
    SupportQueryId,
    UserId,
    VoteId,
)
from bazaar.domain.value.types import (
    ActivityType,
    AnswerAcceptance,
    AnswerStatus,
    FlagReason,
    MessageType,
    ParticipantRole,
    Principal,
    QuestionCategory,
    QuestionSortOrder,
    QuestionStatus,
    Role,
    SupportCategory,
    SupportPriority,
    SupportStatus,
    SystemMessageType,
    VotableType,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "ItemId",
    "QuestionId",
    "AnswerId",
    "CommentId",
    "VoteId",
    "ConversationId",
    "MessageId",
    "SupportQueryId",
    # Types
    "Role",
    "Principal",
    "VoteType",
    "VotableType",
    "QuestionCategory",
    "QuestionStatus",
    "QuestionSortOrder",
    "FlagReason",
    "AnswerStatus",
    "AnswerAcceptance",
    "ActivityType",
    "MessageType",
    "SystemMessageType",
    "ParticipantRole",
    "SupportCategory",
    "SupportPriority",
    "SupportStatus",
]
