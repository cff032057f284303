"""Strongly typed identifiers for Bazaar domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Identity and catalog
UserId = NewType("UserId", UUID)
ItemId = NewType("ItemId", UUID)

# Community Q&A
QuestionId = NewType("QuestionId", UUID)
AnswerId = NewType("AnswerId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)

# Chat
ConversationId = NewType("ConversationId", UUID)
MessageId = NewType("MessageId", UUID)

# Support desk
SupportQueryId = NewType("SupportQueryId", UUID)
