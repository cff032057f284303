"""Domain value types for Bazaar.

Enumerations describe every closed set of states the domain knows about.
State machines (question status, support ticket status) carry their own
transition tables so the rules live next to the states they govern.
"""

from enum import Enum

from bazaar.domain.value.common import ValueObject
from bazaar.domain.value.identifiers import UserId


class Role(str, Enum):
    """Role of an authenticated principal."""

    USER = "user"
    ADMIN = "admin"


class Principal(ValueObject):
    """Authenticated identity attached to a request."""

    id: UserId
    role: Role
    name: str
    is_verified: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class VoteType(str, Enum):
    """Direction of a vote.

    Comments only accept upvotes.
    """

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"
    COMMENT = "comment"

    @property
    def allows_downvotes(self) -> bool:
        return self != VotableType.COMMENT


class QuestionCategory(str, Enum):
    """Topic a community question is filed under."""

    PROPERTY_BUYING = "property-buying"
    PROPERTY_SELLING = "property-selling"
    RENTAL = "rental"
    INVESTMENT = "investment"
    LEGAL = "legal"
    FINANCING = "financing"
    MAINTENANCE = "maintenance"
    TECHNOLOGY = "technology"
    GENERAL = "general"
    MARKET_TRENDS = "market-trends"


class QuestionStatus(str, Enum):
    """Lifecycle state of a question.

    ``deleted`` is terminal. ``pending-review`` is only ever entered through
    an explicit moderation action, never automatically on flagging.
    """

    ACTIVE = "active"
    CLOSED = "closed"
    DELETED = "deleted"
    PENDING_REVIEW = "pending-review"

    def can_transition_to(self, target: "QuestionStatus") -> bool:
        return target in _QUESTION_TRANSITIONS[self]


_QUESTION_TRANSITIONS: dict[QuestionStatus, frozenset[QuestionStatus]] = {
    QuestionStatus.ACTIVE: frozenset(
        {QuestionStatus.CLOSED, QuestionStatus.DELETED, QuestionStatus.PENDING_REVIEW}
    ),
    QuestionStatus.PENDING_REVIEW: frozenset(
        {QuestionStatus.ACTIVE, QuestionStatus.CLOSED, QuestionStatus.DELETED}
    ),
    QuestionStatus.CLOSED: frozenset({QuestionStatus.ACTIVE, QuestionStatus.DELETED}),
    QuestionStatus.DELETED: frozenset(),
}


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    RECENT = "recent"  # Pinned first, then last activity DESC
    POPULAR = "popular"  # Vote score DESC, then view count DESC
    MOST_ANSWERED = "mostAnswered"  # Answer count DESC, then created_at DESC
    NEWEST = "newest"  # created_at DESC (activity feeds)


class FlagReason(str, Enum):
    """Reason given when a question is flagged for moderation."""

    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    OFF_TOPIC = "off-topic"
    DUPLICATE = "duplicate"
    OTHER = "other"


class AnswerStatus(str, Enum):
    """Lifecycle state of an answer."""

    ACTIVE = "active"
    DELETED = "deleted"
    PENDING_REVIEW = "pending-review"
    HIDDEN = "hidden"


class AnswerAcceptance(str, Enum):
    """Whether an answer was chosen as the best one by the question author."""

    NORMAL = "normal"
    BEST = "best"


class ActivityType(str, Enum):
    """Filter for a user's community activity feed."""

    ALL = "all"
    QUESTIONS = "questions"
    ANSWERS = "answers"


class MessageType(str, Enum):
    """Kind of chat message."""

    TEXT = "text"
    IMAGE = "image"
    SYSTEM = "system"


class SystemMessageType(str, Enum):
    """Subtype of a system chat message."""

    JOIN = "join"
    LEAVE = "leave"
    ITEM_SOLD = "item_sold"
    ITEM_UNAVAILABLE = "item_unavailable"


class ParticipantRole(str, Enum):
    """Side of a conversation a participant is on."""

    SELLER = "seller"
    BUYER = "buyer"


class SupportCategory(str, Enum):
    """Topic of a support desk query."""

    GENERAL = "general"
    PROPERTY = "property"
    ITEM = "item"
    TECHNICAL = "technical"
    BILLING = "billing"
    COMPLAINT = "complaint"
    SUGGESTION = "suggestion"


class SupportPriority(str, Enum):
    """Triage priority of a support desk query."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class SupportStatus(str, Enum):
    """Lifecycle state of a support desk query.

    The workflow is linear: a ticket may move forward (skipping steps is
    allowed) but never back, and ``closed`` is terminal.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    def can_transition_to(self, target: "SupportStatus") -> bool:
        order = list(SupportStatus)
        return order.index(target) >= order.index(self) and self != SupportStatus.CLOSED
