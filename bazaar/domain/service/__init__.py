"""Domain services."""

from .answer_service import AnswerService
from .auth_service import AuthService
from .base import Service
from .comment_service import CommentService
from .conversation_service import ConversationService
from .jwt_service import JWTService
from .message_service import MessageService
from .question_service import QuestionService
from .support_query_service import SupportQueryService
from .vote_service import VoteService

__all__ = [
    "AnswerService",
    "AuthService",
    "CommentService",
    "ConversationService",
    "JWTService",
    "MessageService",
    "QuestionService",
    "Service",
    "SupportQueryService",
    "VoteService",
]
