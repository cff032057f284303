"""Question use cases."""

from .change_question_status import (
    ChangeQuestionStatusRequest,
    ChangeQuestionStatusUseCase,
)
from .create_question import CreateQuestionRequest, CreateQuestionUseCase
from .delete_question import (
    DeleteQuestionRequest,
    DeleteQuestionResponse,
    DeleteQuestionUseCase,
)
from .flag_question import (
    FlagQuestionRequest,
    FlagQuestionResponse,
    FlagQuestionUseCase,
)
from .get_question import GetQuestionRequest, GetQuestionResponse, GetQuestionUseCase
from .list_questions import (
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
)
from .update_question import UpdateQuestionRequest, UpdateQuestionUseCase
from .views import AnswerItem, CommentItem, QuestionItem

__all__ = [
    "AnswerItem",
    "ChangeQuestionStatusRequest",
    "ChangeQuestionStatusUseCase",
    "CommentItem",
    "CreateQuestionRequest",
    "CreateQuestionUseCase",
    "DeleteQuestionRequest",
    "DeleteQuestionResponse",
    "DeleteQuestionUseCase",
    "FlagQuestionRequest",
    "FlagQuestionResponse",
    "FlagQuestionUseCase",
    "GetQuestionRequest",
    "GetQuestionResponse",
    "GetQuestionUseCase",
    "ListQuestionsRequest",
    "ListQuestionsResponse",
    "ListQuestionsUseCase",
    "QuestionItem",
    "UpdateQuestionRequest",
    "UpdateQuestionUseCase",
]
