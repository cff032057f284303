"""Answer use cases."""

from .create_answer import CreateAnswerRequest, CreateAnswerUseCase
from .edit_answer import (
    AnswerRevision,
    EditAnswerRequest,
    EditAnswerResponse,
    EditAnswerUseCase,
)
from .mark_best_answer import MarkBestAnswerRequest, MarkBestAnswerUseCase

__all__ = [
    "AnswerRevision",
    "CreateAnswerRequest",
    "CreateAnswerUseCase",
    "EditAnswerRequest",
    "EditAnswerResponse",
    "EditAnswerUseCase",
    "MarkBestAnswerRequest",
    "MarkBestAnswerUseCase",
]
