"""Read-only aggregates computed by repositories for dashboards."""

from bazaar.domain.value import QuestionCategory, SupportCategory, SupportPriority
from bazaar.domain.value.common import ValueObject


class CategoryCount(ValueObject):
    """Number of active questions in a category."""

    category: QuestionCategory
    count: int


class QuestionStats(ValueObject):
    """Totals over all questions."""

    total_questions: int = 0
    active_questions: int = 0
    answered_questions: int = 0
    total_views: int = 0
    total_votes: int = 0
    category_breakdown: list[CategoryCount] = []


class AnswerStats(ValueObject):
    """Totals over all answers."""

    total_answers: int = 0
    best_answers: int = 0


class SupportQueryStats(ValueObject):
    """Totals over all support queries."""

    total_queries: int = 0
    pending_queries: int = 0
    in_progress_queries: int = 0
    resolved_queries: int = 0
    closed_queries: int = 0
    urgent_queries: int = 0
    by_category: dict[SupportCategory, int] = {}
    by_priority: dict[SupportPriority, int] = {}
