"""Mock persistence providers for testing."""

from dishka import Scope, provide

from bazaar.domain.repository import (
    AnswerRepository,
    CommentRepository,
    ConversationRepository,
    ItemRepository,
    MessageRepository,
    QuestionRepository,
    SupportQueryRepository,
    UserRepository,
    VoteRepository,
)
from bazaar.persistence.repository.inmemory import (
    InMemoryAnswerRepository,
    InMemoryCommentRepository,
    InMemoryConversationRepository,
    InMemoryItemRepository,
    InMemoryMessageRepository,
    InMemoryQuestionRepository,
    InMemorySupportQueryRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from bazaar.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so every request against one container shares the same
    data; build a fresh container per test for isolation.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_item_repository(self) -> ItemRepository:
        """Provide in-memory item repository."""
        return InMemoryItemRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_question_repository(self) -> QuestionRepository:
        """Provide in-memory question repository."""
        return InMemoryQuestionRepository()

    @provide(scope=Scope.APP)
    def get_answer_repository(self) -> AnswerRepository:
        """Provide in-memory answer repository."""
        return InMemoryAnswerRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_conversation_repository(self) -> ConversationRepository:
        """Provide in-memory conversation repository."""
        return InMemoryConversationRepository()

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        """Provide in-memory message repository."""
        return InMemoryMessageRepository()

    @provide(scope=Scope.APP)
    def get_support_query_repository(self) -> SupportQueryRepository:
        """Provide in-memory support query repository."""
        return InMemorySupportQueryRepository()
