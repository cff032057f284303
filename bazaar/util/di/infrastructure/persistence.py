"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from bazaar.config import Settings
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
from bazaar.persistence.database import create_engine, create_session_factory
from bazaar.persistence.repository import (
    PostgresAnswerRepository,
    PostgresCommentRepository,
    PostgresConversationRepository,
    PostgresItemRepository,
    PostgresMessageRepository,
    PostgresQuestionRepository,
    PostgresSupportQueryRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from bazaar.util.di.base import ProviderBase
from bazaar.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Committed when the request scope closes normally, rolled back when an
        exception propagates out of it.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_item_repository(self, session: AsyncSession) -> ItemRepository:
        """Provide Item repository."""
        return PostgresItemRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_question_repository(self, session: AsyncSession) -> QuestionRepository:
        """Provide Question repository."""
        return PostgresQuestionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_answer_repository(self, session: AsyncSession) -> AnswerRepository:
        """Provide Answer repository."""
        return PostgresAnswerRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(
        self, session: AsyncSession
    ) -> ConversationRepository:
        """Provide Conversation repository."""
        return PostgresConversationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, session: AsyncSession) -> MessageRepository:
        """Provide Message repository."""
        return PostgresMessageRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_support_query_repository(
        self, session: AsyncSession
    ) -> SupportQueryRepository:
        """Provide SupportQuery repository."""
        return PostgresSupportQueryRepository(session)
