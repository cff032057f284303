"""Domain layer DI providers."""

from dishka import Scope, provide

from bazaar.config import AuthSettings, CommunitySettings
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
from bazaar.domain.service import (
    AnswerService,
    AuthService,
    CommentService,
    ConversationService,
    JWTService,
    MessageService,
    QuestionService,
    SupportQueryService,
    VoteService,
)
from bazaar.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_auth_service(
        self, jwt_service: JWTService, user_repository: UserRepository
    ) -> AuthService:
        """Provide credential verification domain service."""
        return AuthService(jwt_service=jwt_service, user_repository=user_repository)

    @provide
    def get_question_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        community_settings: CommunitySettings,
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            community_settings=community_settings,
        )

    @provide
    def get_answer_service(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
        community_settings: CommunitySettings,
    ) -> AnswerService:
        """Provide answer domain service."""
        return AnswerService(
            answer_repository=answer_repository,
            question_repository=question_repository,
            community_settings=community_settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            answer_repository=answer_repository,
            question_repository=question_repository,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            question_repository=question_repository,
            answer_repository=answer_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_conversation_service(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        item_repository: ItemRepository,
    ) -> ConversationService:
        """Provide conversation domain service."""
        return ConversationService(
            conversation_repository=conversation_repository,
            message_repository=message_repository,
            item_repository=item_repository,
        )

    @provide
    def get_message_service(
        self,
        message_repository: MessageRepository,
        conversation_repository: ConversationRepository,
    ) -> MessageService:
        """Provide message domain service."""
        return MessageService(
            message_repository=message_repository,
            conversation_repository=conversation_repository,
        )

    @provide
    def get_support_query_service(
        self,
        support_query_repository: SupportQueryRepository,
        user_repository: UserRepository,
    ) -> SupportQueryService:
        """Provide support desk domain service."""
        return SupportQueryService(
            support_query_repository=support_query_repository,
            user_repository=user_repository,
        )
