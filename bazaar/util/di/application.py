"""Application layer DI providers."""

from dishka import Scope, provide

from bazaar.application.usecase.answer import (
    CreateAnswerUseCase,
    EditAnswerUseCase,
    MarkBestAnswerUseCase,
)
from bazaar.application.usecase.auth import GetCurrentUserUseCase
from bazaar.application.usecase.chat import (
    GetOrCreateConversationUseCase,
    ListConversationsUseCase,
    ListMessagesUseCase,
    SendMessageUseCase,
    UnreadCountUseCase,
)
from bazaar.application.usecase.comment import AddCommentUseCase
from bazaar.application.usecase.community import (
    CommunityStatsUseCase,
    UserActivityUseCase,
)
from bazaar.application.usecase.question import (
    ChangeQuestionStatusUseCase,
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    FlagQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    UpdateQuestionUseCase,
)
from bazaar.application.usecase.support import (
    DeleteQueryUseCase,
    GetQueryUseCase,
    ListQueriesUseCase,
    QueryStatsUseCase,
    RateQueryUseCase,
    RespondToQueryUseCase,
    SubmitQueryUseCase,
    UpdateQueryStatusUseCase,
)
from bazaar.application.usecase.vote import CastVoteUseCase
from bazaar.config import CommunitySettings
from bazaar.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
)
from bazaar.domain.service import (
    AnswerService,
    AuthService,
    CommentService,
    ConversationService,
    MessageService,
    QuestionService,
    SupportQueryService,
    VoteService,
)
from bazaar.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, auth_service: AuthService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(auth_service=auth_service)

    # Question use cases
    @provide(scope=Scope.REQUEST)
    def get_create_question_use_case(
        self, question_service: QuestionService
    ) -> CreateQuestionUseCase:
        """Provide create question use case."""
        return CreateQuestionUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_list_questions_use_case(
        self, question_repository: QuestionRepository
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(question_repository=question_repository)

    @provide(scope=Scope.REQUEST)
    def get_get_question_use_case(
        self,
        question_service: QuestionService,
        vote_service: VoteService,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
    ) -> GetQuestionUseCase:
        """Provide get question use case."""
        return GetQuestionUseCase(
            question_service=question_service,
            vote_service=vote_service,
            answer_repository=answer_repository,
            comment_repository=comment_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_question_use_case(
        self, question_service: QuestionService
    ) -> UpdateQuestionUseCase:
        """Provide update question use case."""
        return UpdateQuestionUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_question_use_case(
        self, question_service: QuestionService
    ) -> DeleteQuestionUseCase:
        """Provide delete question use case."""
        return DeleteQuestionUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_change_question_status_use_case(
        self, question_service: QuestionService
    ) -> ChangeQuestionStatusUseCase:
        """Provide question moderation use case."""
        return ChangeQuestionStatusUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_flag_question_use_case(
        self, question_service: QuestionService
    ) -> FlagQuestionUseCase:
        """Provide flag question use case."""
        return FlagQuestionUseCase(question_service=question_service)

    # Answer use cases
    @provide(scope=Scope.REQUEST)
    def get_create_answer_use_case(
        self, answer_service: AnswerService
    ) -> CreateAnswerUseCase:
        """Provide create answer use case."""
        return CreateAnswerUseCase(answer_service=answer_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_answer_use_case(
        self, answer_service: AnswerService
    ) -> EditAnswerUseCase:
        """Provide edit answer use case."""
        return EditAnswerUseCase(answer_service=answer_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_best_answer_use_case(
        self, answer_service: AnswerService
    ) -> MarkBestAnswerUseCase:
        """Provide mark best answer use case."""
        return MarkBestAnswerUseCase(answer_service=answer_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self, comment_service: CommentService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Community use cases
    @provide(scope=Scope.REQUEST)
    def get_community_stats_use_case(
        self, question_service: QuestionService
    ) -> CommunityStatsUseCase:
        """Provide community stats use case."""
        return CommunityStatsUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_user_activity_use_case(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        community_settings: CommunitySettings,
    ) -> UserActivityUseCase:
        """Provide user activity use case."""
        return UserActivityUseCase(
            question_repository=question_repository,
            answer_repository=answer_repository,
            community_settings=community_settings,
        )

    # Chat use cases
    @provide(scope=Scope.REQUEST)
    def get_get_or_create_conversation_use_case(
        self, conversation_service: ConversationService
    ) -> GetOrCreateConversationUseCase:
        """Provide get-or-create conversation use case."""
        return GetOrCreateConversationUseCase(
            conversation_service=conversation_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_conversations_use_case(
        self, conversation_service: ConversationService
    ) -> ListConversationsUseCase:
        """Provide list conversations use case."""
        return ListConversationsUseCase(conversation_service=conversation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_messages_use_case(
        self, message_service: MessageService
    ) -> ListMessagesUseCase:
        """Provide list messages use case."""
        return ListMessagesUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_send_message_use_case(
        self, message_service: MessageService
    ) -> SendMessageUseCase:
        """Provide send message use case (HTTP and WebSocket)."""
        return SendMessageUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_unread_count_use_case(
        self, conversation_service: ConversationService
    ) -> UnreadCountUseCase:
        """Provide unread count use case."""
        return UnreadCountUseCase(conversation_service=conversation_service)

    # Support desk use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_query_use_case(
        self, support_query_service: SupportQueryService
    ) -> SubmitQueryUseCase:
        """Provide submit query use case."""
        return SubmitQueryUseCase(support_query_service=support_query_service)

    @provide(scope=Scope.REQUEST)
    def get_list_queries_use_case(
        self, support_query_service: SupportQueryService
    ) -> ListQueriesUseCase:
        """Provide list queries use case."""
        return ListQueriesUseCase(support_query_service=support_query_service)

    @provide(scope=Scope.REQUEST)
    def get_get_query_use_case(
        self, support_query_service: SupportQueryService
    ) -> GetQueryUseCase:
        """Provide get query use case."""
        return GetQueryUseCase(support_query_service=support_query_service)

    @provide(scope=Scope.REQUEST)
    def get_update_query_status_use_case(
        self, support_query_service: SupportQueryService
    ) -> UpdateQueryStatusUseCase:
        """Provide query triage use case."""
        return UpdateQueryStatusUseCase(support_query_service=support_query_service)

    @provide(scope=Scope.REQUEST)
    def get_respond_to_query_use_case(
        self, support_query_service: SupportQueryService
    ) -> RespondToQueryUseCase:
        """Provide respond to query use case."""
        return RespondToQueryUseCase(support_query_service=support_query_service)

    @provide(scope=Scope.REQUEST)
    def get_rate_query_use_case(
        self, support_query_service: SupportQueryService
    ) -> RateQueryUseCase:
        """Provide rate query use case."""
        return RateQueryUseCase(support_query_service=support_query_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_query_use_case(
        self, support_query_service: SupportQueryService
    ) -> DeleteQueryUseCase:
        """Provide delete query use case."""
        return DeleteQueryUseCase(support_query_service=support_query_service)

    @provide(scope=Scope.REQUEST)
    def get_query_stats_use_case(
        self, support_query_service: SupportQueryService
    ) -> QueryStatsUseCase:
        """Provide support desk stats use case."""
        return QueryStatsUseCase(support_query_service=support_query_service)
