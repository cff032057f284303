"""SQLAlchemy table definitions for Bazaar.

These Core tables are used by the Postgres repositories.
They match the schema defined in Alembic migrations.
"""

from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

from bazaar.domain.value import (
    AnswerAcceptance,
    AnswerStatus,
    FlagReason,
    MessageType,
    QuestionCategory,
    QuestionStatus,
    Role,
    SupportCategory,
    SupportPriority,
    SupportStatus,
    SystemMessageType,
    VotableType,
    VoteType,
)

# Metadata object for all tables
metadata = MetaData()


def _enum(enum_cls: type[PyEnum], name: str) -> postgresql.ENUM:
    """Postgres ENUM over the values of a domain enum (type created in migrations)."""
    return postgresql.ENUM(
        *[member.value for member in enum_cls], name=name, create_type=False
    )


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=True),
    Column("phone_number", String(20), nullable=True),
    Column("role", _enum(Role, "user_role"), nullable=False, server_default="user"),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# ITEMS TABLE (only the listing fields chat depends on)
# ============================================================================
items_table = Table(
    "items",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(200), nullable=False),
    Column("price", Numeric(12, 2), nullable=False, server_default="0"),
    Column(
        "owner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("is_available", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_items_owner_id", items_table.c.owner_id)

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "category",
        _enum(QuestionCategory, "question_category"),
        nullable=False,
        server_default="general",
    ),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("vote_score", Integer, nullable=False, server_default="0"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("answer_count", Integer, nullable=False, server_default="0"),
    Column("best_answer_id", UUID, nullable=True),  # FK added after answers exist
    Column(
        "status",
        _enum(QuestionStatus, "question_status"),
        nullable=False,
        server_default="active",
    ),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column(
        "last_activity",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("view_count >= 0", name="view_count_non_negative"),
    CheckConstraint("answer_count >= 0", name="answer_count_non_negative"),
)

Index(
    "idx_questions_status_activity",
    questions_table.c.status,
    questions_table.c.last_activity.desc(),
)
Index("idx_questions_category", questions_table.c.category)
Index("idx_questions_author_id", questions_table.c.author_id)
# Note: GIN index on tags is created in migration, not here

# ============================================================================
# QUESTION_VIEWS TABLE (bounded per-question view history)
# ============================================================================
question_views_table = Table(
    "question_views",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "viewer_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("viewed_at", TIMESTAMP(timezone=True), nullable=False),
)

Index(
    "idx_question_views_lookup",
    question_views_table.c.question_id,
    question_views_table.c.viewer_id,
    question_views_table.c.viewed_at.desc(),
)

# ============================================================================
# QUESTION_FLAGS TABLE
# ============================================================================
question_flags_table = Table(
    "question_flags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "reporter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("reason", _enum(FlagReason, "flag_reason"), nullable=False),
    Column("description", String(500), nullable=True),
    Column(
        "flagged_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("resolved", Boolean, nullable=False, server_default="false"),
)

Index("idx_question_flags_question_id", question_flags_table.c.question_id)

# ============================================================================
# ANSWERS TABLE
# ============================================================================
answers_table = Table(
    "answers",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column("vote_score", Integer, nullable=False, server_default="0"),
    Column(
        "acceptance",
        _enum(AnswerAcceptance, "answer_acceptance"),
        nullable=False,
        server_default="normal",
    ),
    Column(
        "status",
        _enum(AnswerStatus, "answer_status"),
        nullable=False,
        server_default="active",
    ),
    Column("edit_history", JSONB, nullable=False, server_default="[]"),
    Column("last_edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_answers_question_id", answers_table.c.question_id)
Index("idx_answers_author_id", answers_table.c.author_id)

# At most one best answer per question
Index(
    "idx_answers_unique_best",
    answers_table.c.question_id,
    unique=True,
    postgresql_where=answers_table.c.acceptance == AnswerAcceptance.BEST.value,
)

# ============================================================================
# COMMENTS TABLE (child collection of answers)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "answer_id", UUID, ForeignKey("answers.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", String(1000), nullable=False),
    Column("vote_score", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("vote_score >= 0", name="comment_score_non_negative"),
)

Index("idx_comments_answer_id", comments_table.c.answer_id)

# ============================================================================
# VOTES TABLE (one row per voter and target)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("votable_type", _enum(VotableType, "votable_type"), nullable=False),
    Column("votable_id", UUID, nullable=False),
    Column("vote_type", _enum(VoteType, "vote_type"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)

# ============================================================================
# CONVERSATIONS TABLE
# ============================================================================
conversations_table = Table(
    "conversations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("item_id", UUID, ForeignKey("items.id", ondelete="CASCADE"), nullable=False),
    Column(
        "seller_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "buyer_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("last_message", Text, nullable=False, server_default=""),
    Column(
        "last_message_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("seller_last_read_at", TIMESTAMP(timezone=True), nullable=True),
    Column("buyer_last_read_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("item_id", "seller_id", "buyer_id", name="uq_conversation_triple"),
    CheckConstraint("seller_id <> buyer_id", name="seller_is_not_buyer"),
)

Index("idx_conversations_seller", conversations_table.c.seller_id)
Index("idx_conversations_buyer", conversations_table.c.buyer_id)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "conversation_id",
        UUID,
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "sender_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("body", String(1000), nullable=False),
    Column(
        "message_type",
        _enum(MessageType, "message_type"),
        nullable=False,
        server_default="text",
    ),
    Column(
        "system_subtype", _enum(SystemMessageType, "system_message_type"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_messages_conversation_created",
    messages_table.c.conversation_id,
    messages_table.c.created_at.desc(),
)

# ============================================================================
# MESSAGE_READS TABLE (read receipts)
# ============================================================================
message_reads_table = Table(
    "message_reads",
    metadata,
    Column(
        "message_id",
        UUID,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "reader_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("read_at", TIMESTAMP(timezone=True), nullable=False),
    PrimaryKeyConstraint("message_id", "reader_id", name="pk_message_reads"),
)

# ============================================================================
# SUPPORT_QUERIES TABLE
# ============================================================================
support_queries_table = Table(
    "support_queries",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=True),
    Column("phone", String(20), nullable=True),
    Column("subject", String(200), nullable=False),
    Column("message", String(2000), nullable=False),
    Column(
        "category",
        _enum(SupportCategory, "support_category"),
        nullable=False,
        server_default="general",
    ),
    Column(
        "priority",
        _enum(SupportPriority, "support_priority"),
        nullable=False,
        server_default="medium",
    ),
    Column(
        "status",
        _enum(SupportStatus, "support_status"),
        nullable=False,
        server_default="pending",
    ),
    Column("response_message", String(2000), nullable=True),
    Column(
        "responded_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("responded_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "assigned_to", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("resolved_at", TIMESTAMP(timezone=True), nullable=True),
    Column("satisfaction_rating", Integer, nullable=True),
    Column("satisfaction_feedback", String(500), nullable=True),
    Column("satisfaction_rated_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "satisfaction_rating IS NULL OR satisfaction_rating BETWEEN 1 AND 5",
        name="satisfaction_rating_range",
    ),
)

Index("idx_support_queries_user_id", support_queries_table.c.user_id)
Index("idx_support_queries_status", support_queries_table.c.status)
Index("idx_support_queries_created_at", support_queries_table.c.created_at.desc())
