"""initial_schema

Create the schema for Bazaar:
- Users and items (the parts of the marketplace the other features rely on)
- Questions, question views and moderation flags
- Answers (with edit history), comments and votes
- Conversations, messages and read receipts
- Support queries

Revision ID: 3c1f0d9a7b21
Revises:
Create Date: 2024-05-01 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0d9a7b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUMS: dict[str, tuple[str, ...]] = {
    "user_role": ("user", "admin"),
    "question_category": (
        "property-buying",
        "property-selling",
        "rental",
        "investment",
        "legal",
        "financing",
        "maintenance",
        "technology",
        "general",
        "market-trends",
    ),
    "question_status": ("active", "closed", "deleted", "pending-review"),
    "flag_reason": ("spam", "inappropriate", "off-topic", "duplicate", "other"),
    "answer_acceptance": ("normal", "best"),
    "answer_status": ("active", "deleted", "pending-review", "hidden"),
    "votable_type": ("question", "answer", "comment"),
    "vote_type": ("upvote", "downvote"),
    "message_type": ("text", "image", "system"),
    "system_message_type": ("join", "leave", "item_sold", "item_unavailable"),
    "support_category": (
        "general",
        "property",
        "item",
        "technical",
        "billing",
        "complaint",
        "suggestion",
    ),
    "support_priority": ("low", "medium", "high", "urgent"),
    "support_status": ("pending", "in-progress", "resolved", "closed"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS and ITEMS
    # ========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("role", _enum("user_role"), nullable=False, server_default="user"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    op.create_table(
        "items",
        _id(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default="true"),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_items_owner_id", "items", ["owner_id"])

    # ========================================================================
    # QUESTIONS table
    # ========================================================================
    op.create_table(
        "questions",
        _id(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column(
            "category",
            _enum("question_category"),
            nullable=False,
            server_default="general",
        ),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("vote_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("answer_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("best_answer_id", sa.UUID(), nullable=True),
        sa.Column(
            "status",
            _enum("question_status"),
            nullable=False,
            server_default="active",
        ),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("last_activity"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("view_count >= 0", name="view_count_non_negative"),
        sa.CheckConstraint("answer_count >= 0", name="answer_count_non_negative"),
    )
    op.create_index(
        "idx_questions_status_activity",
        "questions",
        ["status", sa.text("last_activity DESC")],
    )
    op.create_index("idx_questions_category", "questions", ["category"])
    op.create_index("idx_questions_author_id", "questions", ["author_id"])
    # GIN index for tag any-of filters
    op.execute("CREATE INDEX idx_questions_tags ON questions USING GIN(tags)")

    op.create_table(
        "question_views",
        _id(),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column("viewer_id", sa.UUID(), nullable=False),
        sa.Column("viewed_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["viewer_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_question_views_lookup",
        "question_views",
        ["question_id", "viewer_id", sa.text("viewed_at DESC")],
    )

    op.create_table(
        "question_flags",
        _id(),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column("reporter_id", sa.UUID(), nullable=False),
        sa.Column("reason", _enum("flag_reason"), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        _timestamp("flagged_at"),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default="false"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reporter_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_question_flags_question_id", "question_flags", ["question_id"]
    )

    # ========================================================================
    # ANSWERS, COMMENTS and VOTES
    # ========================================================================
    op.create_table(
        "answers",
        _id(),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("vote_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "acceptance",
            _enum("answer_acceptance"),
            nullable=False,
            server_default="normal",
        ),
        sa.Column(
            "status", _enum("answer_status"), nullable=False, server_default="active"
        ),
        sa.Column(
            "edit_history",
            postgresql.JSONB(),
            nullable=False,
            server_default="[]",
        ),
        sa.Column("last_edited_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_answers_question_id", "answers", ["question_id"])
    op.create_index("idx_answers_author_id", "answers", ["author_id"])
    # At most one best answer per question
    op.create_index(
        "idx_answers_unique_best",
        "answers",
        ["question_id"],
        unique=True,
        postgresql_where=sa.text("acceptance = 'best'"),
    )
    op.create_foreign_key(
        "fk_questions_best_answer",
        "questions",
        "answers",
        ["best_answer_id"],
        ["id"],
        ondelete="SET NULL",
    )

    op.create_table(
        "comments",
        _id(),
        sa.Column("answer_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.String(1000), nullable=False),
        sa.Column("vote_score", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["answer_id"], ["answers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("vote_score >= 0", name="comment_score_non_negative"),
    )
    op.create_index("idx_comments_answer_id", "comments", ["answer_id"])

    op.create_table(
        "votes",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("votable_type", _enum("votable_type"), nullable=False),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("vote_type", _enum("vote_type"), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])

    # ========================================================================
    # CONVERSATIONS, MESSAGES and MESSAGE_READS
    # ========================================================================
    op.create_table(
        "conversations",
        _id(),
        sa.Column("item_id", sa.UUID(), nullable=False),
        sa.Column("seller_id", sa.UUID(), nullable=False),
        sa.Column("buyer_id", sa.UUID(), nullable=False),
        sa.Column("last_message", sa.Text(), nullable=False, server_default=""),
        _timestamp("last_message_at"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("seller_last_read_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("buyer_last_read_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["item_id"], ["items.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["seller_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["buyer_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "item_id", "seller_id", "buyer_id", name="uq_conversation_triple"
        ),
        sa.CheckConstraint("seller_id <> buyer_id", name="seller_is_not_buyer"),
    )
    op.create_index("idx_conversations_seller", "conversations", ["seller_id"])
    op.create_index("idx_conversations_buyer", "conversations", ["buyer_id"])

    op.create_table(
        "messages",
        _id(),
        sa.Column("conversation_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("body", sa.String(1000), nullable=False),
        sa.Column(
            "message_type", _enum("message_type"), nullable=False, server_default="text"
        ),
        sa.Column("system_subtype", _enum("system_message_type"), nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(
            ["conversation_id"], ["conversations.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_messages_conversation_created",
        "messages",
        ["conversation_id", sa.text("created_at DESC")],
    )

    op.create_table(
        "message_reads",
        sa.Column("message_id", sa.UUID(), nullable=False),
        sa.Column("reader_id", sa.UUID(), nullable=False),
        sa.Column("read_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reader_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("message_id", "reader_id", name="pk_message_reads"),
    )

    # ========================================================================
    # SUPPORT_QUERIES table
    # ========================================================================
    op.create_table(
        "support_queries",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("subject", sa.String(200), nullable=False),
        sa.Column("message", sa.String(2000), nullable=False),
        sa.Column(
            "category",
            _enum("support_category"),
            nullable=False,
            server_default="general",
        ),
        sa.Column(
            "priority",
            _enum("support_priority"),
            nullable=False,
            server_default="medium",
        ),
        sa.Column(
            "status", _enum("support_status"), nullable=False, server_default="pending"
        ),
        sa.Column("response_message", sa.String(2000), nullable=True),
        sa.Column("responded_by", sa.UUID(), nullable=True),
        sa.Column("responded_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("assigned_to", sa.UUID(), nullable=True),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("resolved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("satisfaction_rating", sa.Integer(), nullable=True),
        sa.Column("satisfaction_feedback", sa.String(500), nullable=True),
        sa.Column("satisfaction_rated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["responded_by"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "satisfaction_rating IS NULL OR satisfaction_rating BETWEEN 1 AND 5",
            name="satisfaction_rating_range",
        ),
    )
    op.create_index("idx_support_queries_user_id", "support_queries", ["user_id"])
    op.create_index("idx_support_queries_status", "support_queries", ["status"])
    op.create_index(
        "idx_support_queries_created_at",
        "support_queries",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("support_queries")
    op.drop_table("message_reads")
    op.drop_table("messages")
    op.drop_table("conversations")
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_constraint("fk_questions_best_answer", "questions", type_="foreignkey")
    op.drop_table("answers")
    op.drop_table("question_flags")
    op.drop_table("question_views")
    op.drop_table("questions")
    op.drop_table("items")
    op.drop_table("users")

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
