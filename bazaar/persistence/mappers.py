"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping. Computed fields such
as ``is_answered`` are never written; they are derived again on load.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from bazaar.domain.model import (
    Answer,
    AnswerEdit,
    Comment,
    Conversation,
    Item,
    Message,
    Question,
    QuestionFlag,
    ReadReceipt,
    SupportQuery,
    User,
    Vote,
)
from bazaar.domain.model.support_query import AdminResponse, SatisfactionRating
from bazaar.domain.value import (
    AnswerAcceptance,
    AnswerId,
    AnswerStatus,
    CommentId,
    ConversationId,
    FlagReason,
    ItemId,
    MessageId,
    MessageType,
    QuestionCategory,
    QuestionId,
    QuestionStatus,
    Role,
    SupportCategory,
    SupportPriority,
    SupportQueryId,
    SupportStatus,
    SystemMessageType,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        email=row.get("email"),
        phone_number=row.get("phone_number"),
        role=Role(row["role"]),
        is_verified=row["is_verified"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone_number": user.phone_number,
        "role": user.role.value,
        "is_verified": user.is_verified,
        "created_at": user.created_at,
    }


def row_to_item(row: Dict[str, Any]) -> Item:
    """Convert database row to Item domain model."""
    return Item(
        id=ItemId(_uuid(row["id"])),
        title=row["title"],
        price=Decimal(row["price"]),
        owner_id=UserId(_uuid(row["owner_id"])),
        is_available=row["is_available"],
        created_at=row["created_at"],
    )


def item_to_dict(item: Item) -> Dict[str, Any]:
    """Convert Item domain model to database dict."""
    return {
        "id": item.id,
        "title": item.title,
        "price": item.price,
        "owner_id": item.owner_id,
        "is_available": item.is_available,
        "created_at": item.created_at,
    }


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model.

    Args:
        row: Database row as dict

    Returns:
        Question domain model
    """
    best_answer_id = _optional_uuid(row.get("best_answer_id"))
    return Question(
        id=QuestionId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        author_id=UserId(_uuid(row["author_id"])),
        category=QuestionCategory(row["category"]),
        tags=list(row.get("tags") or []),
        vote_score=row["vote_score"],
        view_count=row["view_count"],
        answer_count=row["answer_count"],
        best_answer_id=AnswerId(best_answer_id) if best_answer_id else None,
        status=QuestionStatus(row["status"]),
        is_pinned=row["is_pinned"],
        last_activity=row["last_activity"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict.

    Args:
        question: Question domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": question.id,
        "title": question.title,
        "content": question.content,
        "author_id": question.author_id,
        "category": question.category.value,
        "tags": list(question.tags),
        "vote_score": question.vote_score,
        "view_count": question.view_count,
        "answer_count": question.answer_count,
        "best_answer_id": question.best_answer_id,
        "status": question.status.value,
        "is_pinned": question.is_pinned,
        "last_activity": question.last_activity,
        "created_at": question.created_at,
        "updated_at": question.updated_at,
    }


def row_to_question_flag(row: Dict[str, Any]) -> QuestionFlag:
    """Convert database row to QuestionFlag domain model."""
    return QuestionFlag(
        question_id=QuestionId(_uuid(row["question_id"])),
        reporter_id=UserId(_uuid(row["reporter_id"])),
        reason=FlagReason(row["reason"]),
        description=row.get("description"),
        flagged_at=row["flagged_at"],
        resolved=row["resolved"],
    )


def question_flag_to_dict(flag: QuestionFlag) -> Dict[str, Any]:
    """Convert QuestionFlag domain model to database dict."""
    return {
        "question_id": flag.question_id,
        "reporter_id": flag.reporter_id,
        "reason": flag.reason.value,
        "description": flag.description,
        "flagged_at": flag.flagged_at,
        "resolved": flag.resolved,
    }


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model.

    The edit history is stored as a JSONB array of revisions.

    Args:
        row: Database row as dict

    Returns:
        Answer domain model
    """
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        vote_score=row["vote_score"],
        acceptance=AnswerAcceptance(row["acceptance"]),
        status=AnswerStatus(row["status"]),
        edit_history=[
            AnswerEdit.model_validate(entry) for entry in row.get("edit_history") or []
        ],
        last_edited_at=row.get("last_edited_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict.

    Args:
        answer: Answer domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": answer.id,
        "question_id": answer.question_id,
        "author_id": answer.author_id,
        "content": answer.content,
        "vote_score": answer.vote_score,
        "acceptance": answer.acceptance.value,
        "status": answer.status.value,
        "edit_history": [edit.model_dump(mode="json") for edit in answer.edit_history],
        "last_edited_at": answer.last_edited_at,
        "created_at": answer.created_at,
        "updated_at": answer.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(_uuid(row["id"])),
        answer_id=AnswerId(_uuid(row["answer_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        vote_score=row["vote_score"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return {
        "id": comment.id,
        "answer_id": comment.answer_id,
        "author_id": comment.author_id,
        "content": comment.content,
        "vote_score": comment.vote_score,
        "created_at": comment.created_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "vote_type": vote.vote_type.value,
        "created_at": vote.created_at,
    }


def row_to_conversation(row: Dict[str, Any]) -> Conversation:
    """Convert database row to Conversation domain model."""
    return Conversation(
        id=ConversationId(_uuid(row["id"])),
        item_id=ItemId(_uuid(row["item_id"])),
        seller_id=UserId(_uuid(row["seller_id"])),
        buyer_id=UserId(_uuid(row["buyer_id"])),
        last_message=row["last_message"],
        last_message_at=row["last_message_at"],
        is_active=row["is_active"],
        seller_last_read_at=row.get("seller_last_read_at"),
        buyer_last_read_at=row.get("buyer_last_read_at"),
        created_at=row["created_at"],
    )


def conversation_to_dict(conversation: Conversation) -> Dict[str, Any]:
    """Convert Conversation domain model to database dict."""
    return {
        "id": conversation.id,
        "item_id": conversation.item_id,
        "seller_id": conversation.seller_id,
        "buyer_id": conversation.buyer_id,
        "last_message": conversation.last_message,
        "last_message_at": conversation.last_message_at,
        "is_active": conversation.is_active,
        "seller_last_read_at": conversation.seller_last_read_at,
        "buyer_last_read_at": conversation.buyer_last_read_at,
        "created_at": conversation.created_at,
    }


def row_to_message(
    row: Dict[str, Any], receipts: Iterable[Dict[str, Any]] = ()
) -> Message:
    """Convert a message row and its read receipt rows to a Message.

    Args:
        row: Message row as dict
        receipts: Rows of ``message_reads`` for this message

    Returns:
        Message domain model
    """
    subtype = row.get("system_subtype")
    return Message(
        id=MessageId(_uuid(row["id"])),
        conversation_id=ConversationId(_uuid(row["conversation_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        body=row["body"],
        message_type=MessageType(row["message_type"]),
        system_subtype=SystemMessageType(subtype) if subtype else None,
        read_by=[
            ReadReceipt(reader_id=UserId(_uuid(r["reader_id"])), read_at=r["read_at"])
            for r in sorted(receipts, key=lambda r: r["read_at"])
        ],
        created_at=row["created_at"],
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message domain model to database dict (receipts excluded)."""
    return {
        "id": message.id,
        "conversation_id": message.conversation_id,
        "sender_id": message.sender_id,
        "body": message.body,
        "message_type": message.message_type.value,
        "system_subtype": (
            message.system_subtype.value if message.system_subtype else None
        ),
        "created_at": message.created_at,
    }


def row_to_support_query(row: Dict[str, Any]) -> SupportQuery:
    """Convert database row to SupportQuery domain model.

    The admin response and satisfaction rating are flattened into columns
    and rebuilt here when present.

    Args:
        row: Database row as dict

    Returns:
        SupportQuery domain model
    """
    admin_response = None
    if row.get("response_message") is not None:
        admin_response = AdminResponse(
            message=row["response_message"],
            responded_by=UserId(_uuid(row["responded_by"])),
            responded_at=row["responded_at"],
        )

    satisfaction = None
    if row.get("satisfaction_rating") is not None:
        satisfaction = SatisfactionRating(
            rating=row["satisfaction_rating"],
            feedback=row.get("satisfaction_feedback"),
            rated_at=row["satisfaction_rated_at"],
        )

    assigned_to = _optional_uuid(row.get("assigned_to"))
    return SupportQuery(
        id=SupportQueryId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        name=row["name"],
        email=row.get("email"),
        phone=row.get("phone"),
        subject=row["subject"],
        message=row["message"],
        category=SupportCategory(row["category"]),
        priority=SupportPriority(row["priority"]),
        status=SupportStatus(row["status"]),
        admin_response=admin_response,
        assigned_to=UserId(assigned_to) if assigned_to else None,
        tags=list(row.get("tags") or []),
        resolved_at=row.get("resolved_at"),
        satisfaction=satisfaction,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def support_query_to_dict(query: SupportQuery) -> Dict[str, Any]:
    """Convert SupportQuery domain model to database dict."""
    response = query.admin_response
    satisfaction = query.satisfaction
    return {
        "id": query.id,
        "user_id": query.user_id,
        "name": query.name,
        "email": query.email,
        "phone": query.phone,
        "subject": query.subject,
        "message": query.message,
        "category": query.category.value,
        "priority": query.priority.value,
        "status": query.status.value,
        "response_message": response.message if response else None,
        "responded_by": response.responded_by if response else None,
        "responded_at": response.responded_at if response else None,
        "assigned_to": query.assigned_to,
        "tags": list(query.tags),
        "resolved_at": query.resolved_at,
        "satisfaction_rating": satisfaction.rating if satisfaction else None,
        "satisfaction_feedback": satisfaction.feedback if satisfaction else None,
        "satisfaction_rated_at": satisfaction.rated_at if satisfaction else None,
        "created_at": query.created_at,
        "updated_at": query.updated_at,
    }
