"""Buyer/seller chat routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from bazaar.application.usecase.auth import GetCurrentUserUseCase
from bazaar.application.usecase.chat import (
    GetOrCreateConversationRequest,
    GetOrCreateConversationResponse,
    GetOrCreateConversationUseCase,
    ListConversationsRequest,
    ListConversationsResponse,
    ListConversationsUseCase,
    ListMessagesRequest,
    ListMessagesResponse,
    ListMessagesUseCase,
    MessageItem,
    SendMessageRequest,
    SendMessageUseCase,
    UnreadCountRequest,
    UnreadCountResponse,
    UnreadCountUseCase,
)
from bazaar.domain.value import MessageType
from bazaar.interface.api.auth import require_principal
from bazaar.interface.api.errors import Envelope, envelope

router = APIRouter(prefix="/chat", tags=["chat"], route_class=DishkaRoute)


class StartConversationAPIRequest(BaseModel):
    """API request for contacting the seller of an item."""

    item_id: UUID


class SendMessageAPIRequest(BaseModel):
    """API request for sending a chat message."""

    conversation_id: UUID
    body: str
    message_type: MessageType = MessageType.TEXT


@router.post("/conversations", response_model=Envelope[GetOrCreateConversationResponse])
async def get_or_create_conversation(
    request: StartConversationAPIRequest,
    get_or_create_use_case: FromDishka[GetOrCreateConversationUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[GetOrCreateConversationResponse]:
    """Open the caller's conversation about an item, creating it on first contact.

    Raises:
        NotFoundError: If the item does not exist
        InvalidOperationError: If the caller owns the item
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await get_or_create_use_case.execute(
        GetOrCreateConversationRequest(item_id=str(request.item_id), buyer=principal)
    )
    return envelope(result)


@router.get("/conversations", response_model=Envelope[ListConversationsResponse])
async def list_conversations(
    list_conversations_use_case: FromDishka[ListConversationsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[ListConversationsResponse]:
    """The caller's active conversations, most recent message first."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await list_conversations_use_case.execute(
        ListConversationsRequest(user_id=str(principal.id))
    )
    return envelope(result)


@router.get(
    "/conversations/{conversation_id}/messages",
    response_model=Envelope[ListMessagesResponse],
)
async def list_messages(
    conversation_id: UUID,
    list_messages_use_case: FromDishka[ListMessagesUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
) -> Envelope[ListMessagesResponse]:
    """Read a page of messages, oldest first within the page.

    Reading marks the other side's messages as read.

    Raises:
        ForbiddenError: If the caller is not a participant
    """
    principal = await require_principal(get_current_user_use_case, token)
    result = await list_messages_use_case.execute(
        ListMessagesRequest(
            conversation_id=str(conversation_id),
            reader_id=str(principal.id),
            page=page,
            limit=limit,
        )
    )
    return envelope(result)


@router.post(
    "/messages",
    response_model=Envelope[MessageItem],
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    request: SendMessageAPIRequest,
    send_message_use_case: FromDishka[SendMessageUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[MessageItem]:
    """Send a message into a conversation the caller takes part in."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await send_message_use_case.execute(
        SendMessageRequest(
            conversation_id=str(request.conversation_id),
            sender_id=str(principal.id),
            body=request.body,
            message_type=request.message_type,
        )
    )
    return envelope(result)


@router.get("/unread-count", response_model=Envelope[UnreadCountResponse])
async def unread_count(
    unread_count_use_case: FromDishka[UnreadCountUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[UnreadCountResponse]:
    """Messages from the other side the caller has not read yet."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await unread_count_use_case.execute(
        UnreadCountRequest(user_id=str(principal.id))
    )
    return envelope(result)
