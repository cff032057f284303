"""Real-time chat channel.

Clients connect to ``/chat/ws?token=...`` (or send the auth cookie) and
exchange JSON frames tagged with ``type``:

* ``join`` / ``leave`` a conversation room (participants only)
* ``send`` a message; other room members get ``message``, the sender gets
  ``message_sent``
* ``typing`` indicators from joined sockets, relayed to the other room members

Failures come back as ``error`` frames and never close the socket.
"""

from typing import Any
from uuid import UUID

import logfire
from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, status
from fastapi.websockets import WebSocketDisconnect

from bazaar.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
)
from bazaar.application.usecase.chat import SendMessageRequest, SendMessageUseCase
from bazaar.config import Settings
from bazaar.domain.error import DomainError, ErrorKind, ForbiddenError
from bazaar.domain.service import MessageService
from bazaar.domain.value import ConversationId, MessageType, Principal, UserId
from bazaar.interface.api.realtime import ChatRoomHub, safe_send_json

router = APIRouter(prefix="/chat", tags=["chat"])


async def _send_error(websocket: WebSocket, kind: str, message: str) -> None:
    await safe_send_json(websocket, {"type": "error", "kind": kind, "message": message})


async def _resolve_principal(
    websocket: WebSocket, container: AsyncContainer
) -> Principal | None:
    settings = await container.get(Settings)
    token = websocket.query_params.get("token") or websocket.cookies.get(
        settings.auth.cookie_name
    )
    if not token:
        return None
    async with container() as request_container:
        use_case = await request_container.get(GetCurrentUserUseCase)
        return await use_case.execute(GetCurrentUserRequest(token=token))


async def _join(
    websocket: WebSocket,
    container: AsyncContainer,
    hub: ChatRoomHub,
    principal: Principal,
    conversation_id: UUID,
) -> None:
    async with container() as request_container:
        message_service = await request_container.get(MessageService)
        await message_service.get_participant_conversation(
            ConversationId(conversation_id), UserId(principal.id)
        )
    room = str(conversation_id)
    await hub.join(room, websocket)
    await safe_send_json(websocket, {"type": "joined", "conversation_id": room})


async def _send(
    websocket: WebSocket,
    container: AsyncContainer,
    hub: ChatRoomHub,
    principal: Principal,
    conversation_id: UUID,
    frame: dict[str, Any],
) -> None:
    async with container() as request_container:
        use_case = await request_container.get(SendMessageUseCase)
        message = await use_case.execute(
            SendMessageRequest(
                conversation_id=str(conversation_id),
                sender_id=str(principal.id),
                body=str(frame.get("body", "")),
                message_type=MessageType(frame.get("message_type", MessageType.TEXT)),
            )
        )
    # The request container has committed, so the message is durable here
    data = message.model_dump(mode="json")
    await hub.broadcast(
        str(conversation_id), {"type": "message", "message": data}, exclude=websocket
    )
    await safe_send_json(websocket, {"type": "message_sent", "message": data})


async def _handle_frame(
    websocket: WebSocket,
    container: AsyncContainer,
    hub: ChatRoomHub,
    principal: Principal,
    frame: dict[str, Any],
) -> None:
    frame_type = frame.get("type")
    try:
        conversation_id = UUID(str(frame.get("conversation_id")))
    except ValueError:
        await _send_error(
            websocket, ErrorKind.VALIDATION_ERROR.value, "conversation_id is required"
        )
        return

    if frame_type == "join":
        await _join(websocket, container, hub, principal, conversation_id)
    elif frame_type == "leave":
        await hub.leave(str(conversation_id), websocket)
        await safe_send_json(
            websocket, {"type": "left", "conversation_id": str(conversation_id)}
        )
    elif frame_type == "send":
        await _send(websocket, container, hub, principal, conversation_id, frame)
    elif frame_type == "typing":
        if not hub.is_member(str(conversation_id), websocket):
            raise ForbiddenError("Join the conversation before sending typing events")
        await hub.broadcast(
            str(conversation_id),
            {
                "type": "typing",
                "conversation_id": str(conversation_id),
                "user_id": str(principal.id),
                "name": principal.name,
                "is_typing": bool(frame.get("is_typing", True)),
            },
            exclude=websocket,
        )
    else:
        await _send_error(
            websocket,
            ErrorKind.INVALID_OPERATION.value,
            f"Unknown frame type: {frame_type}",
        )


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket) -> None:
    """Real-time chat endpoint."""
    container: AsyncContainer = websocket.app.state.dishka_container
    principal = await _resolve_principal(websocket, container)
    if principal is None:
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION, reason="Authentication required"
        )
        return

    hub = await container.get(ChatRoomHub)
    await websocket.accept()
    logfire.info("Chat socket connected", user_id=str(principal.id))

    try:
        while True:
            try:
                frame = await websocket.receive_json()
            except ValueError:
                await _send_error(
                    websocket, ErrorKind.VALIDATION_ERROR.value, "Frames must be JSON"
                )
                continue
            if not isinstance(frame, dict):
                await _send_error(
                    websocket, ErrorKind.VALIDATION_ERROR.value, "Frames must be objects"
                )
                continue

            try:
                await _handle_frame(websocket, container, hub, principal, frame)
            except DomainError as e:
                await _send_error(websocket, e.kind.value, e.message)
            except ValueError as e:
                await _send_error(websocket, ErrorKind.VALIDATION_ERROR.value, str(e))
    except WebSocketDisconnect:
        pass
    finally:
        await hub.disconnect(websocket)
        logfire.info("Chat socket disconnected", user_id=str(principal.id))
