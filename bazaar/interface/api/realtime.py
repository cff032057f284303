"""In-process room hub for the chat WebSocket channel.

Each conversation is a room. Sockets join the rooms of conversations their
user takes part in, and events are fanned out to every other socket in the
room. State lives in this process only.
"""

import asyncio
from collections import defaultdict
from typing import Any

import logfire
from fastapi.websockets import WebSocket, WebSocketDisconnect, WebSocketState


async def safe_send_json(websocket: WebSocket, data: dict[str, Any]) -> bool:
    """Send JSON through a websocket, tolerating closed connections.

    Returns:
        True if the frame was sent
    """
    if websocket.application_state != WebSocketState.CONNECTED:
        return False
    try:
        await websocket.send_json(data)
        return True
    except (WebSocketDisconnect, RuntimeError) as e:
        logfire.debug("Failed to send websocket frame", error=str(e))
        return False


class ChatRoomHub:
    """Tracks which sockets listen to which conversation."""

    def __init__(self) -> None:
        self._rooms: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def join(self, room: str, websocket: WebSocket) -> None:
        async with self._lock:
            self._rooms[room].add(websocket)

    async def leave(self, room: str, websocket: WebSocket) -> None:
        async with self._lock:
            members = self._rooms.get(room)
            if members is None:
                return
            members.discard(websocket)
            if not members:
                self._rooms.pop(room, None)

    async def disconnect(self, websocket: WebSocket) -> None:
        """Drop a socket from every room it joined."""
        async with self._lock:
            for room in [r for r, members in self._rooms.items() if websocket in members]:
                self._rooms[room].discard(websocket)
                if not self._rooms[room]:
                    self._rooms.pop(room, None)

    async def broadcast(
        self, room: str, data: dict[str, Any], exclude: WebSocket | None = None
    ) -> int:
        """Send a frame to every socket in a room except ``exclude``.

        Returns:
            Number of sockets the frame reached
        """
        async with self._lock:
            targets = [ws for ws in self._rooms.get(room, ()) if ws is not exclude]
        delivered = 0
        for websocket in targets:
            if await safe_send_json(websocket, data):
                delivered += 1
        return delivered

    def is_member(self, room: str, websocket: WebSocket) -> bool:
        return websocket in self._rooms.get(room, ())
