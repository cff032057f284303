"""Real-time channel DI providers."""

from dishka import Scope, provide

from bazaar.interface.api.realtime import ChatRoomHub
from bazaar.util.di.base import ProviderBase


class ProdRealtimeProvider(ProviderBase):
    """Chat room hub shared by every WebSocket connection of the process."""

    @provide(scope=Scope.APP)
    def get_chat_room_hub(self) -> ChatRoomHub:
        """Provide the in-process chat room hub."""
        return ChatRoomHub()
