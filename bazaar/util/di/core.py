"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from bazaar.config import AuthSettings, ChatSettings, CommunitySettings, Settings
from bazaar.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_community_settings(self, settings: Settings) -> CommunitySettings:
        """Provide community Q&A settings."""
        return settings.community

    @provide(scope=Scope.APP)
    def provide_chat_settings(self, settings: Settings) -> ChatSettings:
        """Provide chat settings."""
        return settings.chat
