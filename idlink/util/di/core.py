"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from idlink.config import AuthSettings, ProfileSettings, Settings
from idlink.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings from environment variables and .env file."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_profile_settings(self, settings: Settings) -> ProfileSettings:
        return settings.profile
