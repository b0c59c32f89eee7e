"""Domain layer DI providers."""

from dishka import Scope, provide

from idlink.config import AuthSettings, ProfileSettings
from idlink.domain.service import (
    AccountLinkService,
    JWTService,
    PreferenceService,
    ProfileMerger,
    SignedUpdateCoordinator,
)
from idlink.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Services hold no per-request state; they are REQUEST-scoped to match
    the repositories the use cases combine them with.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT session domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_link_service(self) -> AccountLinkService:
        """Provide account link domain service."""
        return AccountLinkService()

    @provide
    def get_profile_merger(self, profile_settings: ProfileSettings) -> ProfileMerger:
        """Provide profile merger."""
        return ProfileMerger(default_avatar_base=profile_settings.default_avatar_base)

    @provide
    def get_signed_update_coordinator(
        self, profile_settings: ProfileSettings
    ) -> SignedUpdateCoordinator:
        """Provide signed update coordinator with the configured signer timeout."""
        return SignedUpdateCoordinator(
            timeout=profile_settings.signing_timeout_seconds
        )

    @provide
    def get_preference_service(self) -> PreferenceService:
        """Provide preference validation service."""
        return PreferenceService()
