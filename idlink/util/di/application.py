"""Application layer DI providers."""

from dishka import Scope, provide

from idlink.adapter.github import GitHubProfileClient
from idlink.application.usecase.account import (
    GetPreferencesUseCase,
    InitiateLinkUseCase,
    UpdatePreferencesUseCase,
)
from idlink.application.usecase.profile import (
    ConfirmProfileUpdateUseCase,
    GetAggregatedProfileUseCase,
    PrepareProfileUpdateUseCase,
)
from idlink.config import Settings
from idlink.domain.repository import AccountRepository
from idlink.domain.service import (
    AccountLinkService,
    PreferenceService,
    ProfileMerger,
    SignedUpdateCoordinator,
)
from idlink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_initiate_link_use_case(
        self, link_service: AccountLinkService, settings: Settings
    ) -> InitiateLinkUseCase:
        """Provide initiate link use case."""
        return InitiateLinkUseCase(link_service=link_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_get_preferences_use_case(
        self, account_repository: AccountRepository
    ) -> GetPreferencesUseCase:
        """Provide get preferences use case."""
        return GetPreferencesUseCase(account_repository=account_repository)

    @provide(scope=Scope.REQUEST)
    def get_update_preferences_use_case(
        self,
        preference_service: PreferenceService,
        account_repository: AccountRepository,
    ) -> UpdatePreferencesUseCase:
        """Provide update preferences use case."""
        return UpdatePreferencesUseCase(
            preference_service=preference_service,
            account_repository=account_repository,
        )

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_get_aggregated_profile_use_case(
        self,
        account_repository: AccountRepository,
        profile_merger: ProfileMerger,
        github_client: GitHubProfileClient,
    ) -> GetAggregatedProfileUseCase:
        """Provide get aggregated profile use case."""
        return GetAggregatedProfileUseCase(
            account_repository=account_repository,
            profile_merger=profile_merger,
            github_client=github_client,
        )

    @provide(scope=Scope.REQUEST)
    def get_prepare_profile_update_use_case(
        self,
        account_repository: AccountRepository,
        coordinator: SignedUpdateCoordinator,
    ) -> PrepareProfileUpdateUseCase:
        """Provide prepare profile update use case."""
        return PrepareProfileUpdateUseCase(
            account_repository=account_repository, coordinator=coordinator
        )

    @provide(scope=Scope.REQUEST)
    def get_confirm_profile_update_use_case(
        self,
        account_repository: AccountRepository,
        coordinator: SignedUpdateCoordinator,
    ) -> ConfirmProfileUpdateUseCase:
        """Provide confirm profile update use case."""
        return ConfirmProfileUpdateUseCase(
            account_repository=account_repository, coordinator=coordinator
        )
